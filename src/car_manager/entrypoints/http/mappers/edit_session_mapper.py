from __future__ import annotations

from car_manager.domain.photo_set import ImageDiff
from car_manager.entrypoints.http.dtos.edit_sessions import EditSessionResponseDTO, ImageDiffDTO
from car_manager.entrypoints.http.mappers.car_mapper import CarMapper
from car_manager.use_cases.car_edit_session import CarEditSession


class EditSessionMapper:
    """Maps edit session state to REST DTOs."""

    @staticmethod
    def to_diff_dto(diff: ImageDiff) -> ImageDiffDTO:
        return ImageDiffDTO(add_urls=list(diff.add_urls), delete_urls=list(diff.delete_urls))

    @staticmethod
    def to_response(session_id: str, session: CarEditSession) -> EditSessionResponseDTO:
        """
        Snapshot of a loaded session: draft fields, working photo set, pending diff.

        Args:
            session_id: Registry id of the session
            session: A loaded edit session

        Returns:
            EditSessionResponseDTO including the last user-visible error
        """
        details = session.details
        return EditSessionResponseDTO(
            session_id=session_id,
            car_id=session.state.car_id,
            title=details.title,
            description=details.description,
            tags=CarMapper.to_tags_dto(details.tags),
            images=[CarMapper.to_image_dto(image) for image in session.current_images],
            pending=EditSessionMapper.to_diff_dto(session.compute_diff()),
            error=session.error,
        )
