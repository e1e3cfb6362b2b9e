from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from car_manager.domain.photo_set import ImageFile
from car_manager.entrypoints.http.dependencies import (
    get_car_repository,
    get_edit_session_registry,
    get_image_upload_gateway,
    get_inventory,
)
from car_manager.entrypoints.http.dtos.edit_sessions import (
    EditSessionResponseDTO,
    FieldsUpdateDTO,
    ImageDiffDTO,
    OpenEditSessionDTO,
    SubmitResponseDTO,
)
from car_manager.entrypoints.http.mappers.car_mapper import CarMapper
from car_manager.entrypoints.http.mappers.edit_session_mapper import EditSessionMapper
from car_manager.entrypoints.http.session_registry import EditSessionRegistry
from car_manager.ports.car_repository import CarRepository
from car_manager.ports.image_upload_gateway import ImageUploadGateway
from car_manager.use_cases.car_edit_session import CarEditSession
from car_manager.use_cases.inventory_query_engine import InventoryQueryEngine


router = APIRouter(prefix="/edit-sessions", tags=["Edit sessions"])


@router.post(
    "",
    response_model=EditSessionResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Open an edit session",
    description="""
    Load a car and start tracking edits to its fields and photos.

    Nothing is sent to the backend until the session is submitted. Photos are
    uploaded to the image host as soon as they are added; removals are deferred.
    """,
)
async def open_edit_session(
    payload: OpenEditSessionDTO,
    repository: CarRepository = Depends(get_car_repository),
    gateway: ImageUploadGateway = Depends(get_image_upload_gateway),
    registry: EditSessionRegistry = Depends(get_edit_session_registry),
    inventory: InventoryQueryEngine = Depends(get_inventory),
) -> EditSessionResponseDTO:
    session = CarEditSession(
        car_repository=repository,
        image_upload_gateway=gateway,
        on_submitted=inventory.replace_locally,
    )
    await session.load(payload.car_id)
    session_id = registry.open(session)
    return EditSessionMapper.to_response(session_id, session)


@router.get(
    "/{session_id}",
    response_model=EditSessionResponseDTO,
    summary="Get edit session state",
)
async def get_edit_session(
    session_id: str,
    registry: EditSessionRegistry = Depends(get_edit_session_registry),
) -> EditSessionResponseDTO:
    return EditSessionMapper.to_response(session_id, registry.get(session_id))


@router.patch(
    "/{session_id}/fields",
    response_model=EditSessionResponseDTO,
    summary="Update form fields",
    description="""
    Bind form values to the draft. Recognized names: `title`, `description`,
    `car_type`, `company`, `dealer`. Any other name is ignored.
    """,
)
async def update_fields(
    session_id: str,
    payload: FieldsUpdateDTO,
    registry: EditSessionRegistry = Depends(get_edit_session_registry),
) -> EditSessionResponseDTO:
    session = registry.get(session_id)
    for name, value in payload.fields.items():
        session.set_field(name, value)
    return EditSessionMapper.to_response(session_id, session)


@router.post(
    "/{session_id}/images",
    response_model=EditSessionResponseDTO,
    summary="Add a photo",
    responses={
        502: {
            "description": "Image host rejected the upload",
            "content": {
                "application/json": {
                    "example": {"detail": "Failed to upload image", "code": "UPLOAD_ERROR"}
                }
            },
        },
    },
)
async def add_image(
    session_id: str,
    file: UploadFile = File(...),
    registry: EditSessionRegistry = Depends(get_edit_session_registry),
) -> EditSessionResponseDTO:
    session = registry.get(session_id)
    content = await file.read()
    await session.add_image(
        ImageFile(
            filename=file.filename or "upload",
            content=content,
            content_type=file.content_type or "application/octet-stream",
        )
    )
    return EditSessionMapper.to_response(session_id, session)


@router.delete(
    "/{session_id}/images/{index}",
    response_model=EditSessionResponseDTO,
    summary="Remove a photo",
    description="Removes the photo at `index` in display order. Deletion is deferred until submit.",
)
async def remove_image(
    session_id: str,
    index: int,
    registry: EditSessionRegistry = Depends(get_edit_session_registry),
) -> EditSessionResponseDTO:
    session = registry.get(session_id)
    session.remove_image(index)
    return EditSessionMapper.to_response(session_id, session)


@router.get(
    "/{session_id}/diff",
    response_model=ImageDiffDTO,
    summary="Preview the photo changes that submit would send",
)
async def get_diff(
    session_id: str,
    registry: EditSessionRegistry = Depends(get_edit_session_registry),
) -> ImageDiffDTO:
    return EditSessionMapper.to_diff_dto(registry.get(session_id).compute_diff())


@router.post(
    "/{session_id}/submit",
    response_model=SubmitResponseDTO,
    summary="Save the car",
    responses={
        502: {
            "description": "Backend rejected the update; the session is unchanged",
            "content": {
                "application/json": {
                    "example": {"detail": "Title already in use", "code": "UPDATE_ERROR"}
                }
            },
        },
    },
)
async def submit(
    session_id: str,
    registry: EditSessionRegistry = Depends(get_edit_session_registry),
) -> SubmitResponseDTO:
    session = registry.get(session_id)
    car = await session.submit()
    return SubmitResponseDTO(
        car=CarMapper.to_car_response(car),
        session=EditSessionMapper.to_response(session_id, session),
    )


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Discard an edit session",
)
async def discard_edit_session(
    session_id: str,
    registry: EditSessionRegistry = Depends(get_edit_session_registry),
) -> Response:
    registry.close(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
