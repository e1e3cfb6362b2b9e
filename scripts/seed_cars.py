#!/usr/bin/env python3
"""
Seed the car backend with deterministic random data.

Features:
- Deterministic: fixed seed → same dataset every run
- Idempotent: safe to run multiple times (deletes every existing car first)
- Goes through the REST backend (CAR_API_BASE_URL), not a database

Usage:
    CAR_API_BASE_URL=http://localhost:5000 python scripts/seed_cars.py
"""

from __future__ import annotations

import asyncio
import random
import sys

from car_manager.adapters.http_car_repository import HttpCarRepository
from car_manager.domain.car import CarDetails, CarTags, Image
from car_manager.infra.http.clients import close_clients, get_car_api_client


# ==============================================================================
# Configuration
# ==============================================================================

RANDOM_SEED = 42  # Fixed seed for deterministic results
NUM_CARS = 20  # Number of cars to generate
IMAGES_PER_CAR = (1, 4)  # Inclusive range
SAMPLE_IMAGE_BASE_URL = "https://res.cloudinary.com/demo/image/upload"


# ==============================================================================
# Inventory Data
# ==============================================================================

MODELS_BY_COMPANY = {
    "Toyota": ["Corolla", "Camry", "RAV4", "Hilux", "Yaris"],
    "Honda": ["Civic", "Accord", "CR-V", "HR-V", "Fit"],
    "Mazda": ["Mazda3", "Mazda6", "CX-3", "CX-5", "CX-30"],
    "Volkswagen": ["Jetta", "Tiguan", "Taos", "Golf"],
    "Ford": ["Focus", "Escape", "Explorer", "Mustang"],
    "BMW": ["Serie 3", "Serie 5", "X1", "X3", "X5"],
}

DEALERS = ["AutoMax", "City Motors", "Prime Cars", "Northside Auto", "DriveNow"]

CONDITIONS = [
    "One owner, full service history.",
    "Recently serviced, new tires.",
    "Minor scratches on the rear bumper.",
    "Low mileage, garage kept.",
    "Certified pre-owned with warranty.",
]


def car_type_for(model: str) -> str:
    """Body style derived from the model name."""
    if any(suv in model for suv in ["X", "CR-V", "CX-", "RAV", "Tiguan", "Taos", "Escape", "Explorer"]):
        return "SUV"
    if any(h in model for h in ["Fit", "Golf", "Yaris"]):
        return "Hatchback"
    if "Hilux" in model:
        return "Pick-up"
    if "Mustang" in model:
        return "Coupe"
    return "Sedan"


# ==============================================================================
# Seed Generation
# ==============================================================================


def generate_car() -> tuple[CarDetails, list[Image]]:
    """Generate one random car with sample photos."""
    company = random.choice(list(MODELS_BY_COMPANY))
    model = random.choice(MODELS_BY_COMPANY[company])
    year = random.choices(
        range(2015, 2025),
        weights=[1, 1, 2, 2, 3, 3, 4, 5, 6, 7],  # Favor newer years
        k=1,
    )[0]

    details = CarDetails(
        title=f"{company} {model} {year}",
        description=random.choice(CONDITIONS),
        tags=CarTags(
            car_type=car_type_for(model),
            company=company,
            dealer=random.choice(DEALERS),
        ),
    )

    slug = f"{company}-{model}-{year}".lower().replace(" ", "-")
    images = [
        Image(url=f"{SAMPLE_IMAGE_BASE_URL}/{slug}-{index}.jpg", public_id=f"{slug}-{index}")
        for index in range(random.randint(*IMAGES_PER_CAR))
    ]
    return details, images


async def seed_cars(num_cars: int = NUM_CARS, seed: int = RANDOM_SEED) -> None:
    """
    Seed the backend with random car data.

    Args:
        num_cars: Number of cars to generate
        seed: Random seed for deterministic results
    """
    random.seed(seed)
    repository = HttpCarRepository(client=get_car_api_client())

    print(f"🌱 Seeding backend with {num_cars} cars (seed={seed})...")

    try:
        # Step 1: Clear existing data (idempotent)
        existing = await repository.get_all()
        print(f"🗑️  Deleting {len(existing)} existing cars...")
        for car in existing:
            await repository.delete(car.id)

        # Step 2: Generate and create new cars
        print(f"🚗 Creating {num_cars} cars...")
        created = []
        for _ in range(num_cars):
            details, images = generate_car()
            created.append(await repository.create(details, images))

        print(f"✅ Successfully seeded {len(created)} cars!")

        print("\n📊 Sample cars:")
        for i, car in enumerate(created[:5], 1):
            print(f"   {i}. {car.title} ({car.tags.car_type}, {car.tags.dealer}) - {len(car.images)} photos")

        if len(created) > 5:
            print(f"   ... and {len(created) - 5} more")
    finally:
        await close_clients()


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    try:
        asyncio.run(seed_cars())
    except Exception as e:
        print(f"❌ Error seeding backend: {e}", file=sys.stderr)
        sys.exit(1)
