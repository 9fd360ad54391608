#!/usr/bin/env python3
"""
Database Seed Script
Provision parking spots

Features:
1. Create tables if they don't exist
2. Create CAR spots first, then BIKE spots, numbered from 1
3. Existing spot ids are left untouched, so the script can be re-run

Environment:
- CAR_SPOTS: number of car spots (default 3)
- BIKE_SPOTS: number of bike spots (default 2)
"""

import asyncio
import os

from sqlalchemy import case, func, select

from src.platform.database.db_setting import Database
from src.service.parking.domain.enum.parking_type import ParkingType
from src.service.parking.driven_adapter.model.parking_spot_model import ParkingSpotModel

DEFAULT_CAR_SPOTS = 3
DEFAULT_BIKE_SPOTS = 2


def build_spot_layout(*, car_spots: int, bike_spots: int) -> list[tuple[int, ParkingType]]:
    layout = [(spot_id, ParkingType.CAR) for spot_id in range(1, car_spots + 1)]
    layout += [
        (spot_id, ParkingType.BIKE)
        for spot_id in range(car_spots + 1, car_spots + bike_spots + 1)
    ]
    return layout


async def seed_parking_spots(database: Database, *, car_spots: int, bike_spots: int) -> int:
    """Insert missing spots in a single transaction, returns how many were created"""
    await database.create_db_and_tables()
    layout = build_spot_layout(car_spots=car_spots, bike_spots=bike_spots)

    async with database.session() as session:
        try:
            result = await session.execute(select(ParkingSpotModel.id))
            existing_ids = set(result.scalars().all())

            created = 0
            for spot_id, parking_type in layout:
                if spot_id in existing_ids:
                    continue
                session.add(
                    ParkingSpotModel(id=spot_id, parking_type=parking_type.value, available=True)
                )
                created += 1

            await session.commit()
        except Exception as e:
            await session.rollback()
            print(f'❌ Rolling back: {e}')
            raise

    return created


async def verify_data(database: Database) -> None:
    print('🔍 Verifying seeded data...')
    async with database.session() as session:
        result = await session.execute(
            select(
                ParkingSpotModel.parking_type,
                func.count(),
                func.sum(case((ParkingSpotModel.available.is_(True), 1), else_=0)),
            ).group_by(ParkingSpotModel.parking_type)
        )
        for parking_type, total, available in result.all():
            print(f'   {parking_type}: {total} spots ({available or 0} available)')
    print('   ✅ Data verification completed!')


async def main():
    print('🌱 Starting data seeding...')
    print('=' * 50)

    car_spots = int(os.getenv('CAR_SPOTS', str(DEFAULT_CAR_SPOTS)))
    bike_spots = int(os.getenv('BIKE_SPOTS', str(DEFAULT_BIKE_SPOTS)))
    database = Database()

    try:
        created = await seed_parking_spots(database, car_spots=car_spots, bike_spots=bike_spots)
        print(f'🅿️ Created {created} parking spots')
        await verify_data(database)

        print()
        print('=' * 50)
        print('🌱 Data seeding completed!')

    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        exit(1)

    finally:
        await database.dispose()


if __name__ == '__main__':
    asyncio.run(main())
