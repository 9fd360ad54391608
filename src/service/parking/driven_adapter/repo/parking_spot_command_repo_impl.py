from typing import AsyncContextManager, Callable, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from src.platform.logging.loguru_io import Logger
from src.service.parking.app.interface.i_parking_spot_command_repo import (
    IParkingSpotCommandRepo,
)
from src.service.parking.domain.enum.parking_type import ParkingType
from src.service.parking.domain.parking_errors import PersistenceFailureError
from src.service.parking.driven_adapter.model.parking_spot_model import ParkingSpotModel


class ParkingSpotCommandRepoImpl(IParkingSpotCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def claim_next_available_spot(self, *, parking_type: ParkingType) -> Optional[int]:
        """
        Single-statement claim:

            UPDATE parking_spot SET available = false
            WHERE id = (SELECT id ... ORDER BY id LIMIT 1 FOR UPDATE SKIP LOCKED)
              AND available
            RETURNING id

        PostgreSQL skips rows another transaction is claiming; SQLite serialises
        writers on the database lock. Either way the re-checked `available`
        predicate makes a lost race return no row instead of a duplicate id.
        """
        free_spot = aliased(ParkingSpotModel)
        next_free_spot = (
            select(free_spot.id)
            .where(
                free_spot.parking_type == parking_type.value,
                free_spot.available.is_(True),
            )
            .order_by(free_spot.id)
            .limit(1)
            .with_for_update(skip_locked=True)
            .scalar_subquery()
        )
        claim = (
            update(ParkingSpotModel)
            .where(ParkingSpotModel.id == next_free_spot, ParkingSpotModel.available.is_(True))
            .values(available=False)
            .returning(ParkingSpotModel.id)
            .execution_options(synchronize_session=False)
        )

        try:
            async with self.session_factory() as session:
                result = await session.execute(claim)
                spot_id = result.scalar_one_or_none()
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceFailureError(
                f'Error fetching next available {parking_type.value} parking spot'
            ) from e

        return spot_id

    @Logger.io
    async def update_availability(self, *, spot_id: int, available: bool) -> bool:
        statement = (
            update(ParkingSpotModel)
            .where(ParkingSpotModel.id == spot_id)
            .values(available=available)
            .execution_options(synchronize_session=False)
        )

        try:
            async with self.session_factory() as session:
                result = await session.execute(statement)
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceFailureError(f'Error updating parking spot {spot_id}') from e

        return result.rowcount == 1  # type: ignore[attr-defined]
