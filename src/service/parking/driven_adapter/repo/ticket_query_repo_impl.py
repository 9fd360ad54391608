from typing import AsyncContextManager, Callable, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.parking.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.parking.domain.entity.ticket_entity import Ticket
from src.service.parking.domain.parking_errors import PersistenceFailureError
from src.service.parking.driven_adapter.model.parking_spot_model import ParkingSpotModel
from src.service.parking.driven_adapter.model.ticket_model import TicketModel
from src.service.parking.driven_adapter.repo.ticket_mapper import ticket_model_to_entity


class TicketQueryRepoImpl(ITicketQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_open_ticket(self, *, vehicle_reg_number: str) -> Optional[Ticket]:
        query = (
            select(TicketModel, ParkingSpotModel)
            .join(ParkingSpotModel, TicketModel.parking_spot_id == ParkingSpotModel.id)
            .where(
                TicketModel.vehicle_reg_number == vehicle_reg_number,
                TicketModel.out_time.is_(None),
            )
            .order_by(TicketModel.in_time.desc(), TicketModel.id.desc())
            .limit(1)
        )

        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                row = result.first()
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceFailureError(
                f'Error fetching open ticket for vehicle {vehicle_reg_number}'
            ) from e

        if not row:
            return None

        ticket_model, parking_spot_model = row
        return ticket_model_to_entity(ticket_model, parking_spot_model)

    @Logger.io
    async def count_tickets(self, *, vehicle_reg_number: str) -> int:
        query = (
            select(func.count())
            .select_from(TicketModel)
            .where(TicketModel.vehicle_reg_number == vehicle_reg_number)
        )

        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                count = result.scalar_one()
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceFailureError(
                f'Error counting tickets for vehicle {vehicle_reg_number}'
            ) from e

        return count or 0
