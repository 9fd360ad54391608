from typing import AsyncContextManager, Callable

import attrs
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.parking.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.parking.domain.entity.ticket_entity import Ticket
from src.service.parking.domain.parking_errors import PersistenceFailureError
from src.service.parking.driven_adapter.model.ticket_model import TicketModel


class TicketCommandRepoImpl(ITicketCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def save(self, *, ticket: Ticket) -> Ticket:
        ticket_model = TicketModel(
            parking_spot_id=ticket.parking_spot.id,
            vehicle_reg_number=ticket.vehicle_reg_number,
            price=ticket.price,
            in_time=ticket.in_time,
            out_time=ticket.out_time,
        )

        try:
            async with self.session_factory() as session:
                session.add(ticket_model)
                # id comes from the flush; nothing may fail once the commit went through
                await session.flush()
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceFailureError(
                f'Error inserting ticket for vehicle {ticket.vehicle_reg_number}',
                parking_spot=ticket.parking_spot,
            ) from e

        return attrs.evolve(ticket, id=ticket_model.id)

    @Logger.io
    async def update_on_exit(self, *, ticket: Ticket) -> bool:
        # out_time IS NULL keeps a ticket from being closed twice
        statement = (
            update(TicketModel)
            .where(TicketModel.id == ticket.id, TicketModel.out_time.is_(None))
            .values(price=ticket.price, out_time=ticket.out_time)
            .execution_options(synchronize_session=False)
        )

        try:
            async with self.session_factory() as session:
                result = await session.execute(statement)
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceFailureError(
                f'Error updating ticket {ticket.id} for vehicle {ticket.vehicle_reg_number}',
                parking_spot=ticket.parking_spot,
            ) from e

        return result.rowcount == 1  # type: ignore[attr-defined]
