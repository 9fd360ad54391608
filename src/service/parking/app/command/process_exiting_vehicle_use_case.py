from datetime import datetime, timezone
from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.parking.app.dto.parking_result import ParkingExitResult
from src.service.parking.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.parking.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.parking.app.query.loyalty_lookup_use_case import LoyaltyLookupUseCase
from src.service.parking.app.service.parking_spot_allocator import ParkingSpotAllocator
from src.service.parking.domain.entity.ticket_entity import (
    Ticket,
    normalize_vehicle_reg_number,
)
from src.service.parking.domain.parking_errors import (
    PersistenceFailureError,
    TicketNotFoundError,
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProcessExitingVehicleUseCase:
    """
    Record a vehicle leaving the parking and price its stay.

    Flow:
    1. Load the vehicle's open ticket (TicketNotFoundError, nothing written)
    2. Count prior tickets before this exit is recorded; more than two → 5% off
    3. Close the ticket (out_time + price) and persist it in one update
    4. Only after that update succeeded, free the spot

    A failed ticket update leaves the ticket open and the spot occupied, so
    the spot can never be handed out twice.
    """

    def __init__(
        self,
        *,
        parking_spot_allocator: ParkingSpotAllocator,
        ticket_command_repo: ITicketCommandRepo,
        ticket_query_repo: ITicketQueryRepo,
        loyalty_lookup: LoyaltyLookupUseCase,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.parking_spot_allocator = parking_spot_allocator
        self.ticket_command_repo = ticket_command_repo
        self.ticket_query_repo = ticket_query_repo
        self.loyalty_lookup = loyalty_lookup
        self.clock = clock

    @classmethod
    @inject
    def depends(
        cls,
        parking_spot_allocator: ParkingSpotAllocator = Depends(
            Provide[Container.parking_spot_allocator]
        ),
        ticket_command_repo: ITicketCommandRepo = Depends(Provide[Container.ticket_command_repo]),
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
        loyalty_lookup: LoyaltyLookupUseCase = Depends(Provide[Container.loyalty_lookup]),
    ) -> Self:
        return cls(
            parking_spot_allocator=parking_spot_allocator,
            ticket_command_repo=ticket_command_repo,
            ticket_query_repo=ticket_query_repo,
            loyalty_lookup=loyalty_lookup,
        )

    @Logger.io
    async def execute(self, *, vehicle_reg_number: str) -> ParkingExitResult:
        vehicle_reg_number = normalize_vehicle_reg_number(vehicle_reg_number)

        ticket = await self.ticket_query_repo.get_open_ticket(
            vehicle_reg_number=vehicle_reg_number
        )
        if not ticket:
            raise TicketNotFoundError(f'No open ticket found for vehicle {vehicle_reg_number}')

        out_time = self.clock()

        ticket_count = await self.loyalty_lookup.ticket_count(
            vehicle_reg_number=vehicle_reg_number
        )
        discount = self.loyalty_lookup.is_eligible_for_discount(ticket_count)

        closed_ticket = ticket.close(out_time=out_time, discount=discount)

        if not await self.ticket_command_repo.update_on_exit(ticket=closed_ticket):
            raise PersistenceFailureError(
                f'Unable to update ticket information for vehicle {vehicle_reg_number}, '
                f'spot {ticket.parking_spot.id} stays occupied'
            )

        Logger.base.info(
            f'💰 [EXIT] Vehicle {vehicle_reg_number} please pay the parking fare: '
            f'{closed_ticket.price:.2f} (out-time {out_time.isoformat()}, discount={discount})'
        )

        return ParkingExitResult(
            ticket=closed_ticket,
            discount_applied=discount,
            spot_released=await self._release_spot(ticket=closed_ticket),
        )

    async def _release_spot(self, *, ticket: Ticket) -> bool:
        try:
            await self.parking_spot_allocator.release(parking_spot=ticket.parking_spot)
        except PersistenceFailureError as e:
            # Ticket stays closed; the spot row needs reconciliation
            Logger.base.error(
                f'❌ [EXIT] Ticket {ticket.id} closed but spot {ticket.parking_spot.id} '
                f'was not released: {e.message}'
            )
            return False
        return True
