from datetime import datetime, timezone
from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.parking.app.dto.parking_result import ParkingEntryResult
from src.service.parking.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.parking.app.query.loyalty_lookup_use_case import LoyaltyLookupUseCase
from src.service.parking.app.service.parking_spot_allocator import ParkingSpotAllocator
from src.service.parking.domain.entity.ticket_entity import (
    Ticket,
    normalize_vehicle_reg_number,
)
from src.service.parking.domain.enum.parking_type import ParkingType
from src.service.parking.domain.parking_errors import PersistenceFailureError


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProcessIncomingVehicleUseCase:
    """
    Record a vehicle entering the parking.

    Flow:
    1. Validate vehicle type and registration number (nothing reserved yet)
    2. Claim the next free spot of that type (NoSpotAvailableError propagates)
    3. Open a ticket and insert it
    4. Insert failed → give the spot back, raise PersistenceFailureError

    Entry is all-or-nothing: either the spot is occupied and the ticket is
    open, or neither happened.
    """

    def __init__(
        self,
        *,
        parking_spot_allocator: ParkingSpotAllocator,
        ticket_command_repo: ITicketCommandRepo,
        loyalty_lookup: LoyaltyLookupUseCase,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.parking_spot_allocator = parking_spot_allocator
        self.ticket_command_repo = ticket_command_repo
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
        loyalty_lookup: LoyaltyLookupUseCase = Depends(Provide[Container.loyalty_lookup]),
    ) -> Self:
        return cls(
            parking_spot_allocator=parking_spot_allocator,
            ticket_command_repo=ticket_command_repo,
            loyalty_lookup=loyalty_lookup,
        )

    @Logger.io
    async def execute(
        self, *, vehicle_reg_number: str, parking_type: ParkingType | str | int
    ) -> ParkingEntryResult:
        parking_type = ParkingType.parse(parking_type)
        vehicle_reg_number = normalize_vehicle_reg_number(vehicle_reg_number)

        parking_spot = await self.parking_spot_allocator.reserve_next_spot(
            parking_type=parking_type
        )

        ticket = Ticket.open(
            parking_spot=parking_spot,
            vehicle_reg_number=vehicle_reg_number,
            in_time=self.clock(),
        )
        try:
            saved_ticket = await self.ticket_command_repo.save(ticket=ticket)
        except PersistenceFailureError:
            await self._rollback_spot_claim(ticket=ticket)
            raise

        Logger.base.info(
            f'🎫 [ENTRY] Generated ticket {saved_ticket.id}: vehicle {vehicle_reg_number} '
            f'parks in spot number {parking_spot.id}, in-time {saved_ticket.in_time.isoformat()}'
        )

        return ParkingEntryResult(
            ticket=saved_ticket,
            parking_spot=parking_spot,
            returning_customer=await self._is_returning_customer(vehicle_reg_number),
        )

    async def _is_returning_customer(self, vehicle_reg_number: str) -> bool:
        # The entry is already recorded; a failed greeting lookup must not undo it
        try:
            ticket_count = await self.loyalty_lookup.ticket_count(
                vehicle_reg_number=vehicle_reg_number
            )
        except PersistenceFailureError as e:
            Logger.base.warning(f'⚠️ [ENTRY] Skipped loyalty greeting: {e.message}')
            return False

        if not self.loyalty_lookup.is_returning_customer(ticket_count):
            return False
        Logger.base.info(
            f'🎉 [ENTRY] Welcome back {vehicle_reg_number}! Regular users receive a 5% discount'
        )
        return True

    async def _rollback_spot_claim(self, *, ticket: Ticket) -> None:
        try:
            await self.parking_spot_allocator.release(parking_spot=ticket.parking_spot)
        except PersistenceFailureError as e:
            # Spot stays marked occupied without a ticket until reconciled by an operator
            Logger.base.error(
                f'❌ [ENTRY] Spot {ticket.parking_spot.id} claimed for {ticket.vehicle_reg_number} '
                f'could not be released after ticket insert failed: {e.message}'
            )
