"""
Loyalty Lookup (Query Use Case)

Counts are always read from the store; a vehicle's history can change between
two calls from different gates.
"""

from src.platform.logging.loguru_io import Logger
from src.service.parking.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.parking.domain.entity.ticket_entity import normalize_vehicle_reg_number


# More than this many prior tickets at exit time earns the regular discount
REGULAR_CUSTOMER_MIN_PRIOR_TICKETS = 2


class LoyaltyLookupUseCase:
    def __init__(self, *, ticket_query_repo: ITicketQueryRepo) -> None:
        self.ticket_query_repo = ticket_query_repo

    @Logger.io
    async def ticket_count(self, *, vehicle_reg_number: str) -> int:
        count = await self.ticket_query_repo.count_tickets(
            vehicle_reg_number=normalize_vehicle_reg_number(vehicle_reg_number)
        )
        return max(count, 0)

    @staticmethod
    def is_eligible_for_discount(ticket_count: int) -> bool:
        return ticket_count > REGULAR_CUSTOMER_MIN_PRIOR_TICKETS

    @staticmethod
    def is_returning_customer(ticket_count: int) -> bool:
        # Evaluated right after an entry is recorded, so the new ticket is included
        return ticket_count > 1
