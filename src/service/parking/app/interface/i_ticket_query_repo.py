from abc import ABC, abstractmethod
from typing import Optional

from src.service.parking.domain.entity.ticket_entity import Ticket


class ITicketQueryRepo(ABC):
    @abstractmethod
    async def get_open_ticket(self, *, vehicle_reg_number: str) -> Optional[Ticket]:
        """Most recent ticket (by in_time) of the vehicle that has no out_time yet"""
        pass

    @abstractmethod
    async def count_tickets(self, *, vehicle_reg_number: str) -> int:
        """Number of tickets ever issued to the vehicle, open ones included"""
        pass
