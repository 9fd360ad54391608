from abc import ABC, abstractmethod

from src.service.parking.domain.entity.ticket_entity import Ticket


class ITicketCommandRepo(ABC):
    @abstractmethod
    async def save(self, *, ticket: Ticket) -> Ticket:
        """
        Insert a new ticket

        Returns:
            The ticket with its store-assigned id

        Raises:
            PersistenceFailureError: the insert did not go through
        """
        pass

    @abstractmethod
    async def update_on_exit(self, *, ticket: Ticket) -> bool:
        """
        Write price and out_time of a closed ticket in a single update

        Returns:
            True if exactly one row was updated
        """
        pass
