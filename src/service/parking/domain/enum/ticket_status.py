from enum import Enum


class TicketStatus(Enum):
    OPEN = 'open'
    CLOSED = 'closed'
