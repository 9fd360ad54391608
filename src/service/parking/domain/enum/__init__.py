"""Parking Domain Enums"""

from src.service.parking.domain.enum.parking_type import ParkingType
from src.service.parking.domain.enum.ticket_status import TicketStatus

__all__ = ['ParkingType', 'TicketStatus']
