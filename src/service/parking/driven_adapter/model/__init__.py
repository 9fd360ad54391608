"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.parking.driven_adapter.model.parking_spot_model import ParkingSpotModel
from src.service.parking.driven_adapter.model.ticket_model import TicketModel

__all__ = [
    'ParkingSpotModel',
    'TicketModel',
]
