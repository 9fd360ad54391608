"""Application layer DTOs"""

from src.service.parking.app.dto.parking_result import ParkingEntryResult, ParkingExitResult

__all__ = [
    'ParkingEntryResult',
    'ParkingExitResult',
]
