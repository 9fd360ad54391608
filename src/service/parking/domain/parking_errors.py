"""
Parking domain errors

Every error carries a message meant to be shown to the driver or operator as
is. None of them is fatal: the gate keeps serving the next vehicle.
"""

from typing import TYPE_CHECKING, Optional

from src.platform.exception.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    ServiceUnavailableError,
)


if TYPE_CHECKING:
    from src.service.parking.domain.entity.parking_spot_entity import ParkingSpot


class InvalidIntervalError(DomainError):
    pass


class UnknownParkingTypeError(DomainError):
    pass


class InvalidParkingTypeError(DomainError):
    pass


class InvalidVehicleRegNumberError(DomainError):
    pass


class NoSpotAvailableError(ConflictError):
    pass


class TicketNotFoundError(NotFoundError):
    pass


class PersistenceFailureError(ServiceUnavailableError):
    def __init__(self, message: str, *, parking_spot: Optional['ParkingSpot'] = None) -> None:
        super().__init__(message)
        self.parking_spot = parking_spot
