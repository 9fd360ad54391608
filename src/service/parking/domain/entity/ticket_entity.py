from datetime import datetime
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.parking.domain.entity.parking_spot_entity import ParkingSpot
from src.service.parking.domain.enum.ticket_status import TicketStatus
from src.service.parking.domain.fare_calculator import calculate_fare
from src.service.parking.domain.parking_errors import InvalidVehicleRegNumberError


VEHICLE_REG_NUMBER_MAX_LENGTH = 20


def normalize_vehicle_reg_number(vehicle_reg_number: Optional[str]) -> str:
    normalized = (vehicle_reg_number or '').strip()
    if not normalized:
        raise InvalidVehicleRegNumberError('Vehicle registration number must not be empty')
    if len(normalized) > VEHICLE_REG_NUMBER_MAX_LENGTH:
        raise InvalidVehicleRegNumberError(
            f'Vehicle registration number exceeds {VEHICLE_REG_NUMBER_MAX_LENGTH} characters'
        )
    return normalized


@attrs.define
class Ticket:
    parking_spot: ParkingSpot
    vehicle_reg_number: str
    in_time: datetime
    price: float = 0.0
    out_time: Optional[datetime] = None
    id: Optional[int] = None  # Only None before the ticket is first saved

    @property
    def status(self) -> TicketStatus:
        return TicketStatus.OPEN if self.out_time is None else TicketStatus.CLOSED

    @classmethod
    @Logger.io
    def open(
        cls,
        *,
        parking_spot: ParkingSpot,
        vehicle_reg_number: str,
        in_time: datetime,
    ) -> 'Ticket':
        return cls(
            parking_spot=parking_spot,
            vehicle_reg_number=normalize_vehicle_reg_number(vehicle_reg_number),
            in_time=in_time,
            price=0.0,
            out_time=None,
        )

    @Logger.io
    def close(self, *, out_time: datetime, discount: bool) -> 'Ticket':
        """
        Set exit time and final price together.

        Raises:
            DomainError: ticket already closed
            InvalidIntervalError: out_time before in_time
        """
        if self.status == TicketStatus.CLOSED:
            raise DomainError(f'Ticket {self.id} is already closed')

        price = calculate_fare(
            in_time=self.in_time,
            out_time=out_time,
            parking_type=self.parking_spot.parking_type,
            discount=discount,
        )
        return attrs.evolve(self, out_time=out_time, price=price)
