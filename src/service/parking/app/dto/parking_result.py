"""Parking entry/exit result DTOs."""

import attrs

from src.service.parking.domain.entity.parking_spot_entity import ParkingSpot
from src.service.parking.domain.entity.ticket_entity import Ticket


@attrs.define(frozen=True)
class ParkingEntryResult:
    """
    Outcome of a recorded entry.

    returning_customer tells the gate to show the regular-discount greeting.
    """

    ticket: Ticket
    parking_spot: ParkingSpot
    returning_customer: bool = False


@attrs.define(frozen=True)
class ParkingExitResult:
    """
    Outcome of a recorded exit.

    The ticket is always closed and persisted here. spot_released is False when
    the spot could not be written back as free; that spot needs reconciliation.
    """

    ticket: Ticket
    discount_applied: bool
    spot_released: bool = True
