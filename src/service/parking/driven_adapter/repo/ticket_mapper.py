from datetime import datetime, timezone
from typing import Optional

from src.service.parking.domain.entity.parking_spot_entity import ParkingSpot
from src.service.parking.domain.entity.ticket_entity import Ticket
from src.service.parking.domain.enum.parking_type import ParkingType
from src.service.parking.driven_adapter.model.parking_spot_model import ParkingSpotModel
from src.service.parking.driven_adapter.model.ticket_model import TicketModel


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def ticket_model_to_entity(
    ticket_model: TicketModel, parking_spot_model: ParkingSpotModel
) -> Ticket:
    return Ticket(
        id=ticket_model.id,
        parking_spot=ParkingSpot(
            id=parking_spot_model.id,
            parking_type=ParkingType(parking_spot_model.parking_type),
            available=parking_spot_model.available,
        ),
        vehicle_reg_number=ticket_model.vehicle_reg_number,
        price=ticket_model.price,
        in_time=as_utc(ticket_model.in_time),  # type: ignore[arg-type]
        out_time=as_utc(ticket_model.out_time),
    )
