from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base
from src.service.parking.domain.entity.ticket_entity import VEHICLE_REG_NUMBER_MAX_LENGTH


class TicketModel(Base):
    __tablename__ = 'ticket'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    parking_spot_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('parking_spot.id'), nullable=False
    )
    vehicle_reg_number: Mapped[str] = mapped_column(
        String(VEHICLE_REG_NUMBER_MAX_LENGTH), nullable=False, index=True
    )
    price: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    in_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    out_time: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return (
            f'<TicketModel(id={self.id}, vehicle_reg_number={self.vehicle_reg_number}, '
            f'parking_spot_id={self.parking_spot_id})>'
        )
