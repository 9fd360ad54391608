from sqlalchemy import Boolean, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base


class ParkingSpotModel(Base):
    __tablename__ = 'parking_spot'

    # Spot numbers are painted on the ground; they are seeded, never generated
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    parking_type: Mapped[str] = mapped_column(String(10), nullable=False)
    available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    __table_args__ = (Index('ix_parking_spot_type_available', 'parking_type', 'available', 'id'),)

    def __repr__(self):
        return (
            f'<ParkingSpotModel(id={self.id}, parking_type={self.parking_type}, '
            f'available={self.available})>'
        )
