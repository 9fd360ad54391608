from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, StrictInt, StrictStr


class ParkingEntryRequest(BaseModel):
    vehicle_reg_number: str
    # 1 / 2 from the gate keypad, or 'CAR' / 'BIKE'; booleans and floats are rejected
    parking_type: Union[StrictInt, StrictStr]

    class Config:
        json_schema_extra = {
            'examples': [
                {'vehicle_reg_number': 'ABCDEF', 'parking_type': 1},
                {'vehicle_reg_number': 'XY-123', 'parking_type': 'BIKE'},
            ]
        }


class ParkingEntryResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'ticket_id': 1,
                'parking_spot_id': 1,
                'parking_type': 'CAR',
                'vehicle_reg_number': 'ABCDEF',
                'in_time': '2025-01-10T10:30:00Z',
                'returning_customer': False,
            }
        },
    }

    ticket_id: int
    parking_spot_id: int
    parking_type: str
    vehicle_reg_number: str
    in_time: datetime
    returning_customer: bool


class ParkingExitRequest(BaseModel):
    vehicle_reg_number: str

    class Config:
        json_schema_extra = {'example': {'vehicle_reg_number': 'ABCDEF'}}


class ParkingExitResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'ticket_id': 1,
                'parking_spot_id': 1,
                'vehicle_reg_number': 'ABCDEF',
                'price': 1.5,
                'in_time': '2025-01-10T10:30:00Z',
                'out_time': '2025-01-10T11:30:00Z',
                'discount_applied': False,
                'spot_released': True,
            }
        },
    }

    ticket_id: int
    parking_spot_id: int
    vehicle_reg_number: str
    price: float
    in_time: datetime
    out_time: Optional[datetime]
    discount_applied: bool
    spot_released: bool
