from datetime import date, datetime
from typing import Optional
from pydantic import Field
from hotel_booking.models.booking import BookingStatus
from hotel_booking.schemas.base import CamelModel


class BookingRequest(CamelModel):
    room_id: int
    check_in: date
    check_out: date
    adults_count: int = Field(1, ge=1)
    children_count: int = Field(0, ge=0)
    infants_count: int = Field(0, ge=0)


class PaymentRequest(CamelModel):
    booking_id: int
    card_number: str = Field(..., min_length=1)
    card_holder_name: str = Field(..., min_length=1)
    expiry_date: str = Field(..., min_length=1)
    cvv: str = Field(..., min_length=1)
    payment_method: str = "CREDIT_CARD"


class BookingRoomInfo(CamelModel):
    room_id: int
    room_type: str
    price: float
    hotel_id: Optional[int] = None
    hotel_name: Optional[str] = None
    hotel_city: Optional[str] = None
    hotel_address: Optional[str] = None
    room_image_url: Optional[str] = None


class BookingResponse(CamelModel):
    booking_id: int
    room: Optional[BookingRoomInfo] = None
    check_in: date
    check_out: date
    total_price: float
    status: BookingStatus
    adults_count: Optional[int] = None
    children_count: Optional[int] = None
    infants_count: Optional[int] = None
    created_at: Optional[datetime] = None
