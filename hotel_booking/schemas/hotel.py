from typing import List, Optional
from hotel_booking.schemas.base import CamelModel


class HotelResponse(CamelModel):
    hotel_id: int
    hotel_name: str
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    description: Optional[str] = None
    images: List[str] = []
    thumbnail_image: Optional[str] = None
    room_count: int = 0
