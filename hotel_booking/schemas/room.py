from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import Field
from hotel_booking.schemas.base import CamelModel


class HotelInfo(CamelModel):
    hotel_id: int
    hotel_name: str
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


class HotelDetailInfo(HotelInfo):
    description: Optional[str] = None
    images: List[str] = []


class RoomResponse(CamelModel):
    room_id: int
    hotel: Optional[HotelInfo] = None
    room_type: str
    price: float
    capacity: Optional[int] = None
    description: Optional[str] = None
    images: List[str] = []
    thumbnail_image: Optional[str] = None
    created_at: Optional[datetime] = None


class RoomDetailResponse(CamelModel):
    room_id: int
    hotel: Optional[HotelDetailInfo] = None
    room_type: str
    price: float
    capacity: Optional[int] = None
    description: Optional[str] = None
    images: List[str] = []


class RoomListResponse(CamelModel):
    rooms: List[RoomResponse]
    current_page: int
    total_pages: int
    total_elements: int
    page_size: int
    is_first: bool
    is_last: bool


class RoomSearchRequest(CamelModel):
    keyword: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    hotel_id: Optional[int] = None
    page: int = Field(0, ge=0)
    size: int = Field(10, ge=1, le=100)


class RoomFilterRequest(CamelModel):
    hotel_id: Optional[int] = None
    city: Optional[str] = None
    country: Optional[str] = None
    room_type: Optional[str] = None
    min_price: Optional[Decimal] = Field(None, ge=0)
    max_price: Optional[Decimal] = Field(None, ge=0)
    min_capacity: Optional[int] = Field(None, ge=0)
    max_capacity: Optional[int] = Field(None, ge=0)
    sort_by: Optional[str] = "price"
    sort_direction: Optional[str] = "ASC"
    page: int = Field(0, ge=0)
    size: int = Field(10, ge=1, le=100)
