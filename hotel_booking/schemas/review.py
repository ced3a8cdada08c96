from datetime import datetime
from typing import Optional
from pydantic import Field
from hotel_booking.schemas.base import CamelModel
from hotel_booking.schemas.user import UserInfo


class ReviewRequest(CamelModel):
    hotel_id: int
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None


class ReviewResponse(CamelModel):
    review_id: int
    hotel_id: Optional[int] = None
    hotel_name: Optional[str] = None
    user: Optional[UserInfo] = None
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
