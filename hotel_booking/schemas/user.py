from datetime import date
from typing import Optional
from pydantic import Field, field_validator
from hotel_booking.models.user import Gender
from hotel_booking.schemas.base import CamelModel


class UserInfo(CamelModel):
    user_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str
    phone_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    avatar_url: Optional[str] = None
    role_name: Optional[str] = None


class UpdateUserRequest(CamelModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=255)
    last_name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone_number: Optional[str] = Field(None, pattern=r"^[0-9]{10,20}$")
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    avatar_url: Optional[str] = Field(None, max_length=500)

    @field_validator("date_of_birth")
    @classmethod
    def check_date_of_birth(cls, value):
        if value is not None and value >= date.today():
            raise ValueError("Date of birth must be in the past")
        return value
