from datetime import date
from typing import Optional
from pydantic import EmailStr, Field, field_validator
from hotel_booking.models.user import Gender
from hotel_booking.schemas.base import CamelModel
from hotel_booking.schemas.user import UserInfo

OTP_PATTERN = r"^[0-9]{6}$"


class RegisterRequest(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone_number: str = Field(..., pattern=r"^[0-9]{10,20}$")
    password: str = Field(..., min_length=6)
    date_of_birth: date
    gender: Gender

    @field_validator("first_name", "last_name")
    @classmethod
    def check_not_blank(cls, value):
        if not value.strip():
            raise ValueError("Must not be blank")
        return value

    @field_validator("date_of_birth")
    @classmethod
    def check_date_of_birth(cls, value):
        if value >= date.today():
            raise ValueError("Date of birth must be in the past")
        return value


class OtpVerificationRequest(CamelModel):
    email: EmailStr
    otp_code: str = Field(..., pattern=OTP_PATTERN)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ForgotPasswordRequest(CamelModel):
    email: EmailStr


class ResetPasswordRequest(CamelModel):
    email: EmailStr
    otp_code: str = Field(..., pattern=OTP_PATTERN)
    new_password: str = Field(..., min_length=6)
    confirm_password: str = Field(..., min_length=1)


class RefreshTokenRequest(CamelModel):
    refresh_token: str = Field(..., min_length=1)


class AuthResponse(CamelModel):
    token: str
    refresh_token: Optional[str] = None
    message: str
    user: UserInfo
