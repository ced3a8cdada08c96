from hotel_booking.models.role import Role
from hotel_booking.models.user import User, Gender
from hotel_booking.models.otp_verification import OtpVerification
from hotel_booking.models.refresh_token import RefreshToken
from hotel_booking.models.hotel import Hotel, HotelImage
from hotel_booking.models.room import Room, RoomImage
from hotel_booking.models.booking import Booking, BookingStatus
from hotel_booking.models.review import Review

__all__ = [
    "Role",
    "User",
    "Gender",
    "OtpVerification",
    "RefreshToken",
    "Hotel",
    "HotelImage",
    "Room",
    "RoomImage",
    "Booking",
    "BookingStatus",
    "Review",
]
