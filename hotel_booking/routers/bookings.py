from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from hotel_booking.db import get_db
from hotel_booking.models.booking import BookingStatus
from hotel_booking.schemas.booking import BookingRequest, PaymentRequest
from hotel_booking.services import bookings as booking_service
from hotel_booking.utils.auth import get_current_user
from hotel_booking.utils.response import ApiError, create_response


router = APIRouter(
    prefix="/api/bookings",
    tags=["bookings"],
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a new booking",
    description="Create a PENDING booking for a room. Requires authentication.",
)
def create_booking(
    request: BookingRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """
    Create a new booking for a room.
    Requires authentication.

    - **roomId**: ID of the room to book.
    - **checkIn**: Check-in date, today or later.
    - **checkOut**: Check-out date, after check-in.
    - **adultsCount**, **childrenCount**, **infantsCount**: Guest counts.

    The total price is the nightly room price times the number of nights.
    """
    booking = booking_service.create_booking(db, current_user, request)
    return create_response(
        "Booking created successfully", data=booking, status_code=status.HTTP_201_CREATED
    )


@router.post(
    "/payment",
    summary="Pay for a booking",
    description="Fake card payment that confirms a PENDING booking owned by the caller.",
)
def process_payment(
    request: PaymentRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    booking = booking_service.process_payment(db, current_user, request)
    return create_response("Payment successful", data=booking)


@router.get("/my-bookings", summary="List the caller's bookings")
def get_user_bookings(
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    bookings = booking_service.get_user_bookings(db, current_user)
    return create_response("Bookings retrieved successfully", data=bookings)


@router.get("/upcoming", summary="List the caller's upcoming bookings")
def get_upcoming_bookings(
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    bookings = booking_service.get_upcoming_bookings(db, current_user)
    return create_response("Upcoming bookings retrieved successfully", data=bookings)


@router.get("/past", summary="List the caller's past and cancelled bookings")
def get_past_bookings(
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    bookings = booking_service.get_past_bookings(db, current_user)
    return create_response("Past bookings retrieved successfully", data=bookings)


@router.post("/{booking_id}/cancel", summary="Cancel a booking")
def cancel_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    booking = booking_service.cancel_booking(db, current_user, booking_id)
    return create_response("Booking cancelled successfully", data=booking)


@router.get(
    "/rooms/by-status",
    summary="List rooms by booking status",
    description="Distinct rooms referenced by bookings in the given status (PENDING, CONFIRMED, CANCELLED).",
)
def get_rooms_by_booking_status(
    status: str = "CONFIRMED",
    db: Session = Depends(get_db),
):
    try:
        booking_status = BookingStatus(status.upper())
    except ValueError:
        raise ApiError("Invalid status. Accepted values: PENDING, CONFIRMED, CANCELLED")
    rooms = booking_service.get_rooms_by_booking_status(db, booking_status)
    return create_response("Rooms retrieved successfully", data=rooms)
