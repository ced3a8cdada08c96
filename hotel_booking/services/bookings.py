import logging
from datetime import date
from decimal import Decimal
from typing import List
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, joinedload
from hotel_booking.models.booking import Booking, BookingStatus
from hotel_booking.models.room import Room
from hotel_booking.schemas.booking import (
    BookingRequest,
    BookingResponse,
    BookingRoomInfo,
    PaymentRequest,
)
from hotel_booking.schemas.room import RoomResponse
from hotel_booking.services.rooms import to_room_response
from hotel_booking.services.users import get_user
from hotel_booking.utils.response import ApiError, NotFoundError
from hotel_booking.utils.validation_helpers import validate_card, validate_stay_dates

logger = logging.getLogger(__name__)

_DETAILS = (
    joinedload(Booking.room).joinedload(Room.hotel),
    joinedload(Booking.room).selectinload(Room.images),
)


def calculate_total_price(price, check_in: date, check_out: date) -> Decimal:
    """Nightly price multiplied by the number of nights in [check_in, check_out)."""
    nights = (check_out - check_in).days
    return Decimal(str(price)) * nights


def find_conflicting_bookings(
    db: Session, room_id: int, check_in: date, check_out: date, exclude_id: int = None
) -> List[Booking]:
    """
    CONFIRMED bookings of the room whose stay overlaps [check_in, check_out).

    The three clauses cover a new stay starting inside an existing one,
    ending inside an existing one, or fully containing an existing one.
    """
    query = db.query(Booking).filter(
        Booking.room_id == room_id,
        Booking.status == BookingStatus.CONFIRMED,
        or_(
            and_(Booking.check_in <= check_in, Booking.check_out > check_in),
            and_(Booking.check_in < check_out, Booking.check_out >= check_out),
            and_(Booking.check_in >= check_in, Booking.check_out <= check_out),
        ),
    )
    if exclude_id is not None:
        query = query.filter(Booking.id != exclude_id)
    return query.all()


def to_booking_response(booking: Booking) -> BookingResponse:
    room_info = None
    room = booking.room
    if room is not None:
        hotel = room.hotel
        room_info = BookingRoomInfo(
            room_id=room.id,
            room_type=room.room_type,
            price=room.price,
            hotel_id=hotel.id if hotel else None,
            hotel_name=hotel.hotel_name if hotel else None,
            hotel_city=hotel.city if hotel else None,
            hotel_address=hotel.address if hotel else None,
            room_image_url=room.images[0].image_url if room.images else None,
        )

    return BookingResponse(
        booking_id=booking.id,
        room=room_info,
        check_in=booking.check_in,
        check_out=booking.check_out,
        total_price=booking.total_price,
        status=booking.status,
        adults_count=booking.adults_count,
        children_count=booking.children_count,
        infants_count=booking.infants_count,
        created_at=booking.created_at,
    )


def _get_owned_booking(db: Session, current_user: dict, booking_id: int) -> Booking:
    booking = db.query(Booking).options(*_DETAILS).filter(Booking.id == booking_id).first()
    if booking is None:
        raise NotFoundError(f"Booking not found with ID: {booking_id}")
    if booking.user_id != current_user["id"]:
        logger.warning(f"User {current_user['email']} does not own booking {booking_id}")
        raise ApiError("You are not allowed to modify this booking")
    return booking


def create_booking(db: Session, current_user: dict, request: BookingRequest) -> BookingResponse:
    logger.debug(f"Creating booking for user: {current_user['email']}, room_id: {request.room_id}")
    user = get_user(db, current_user)

    validate_stay_dates(request.check_in, request.check_out)

    room = db.query(Room).filter(Room.id == request.room_id).first()
    if room is None:
        raise NotFoundError(f"Room not found with ID: {request.room_id}")

    if find_conflicting_bookings(db, room.id, request.check_in, request.check_out):
        logger.warning(f"Room {room.id} already booked between {request.check_in} and {request.check_out}")
        raise ApiError("Room is already booked for the selected dates")

    booking = Booking(
        user_id=user.id,
        room_id=room.id,
        check_in=request.check_in,
        check_out=request.check_out,
        total_price=calculate_total_price(room.price, request.check_in, request.check_out),
        status=BookingStatus.PENDING,
        adults_count=request.adults_count,
        children_count=request.children_count,
        infants_count=request.infants_count,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    logger.debug(f"Created booking: {booking.id}, total_price: {booking.total_price}")
    return to_booking_response(booking)


def process_payment(db: Session, current_user: dict, request: PaymentRequest) -> BookingResponse:
    booking = _get_owned_booking(db, current_user, request.booking_id)

    if booking.status != BookingStatus.PENDING:
        raise ApiError("This booking has already been paid or cancelled")

    validate_card(request.card_number, request.cvv)

    # Serialize confirmations per room: lock the room row, then re-check
    # against bookings confirmed since this one was created.
    db.query(Room).filter(Room.id == booking.room_id).with_for_update().first()
    if find_conflicting_bookings(
        db, booking.room_id, booking.check_in, booking.check_out, exclude_id=booking.id
    ):
        db.rollback()
        logger.warning(f"Payment for booking {booking.id} rejected, room {booking.room_id} taken meanwhile")
        raise ApiError("Room is already booked for the selected dates")

    booking.status = BookingStatus.CONFIRMED
    db.commit()
    db.refresh(booking)
    logger.info(f"Booking {booking.id} confirmed")
    return to_booking_response(booking)


def cancel_booking(db: Session, current_user: dict, booking_id: int) -> BookingResponse:
    booking = _get_owned_booking(db, current_user, booking_id)

    if booking.check_in < date.today():
        raise ApiError("Cannot cancel a booking that has already started")

    if booking.status == BookingStatus.CANCELLED:
        raise ApiError("This booking has already been cancelled")

    booking.status = BookingStatus.CANCELLED
    db.commit()
    db.refresh(booking)
    logger.info(f"Booking {booking.id} cancelled")
    return to_booking_response(booking)


def get_user_bookings(db: Session, current_user: dict) -> List[BookingResponse]:
    bookings = (
        db.query(Booking)
        .options(*_DETAILS)
        .filter(Booking.user_id == current_user["id"])
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .all()
    )
    return [to_booking_response(b) for b in bookings]


def get_upcoming_bookings(db: Session, current_user: dict, today: date = None) -> List[BookingResponse]:
    today = today or date.today()
    bookings = (
        db.query(Booking)
        .options(*_DETAILS)
        .filter(
            Booking.user_id == current_user["id"],
            Booking.check_in >= today,
            Booking.status != BookingStatus.CANCELLED,
        )
        .order_by(Booking.check_in.asc())
        .all()
    )
    return [to_booking_response(b) for b in bookings]


def get_past_bookings(db: Session, current_user: dict, today: date = None) -> List[BookingResponse]:
    today = today or date.today()
    bookings = (
        db.query(Booking)
        .options(*_DETAILS)
        .filter(
            Booking.user_id == current_user["id"],
            or_(Booking.check_out < today, Booking.status == BookingStatus.CANCELLED),
        )
        .order_by(Booking.check_out.desc())
        .all()
    )
    return [to_booking_response(b) for b in bookings]


def get_rooms_by_booking_status(db: Session, status: BookingStatus) -> List[RoomResponse]:
    bookings = (
        db.query(Booking)
        .options(*_DETAILS)
        .filter(Booking.status == status)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .all()
    )
    rooms = {}
    for booking in bookings:
        rooms.setdefault(booking.room_id, booking.room)
    return [to_room_response(room) for room in rooms.values()]
