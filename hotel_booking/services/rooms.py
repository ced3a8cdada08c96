import logging
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload, selectinload
from hotel_booking.models.hotel import Hotel
from hotel_booking.models.room import Room
from hotel_booking.schemas.room import (
    HotelDetailInfo,
    HotelInfo,
    RoomDetailResponse,
    RoomFilterRequest,
    RoomListResponse,
    RoomResponse,
    RoomSearchRequest,
)
from hotel_booking.utils.pagination import paginate
from hotel_booking.utils.response import NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_SORT_FIELD = "price"

# request value (lowercased) -> sortable column
SORTABLE_FIELDS = {
    "price": Room.price,
    "capacity": Room.capacity,
    "createdat": Room.created_at,
    "created_at": Room.created_at,
}


def to_room_response(room: Room) -> RoomResponse:
    hotel_info = None
    if room.hotel is not None:
        hotel_info = HotelInfo(
            hotel_id=room.hotel.id,
            hotel_name=room.hotel.hotel_name,
            address=room.hotel.address,
            city=room.hotel.city,
            country=room.hotel.country,
        )
    images = [image.image_url for image in room.images]
    return RoomResponse(
        room_id=room.id,
        hotel=hotel_info,
        room_type=room.room_type,
        price=room.price,
        capacity=room.capacity,
        description=room.description,
        images=images,
        thumbnail_image=images[0] if images else None,
        created_at=room.created_at,
    )


def to_room_detail_response(room: Room) -> RoomDetailResponse:
    hotel_info = None
    if room.hotel is not None:
        hotel = room.hotel
        hotel_info = HotelDetailInfo(
            hotel_id=hotel.id,
            hotel_name=hotel.hotel_name,
            address=hotel.address,
            city=hotel.city,
            country=hotel.country,
            description=hotel.description,
            images=[image.image_url for image in hotel.images],
        )
    return RoomDetailResponse(
        room_id=room.id,
        hotel=hotel_info,
        room_type=room.room_type,
        price=room.price,
        capacity=room.capacity,
        description=room.description,
        images=[image.image_url for image in room.images],
    )


def _base_query(db: Session):
    return (
        db.query(Room)
        .join(Room.hotel)
        .options(joinedload(Room.hotel), selectinload(Room.images))
    )


def _ieq(column, value):
    return func.lower(column) == value.lower()


def _icontains(column, value):
    return func.lower(column).like(f"%{value.lower()}%")


def _to_list_response(rooms, page_info) -> RoomListResponse:
    return RoomListResponse(rooms=[to_room_response(room) for room in rooms], **page_info)


def search_rooms(db: Session, request: RoomSearchRequest) -> RoomListResponse:
    query = _base_query(db)

    if request.keyword:
        query = query.filter(
            or_(
                _icontains(Room.room_type, request.keyword),
                _icontains(Room.description, request.keyword),
                _icontains(Hotel.hotel_name, request.keyword),
            )
        )
    if request.city:
        query = query.filter(_ieq(Hotel.city, request.city))
    if request.country:
        query = query.filter(_ieq(Hotel.country, request.country))
    if request.hotel_id is not None:
        query = query.filter(Hotel.id == request.hotel_id)

    rooms, page_info = paginate(query.order_by(Room.id), request.page, request.size)
    logger.debug(f"Room search matched {page_info['total_elements']} rooms")
    return _to_list_response(rooms, page_info)


def get_sort_column(sort_by, sort_direction):
    """Map a requested sort onto the allowlist; unknown fields fall back to price, ascending by default."""
    column = SORTABLE_FIELDS.get((sort_by or DEFAULT_SORT_FIELD).lower(), SORTABLE_FIELDS[DEFAULT_SORT_FIELD])
    if sort_direction and sort_direction.upper() == "DESC":
        return column.desc()
    return column.asc()


def filter_rooms(db: Session, request: RoomFilterRequest) -> RoomListResponse:
    query = _base_query(db)

    if request.hotel_id is not None:
        query = query.filter(Hotel.id == request.hotel_id)
    if request.city:
        query = query.filter(_ieq(Hotel.city, request.city))
    if request.country:
        query = query.filter(_ieq(Hotel.country, request.country))
    if request.room_type:
        query = query.filter(_icontains(Room.room_type, request.room_type))
    if request.min_price is not None:
        query = query.filter(Room.price >= request.min_price)
    if request.max_price is not None:
        query = query.filter(Room.price <= request.max_price)
    if request.min_capacity is not None:
        query = query.filter(Room.capacity >= request.min_capacity)
    if request.max_capacity is not None:
        query = query.filter(Room.capacity <= request.max_capacity)

    query = query.order_by(get_sort_column(request.sort_by, request.sort_direction), Room.id)
    rooms, page_info = paginate(query, request.page, request.size)
    return _to_list_response(rooms, page_info)


def get_room_detail(db: Session, room_id: int) -> RoomDetailResponse:
    room = (
        db.query(Room)
        .options(
            joinedload(Room.hotel).selectinload(Hotel.images),
            selectinload(Room.images),
        )
        .filter(Room.id == room_id)
        .first()
    )
    if room is None:
        raise NotFoundError(f"Room not found with ID: {room_id}")
    return to_room_detail_response(room)
