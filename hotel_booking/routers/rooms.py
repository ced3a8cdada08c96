from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from hotel_booking.db import get_db
from hotel_booking.schemas.room import RoomFilterRequest, RoomSearchRequest
from hotel_booking.services import rooms as room_service
from hotel_booking.utils.response import create_response


router = APIRouter(
    prefix="/api/rooms",
    tags=["rooms"],
)


@router.post("/search")
def search_rooms(request: RoomSearchRequest, db: Session = Depends(get_db)):
    """
    Search rooms by keyword (room type, description or hotel name),
    city, country and hotel, one page at a time.
    """
    rooms = room_service.search_rooms(db, request)
    return create_response("Rooms found", data=rooms)


@router.post("/filter")
def filter_rooms(request: RoomFilterRequest, db: Session = Depends(get_db)):
    """
    Filter rooms by hotel, location, type, price and capacity ranges.

    - **sortBy**: price (default), capacity or createdAt.
    - **sortDirection**: ASC (default) or DESC.
    """
    rooms = room_service.filter_rooms(db, request)
    return create_response("Rooms filtered successfully", data=rooms)


@router.get("/{room_id}")
def get_room_detail(room_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a room with its hotel and images.
    """
    room = room_service.get_room_detail(db, room_id)
    return create_response("Room details retrieved successfully", data=room)
