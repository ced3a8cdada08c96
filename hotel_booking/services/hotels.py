from typing import List
from sqlalchemy.orm import Session, selectinload
from hotel_booking.models.hotel import Hotel
from hotel_booking.schemas.hotel import HotelResponse


def to_hotel_response(hotel: Hotel) -> HotelResponse:
    images = [image.image_url for image in hotel.images]
    return HotelResponse(
        hotel_id=hotel.id,
        hotel_name=hotel.hotel_name,
        address=hotel.address,
        city=hotel.city,
        country=hotel.country,
        description=hotel.description,
        images=images,
        thumbnail_image=images[0] if images else None,
        room_count=len(hotel.rooms),
    )


def get_all_hotels(db: Session) -> List[HotelResponse]:
    hotels = (
        db.query(Hotel)
        .options(selectinload(Hotel.images), selectinload(Hotel.rooms))
        .order_by(Hotel.id)
        .all()
    )
    return [to_hotel_response(hotel) for hotel in hotels]
