from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from hotel_booking.db import get_db
from hotel_booking.services import hotels as hotel_service
from hotel_booking.utils.response import create_response


router = APIRouter(
    prefix="/api/hotels",
    tags=["hotels"],
)


@router.get("")
def get_all_hotels(db: Session = Depends(get_db)):
    """
    Retrieve every hotel with its images and room count.
    """
    hotels = hotel_service.get_all_hotels(db)
    return create_response("Hotels retrieved successfully", data=hotels)
