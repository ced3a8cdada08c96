from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from hotel_booking.db import get_db
from hotel_booking.schemas.review import ReviewRequest
from hotel_booking.services import reviews as review_service
from hotel_booking.utils.auth import get_current_user
from hotel_booking.utils.response import create_response


router = APIRouter(
    prefix="/api/reviews",
    tags=["reviews"],
)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_review(
    request: ReviewRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """
    Review a hotel. Each user can review a hotel once.
    Requires authentication.
    """
    review = review_service.create_review(db, current_user, request)
    return create_response(
        "Review added successfully", data=review, status_code=status.HTTP_201_CREATED
    )


@router.get("/room/{room_id}")
def get_reviews_by_room_id(room_id: int, db: Session = Depends(get_db)):
    """
    Reviews of the hotel the room belongs to, newest first.
    """
    reviews = review_service.get_reviews_by_room_id(db, room_id)
    return create_response("Reviews retrieved successfully", data=reviews)


@router.get("/hotel/{hotel_id}")
def get_reviews_by_hotel_id(hotel_id: int, db: Session = Depends(get_db)):
    reviews = review_service.get_reviews_by_hotel_id(db, hotel_id)
    return create_response("Reviews retrieved successfully", data=reviews)


@router.put("/{review_id}")
def update_review(
    review_id: int,
    request: ReviewRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """
    Update the rating and comment of one of the caller's reviews.
    Requires authentication and ownership.
    """
    review = review_service.update_review(db, current_user, review_id, request)
    return create_response("Review updated successfully", data=review)


@router.get("/my-review/room/{room_id}")
def get_my_review_by_room_id(
    room_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    review = review_service.get_my_review_by_room_id(db, current_user, room_id)
    return create_response("Review retrieved successfully", data=review)
