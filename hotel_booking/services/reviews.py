import logging
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload
from hotel_booking.models.hotel import Hotel
from hotel_booking.models.review import Review
from hotel_booking.models.room import Room
from hotel_booking.schemas.review import ReviewRequest, ReviewResponse
from hotel_booking.schemas.user import UserInfo
from hotel_booking.services.users import get_user
from hotel_booking.utils.response import ApiError, NotFoundError

logger = logging.getLogger(__name__)

DUPLICATE_REVIEW_MESSAGE = "You have already reviewed this hotel"


def to_review_response(review: Review) -> ReviewResponse:
    user_info = None
    if review.user is not None:
        # public view of the author
        user_info = UserInfo(
            user_id=review.user.id,
            email=review.user.email,
            first_name=review.user.first_name,
            last_name=review.user.last_name,
            avatar_url=review.user.avatar_url,
        )
    return ReviewResponse(
        review_id=review.id,
        hotel_id=review.hotel.id if review.hotel else None,
        hotel_name=review.hotel.hotel_name if review.hotel else None,
        user=user_info,
        rating=review.rating,
        comment=review.comment,
        created_at=review.created_at,
    )


def _reviews_query(db: Session):
    return db.query(Review).options(joinedload(Review.user), joinedload(Review.hotel))


def _get_room_hotel_id(db: Session, room_id: int) -> int:
    room = db.query(Room).filter(Room.id == room_id).first()
    if room is None:
        raise NotFoundError(f"Room not found with ID: {room_id}")
    return room.hotel_id


def create_review(db: Session, current_user: dict, request: ReviewRequest) -> ReviewResponse:
    user = get_user(db, current_user)

    hotel = db.query(Hotel).filter(Hotel.id == request.hotel_id).first()
    if hotel is None:
        raise NotFoundError(f"Hotel not found with ID: {request.hotel_id}")

    existing = (
        db.query(Review)
        .filter(Review.hotel_id == hotel.id, Review.user_id == user.id)
        .first()
    )
    if existing is not None:
        raise ApiError(DUPLICATE_REVIEW_MESSAGE)

    review = Review(hotel_id=hotel.id, user_id=user.id, rating=request.rating, comment=request.comment)
    db.add(review)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent request won the unique (user, hotel) constraint
        db.rollback()
        raise ApiError(DUPLICATE_REVIEW_MESSAGE)
    db.refresh(review)
    logger.debug(f"User {user.id} reviewed hotel {hotel.id} with rating {review.rating}")
    return to_review_response(review)


def update_review(db: Session, current_user: dict, review_id: int, request: ReviewRequest) -> ReviewResponse:
    review = _reviews_query(db).filter(Review.id == review_id).first()
    if review is None:
        raise NotFoundError(f"Review not found with ID: {review_id}")

    if review.user_id != current_user["id"]:
        raise ApiError("You are not allowed to edit this review")

    if request.hotel_id is not None and review.hotel_id != request.hotel_id:
        raise ApiError("The review does not belong to the specified hotel")

    review.rating = request.rating
    review.comment = request.comment
    db.commit()
    db.refresh(review)
    return to_review_response(review)


def get_reviews_by_hotel_id(db: Session, hotel_id: int) -> List[ReviewResponse]:
    reviews = (
        _reviews_query(db)
        .filter(Review.hotel_id == hotel_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )
    return [to_review_response(review) for review in reviews]


def get_reviews_by_room_id(db: Session, room_id: int) -> List[ReviewResponse]:
    return get_reviews_by_hotel_id(db, _get_room_hotel_id(db, room_id))


def get_my_review_by_room_id(db: Session, current_user: dict, room_id: int) -> ReviewResponse:
    hotel_id = _get_room_hotel_id(db, room_id)
    review = (
        _reviews_query(db)
        .filter(Review.hotel_id == hotel_id, Review.user_id == current_user["id"])
        .first()
    )
    if review is None:
        raise NotFoundError("You have not reviewed this hotel yet")
    return to_review_response(review)
