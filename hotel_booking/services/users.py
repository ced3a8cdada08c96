import logging
from sqlalchemy.orm import Session
from hotel_booking.models.user import User
from hotel_booking.schemas.user import UpdateUserRequest, UserInfo
from hotel_booking.utils.response import NotFoundError

logger = logging.getLogger(__name__)


def to_user_info(user: User) -> UserInfo:
    return UserInfo(
        user_id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        phone_number=user.phone_number,
        date_of_birth=user.date_of_birth,
        gender=user.gender,
        avatar_url=user.avatar_url,
        role_name=user.role.role_name if user.role else None,
    )


def get_user(db: Session, current_user: dict) -> User:
    user = db.query(User).filter(User.id == current_user["id"]).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_current_user_info(db: Session, current_user: dict) -> UserInfo:
    return to_user_info(get_user(db, current_user))


def update_user_info(db: Session, current_user: dict, request: UpdateUserRequest) -> UserInfo:
    user = get_user(db, current_user)

    update_data = request.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in update_data.items():
        setattr(user, key, value)

    db.commit()
    db.refresh(user)
    logger.debug(f"Updated user {user.id}: {sorted(update_data)}")
    return to_user_info(user)
