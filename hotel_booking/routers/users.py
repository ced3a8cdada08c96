from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from hotel_booking.db import get_db
from hotel_booking.schemas.user import UpdateUserRequest
from hotel_booking.services import users as user_service
from hotel_booking.utils.auth import get_current_user
from hotel_booking.utils.response import create_response


router = APIRouter(
    prefix="/api/users",
    tags=["users"],
)


@router.get("/me")
def get_current_user_info(
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """
    Retrieve the caller's account information.
    """
    user_info = user_service.get_current_user_info(db, current_user)
    return create_response("Account information retrieved successfully", data=user_info)


@router.put("/me")
def update_current_user_info(
    request: UpdateUserRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """
    Update the caller's profile. Only the provided fields change.
    """
    user_info = user_service.update_user_info(db, current_user, request)
    return create_response("Account information updated successfully", data=user_info)
