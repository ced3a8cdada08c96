from functools import partial
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session
from hotel_booking.db import get_db
from hotel_booking.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    OtpVerificationRequest,
    RefreshTokenRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from hotel_booking.services import auth as auth_service
from hotel_booking.utils import mail
from hotel_booking.utils.response import create_response


router = APIRouter(
    prefix="/api/auth",
    tags=["auth"],
)


def _background_sender(background_tasks: BackgroundTasks):
    # the response goes out before the SMTP round-trip
    return partial(background_tasks.add_task, mail.send_email)


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    description="Create an unverified account and email a 6-digit OTP to verify it.",
)
def register(
    request: RegisterRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    auth_service.register(db, request, send_email=_background_sender(background_tasks))
    return create_response(
        "Registration successful. Please check your email to verify the OTP.",
        status_code=status.HTTP_201_CREATED,
    )


@router.post(
    "/verify-otp",
    summary="Verify the registration OTP",
    description="Activate the account and return an access token and a refresh token.",
)
def verify_otp(request: OtpVerificationRequest, db: Session = Depends(get_db)):
    auth_response = auth_service.verify_otp(db, request)
    return create_response("OTP verified successfully", data=auth_response)


@router.post(
    "/login",
    summary="Log in",
    description="Log in with email and password. The account must be verified.",
)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    auth_response = auth_service.login(db, request)
    return create_response("Login successful", data=auth_response)


@router.post(
    "/forgot-password",
    summary="Request a password reset OTP",
)
def forgot_password(
    request: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    message = auth_service.forgot_password(
        db, request, send_email=_background_sender(background_tasks)
    )
    return create_response(message)


@router.post(
    "/reset-password",
    summary="Reset the password with an OTP",
)
def reset_password(request: ResetPasswordRequest, db: Session = Depends(get_db)):
    auth_service.reset_password(db, request)
    return create_response(
        "Password reset successful. Please log in with your new password."
    )


@router.post(
    "/refresh-token",
    summary="Exchange a refresh token for a new access token",
)
def refresh_token(request: RefreshTokenRequest, db: Session = Depends(get_db)):
    auth_response = auth_service.refresh_access_token(db, request)
    return create_response("Token refreshed successfully", data=auth_response)


@router.get("/test", summary="Health check")
def test():
    return create_response("Backend is running!")
