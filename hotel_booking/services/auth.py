import logging
from datetime import datetime, timedelta
from typing import Callable
from sqlalchemy.orm import Session
from hotel_booking import config
from hotel_booking.models.otp_verification import OtpVerification
from hotel_booking.models.refresh_token import RefreshToken
from hotel_booking.models.role import Role
from hotel_booking.models.user import User
from hotel_booking.schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    OtpVerificationRequest,
    RefreshTokenRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from hotel_booking.services.users import to_user_info
from hotel_booking.utils import mail
from hotel_booking.utils.auth import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    generate_otp,
    get_password_hash,
    verify_password,
)
from hotel_booking.utils.response import ApiError, NotFoundError, UnauthorizedError

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "CUSTOMER"

# (email, otp_code, email_type) -> None
EmailSender = Callable[[str, str, str], None]


def get_or_create_role(db: Session, role_name: str = DEFAULT_ROLE) -> Role:
    role = db.query(Role).filter(Role.role_name == role_name).first()
    if role is None:
        role = Role(role_name=role_name)
        db.add(role)
        db.flush()
    return role


def _store_otp(db: Session, email: str) -> str:
    otp_code = generate_otp()
    db.add(
        OtpVerification(
            email=email,
            otp_code=otp_code,
            expires_at=datetime.now() + timedelta(minutes=config.OTP_EXPIRE_MINUTES),
            is_used=False,
        )
    )
    return otp_code


def _consume_otp(db: Session, email: str, otp_code: str) -> OtpVerification:
    """Find the unused OTP for email+code; raises if absent or expired. Does not mark it used."""
    otp = (
        db.query(OtpVerification)
        .filter(
            OtpVerification.email == email,
            OtpVerification.otp_code == otp_code,
            OtpVerification.is_used.is_(False),
        )
        .order_by(OtpVerification.created_at.desc())
        .first()
    )
    if otp is None:
        raise ApiError("Invalid or already used OTP code")
    if otp.expires_at < datetime.now():
        raise ApiError("OTP code has expired")
    return otp


def _create_and_save_refresh_token(db: Session, user: User) -> str:
    token = create_refresh_token(user.email)
    db.add(
        RefreshToken(
            token=token,
            user_id=user.id,
            expires_at=datetime.now() + timedelta(days=config.REFRESH_TOKEN_EXPIRE_DAYS),
            is_revoked=False,
        )
    )
    return token


def register(db: Session, request: RegisterRequest, send_email: EmailSender = mail.send_email):
    if db.query(User).filter(User.email == request.email).first():
        logger.warning(f"Registration rejected, email already in use: {request.email}")
        raise ApiError("Email is already in use")

    otp_code = _store_otp(db, request.email)
    user = User(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        password_hash=get_password_hash(request.password),
        phone_number=request.phone_number,
        date_of_birth=request.date_of_birth,
        gender=request.gender,
        is_verified=False,
        role=get_or_create_role(db),
    )
    db.add(user)
    db.commit()
    logger.info(f"Registered unverified user: {request.email}")

    try:
        send_email(request.email, otp_code, mail.VERIFICATION)
    except Exception:
        logger.exception(f"Could not dispatch verification email to {request.email}")


def verify_otp(db: Session, request: OtpVerificationRequest) -> AuthResponse:
    otp = _consume_otp(db, request.email, request.otp_code)

    user = db.query(User).filter(User.email == request.email).first()
    if user is None:
        raise NotFoundError("User not found")

    otp.is_used = True
    user.is_verified = True
    refresh_token = _create_and_save_refresh_token(db, user)
    db.commit()
    db.refresh(user)
    logger.info(f"User verified: {user.email}")

    return AuthResponse(
        token=create_access_token(user.email),
        refresh_token=refresh_token,
        message="Verification successful",
        user=to_user_info(user),
    )


def login(db: Session, request: LoginRequest) -> AuthResponse:
    user = db.query(User).filter(User.email == request.email).first()
    if user is None or not verify_password(request.password, user.password_hash):
        logger.warning(f"Failed login for {request.email}")
        raise UnauthorizedError("Incorrect email or password")

    if not user.is_verified:
        raise UnauthorizedError("Account is not verified. Please verify the OTP first.")

    # every login adds a refresh token; earlier ones stay valid
    refresh_token = _create_and_save_refresh_token(db, user)
    db.commit()

    return AuthResponse(
        token=create_access_token(user.email),
        refresh_token=refresh_token,
        message="Login successful",
        user=to_user_info(user),
    )


def forgot_password(db: Session, request: ForgotPasswordRequest, send_email: EmailSender = mail.send_email) -> str:
    """Returns the success message; unknown emails get the same answer as known ones."""
    user = db.query(User).filter(User.email == request.email).first()
    if user is None:
        logger.info(f"Password reset requested for unknown email: {request.email}")
        return "If the email exists, an OTP code has been sent. Please check your email."

    if not user.is_verified:
        raise ApiError("Account is not verified. Please verify your account first.")

    otp_code = _store_otp(db, request.email)
    db.commit()

    try:
        send_email(request.email, otp_code, mail.RESET)
    except Exception:
        logger.exception(f"Could not dispatch password reset email to {request.email}")
    return "An OTP code has been sent to your email. Please check your email."


def reset_password(db: Session, request: ResetPasswordRequest):
    if request.new_password != request.confirm_password:
        raise ApiError("New password and confirm password do not match")

    otp = _consume_otp(db, request.email, request.otp_code)

    user = db.query(User).filter(User.email == request.email).first()
    if user is None:
        raise NotFoundError("User not found")

    # TODO: revoke the user's refresh tokens once clients handle forced re-login
    otp.is_used = True
    user.password_hash = get_password_hash(request.new_password)
    db.commit()
    logger.info(f"Password reset for {user.email}")


def refresh_access_token(db: Session, request: RefreshTokenRequest) -> AuthResponse:
    refresh_token = (
        db.query(RefreshToken)
        .filter(
            RefreshToken.token == request.refresh_token,
            RefreshToken.is_revoked.is_(False),
        )
        .first()
    )
    if refresh_token is None:
        raise ApiError("Refresh token is invalid or has been revoked")

    if refresh_token.expires_at < datetime.now():
        raise ApiError("Refresh token has expired")

    if decode_refresh_token(refresh_token.token) is None:
        raise ApiError("Refresh token is invalid")

    user = refresh_token.user
    if user is None or not user.is_verified:
        raise ApiError("Account is invalid or not verified")

    return AuthResponse(
        token=create_access_token(user.email),
        refresh_token=refresh_token.token,
        message="Token refreshed successfully",
        user=to_user_info(user),
    )


def revoke_all_user_tokens(db: Session, user: User) -> int:
    revoked = (
        db.query(RefreshToken)
        .filter(RefreshToken.user_id == user.id, RefreshToken.is_revoked.is_(False))
        .update({RefreshToken.is_revoked: True}, synchronize_session=False)
    )
    db.commit()
    return revoked
