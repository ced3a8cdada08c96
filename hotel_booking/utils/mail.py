import logging
import smtplib
from email.mime.text import MIMEText
from hotel_booking import config

logger = logging.getLogger(__name__)

VERIFICATION = "verification"
RESET = "reset"

_TEMPLATES = {
    VERIFICATION: (
        "OTP verification - account registration",
        "Your OTP code is: {code}\n\n"
        "This code is valid for {minutes} minutes.\n\n"
        "Please do not share this code with anyone.",
    ),
    RESET: (
        "Password reset OTP",
        "Your password reset OTP code is: {code}\n\n"
        "This code is valid for {minutes} minutes.\n\n"
        "Please do not share this code with anyone.\n\n"
        "If you did not request a password reset, please ignore this email.",
    ),
}


def build_message(email, otp_code, email_type):
    subject, body = _TEMPLATES[email_type]
    msg = MIMEText(
        body.format(code=otp_code, minutes=config.OTP_EXPIRE_MINUTES), "plain", "utf-8"
    )
    msg["Subject"] = subject
    msg["From"] = config.MAIL_FROM
    msg["To"] = email
    return msg


def send_email(email, otp_code, email_type):
    """
    Send an OTP email of the given type ('verification' or 'reset').

    Delivery failures are logged and never raised: callers run this as a
    background task after the response has been sent.
    """
    if email_type not in _TEMPLATES:
        logger.error(f"Unknown email type: {email_type}")
        return

    if not config.SMTP_USER or not config.SMTP_PASSWORD:
        logger.warning(f"SMTP credentials are not configured, {email_type} email to {email} not sent")
        return

    msg = build_message(email, otp_code, email_type)
    try:
        if config.SMTP_PORT == 465:
            with smtplib.SMTP_SSL(config.SMTP_HOST, config.SMTP_PORT) as server:
                server.login(config.SMTP_USER, config.SMTP_PASSWORD)
                server.sendmail(config.MAIL_FROM, email, msg.as_string())
        else:
            with smtplib.SMTP(config.SMTP_HOST, config.SMTP_PORT) as server:
                server.starttls()
                server.login(config.SMTP_USER, config.SMTP_PASSWORD)
                server.sendmail(config.MAIL_FROM, email, msg.as_string())
        logger.info(f"{email_type} email sent to {email}")
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Error sending {email_type} email to {email}: {e}")
