import logging
from datetime import datetime, timedelta
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.orm import Session
from hotel_booking import config
from hotel_booking.db import SessionLocal
from hotel_booking.models.otp_verification import OtpVerification
from hotel_booking.models.user import User

logger = logging.getLogger(__name__)

CLEANUP_JOB_ID = "cleanup_unverified_users_and_expired_otps"

scheduler = BackgroundScheduler()


def cleanup_unverified_users_and_expired_otps(db: Session, now: datetime = None):
    """
    Delete accounts still unverified after the grace period and OTPs past expiry.

    Safe to run repeatedly: each pass only removes rows that are stale at ``now``.
    Returns ``(deleted_users, deleted_otps)``.
    """
    now = now or datetime.now()
    cutoff_time = now - timedelta(minutes=config.UNVERIFIED_USER_EXPIRE_MINUTES)

    deleted_users = (
        db.query(User)
        .filter(User.is_verified.is_(False), User.created_at < cutoff_time)
        .delete(synchronize_session=False)
    )
    if deleted_users:
        logger.info(f"Deleted {deleted_users} users unverified since before {cutoff_time}")
    else:
        logger.debug("No unverified users to delete")

    deleted_otps = (
        db.query(OtpVerification)
        .filter(OtpVerification.expires_at < now)
        .delete(synchronize_session=False)
    )
    logger.debug(f"Deleted {deleted_otps} expired OTPs")

    db.commit()
    return deleted_users, deleted_otps


def run_cleanup():
    """Scheduled entry point; the next tick retries after a failure."""
    logger.info("Starting cleanup of unverified users and expired OTPs")
    db = SessionLocal()
    try:
        cleanup_unverified_users_and_expired_otps(db)
        logger.info("Cleanup finished")
    except Exception:
        db.rollback()
        logger.exception("Cleanup of unverified users and expired OTPs failed")
    finally:
        db.close()


def start_scheduler():
    if scheduler.running:
        return
    scheduler.add_job(
        run_cleanup,
        IntervalTrigger(minutes=config.CLEANUP_INTERVAL_MINUTES),
        id=CLEANUP_JOB_ID,
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    scheduler.start()
    logger.info(f"Cleanup scheduler started, running every {config.CLEANUP_INTERVAL_MINUTES} minutes")


def shutdown_scheduler():
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Cleanup scheduler stopped")
