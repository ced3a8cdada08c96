from datetime import date
from hotel_booking.utils.response import ApiError

CARD_NUMBER_MIN_LENGTH = 13
CARD_NUMBER_MAX_LENGTH = 19
CVV_LENGTHS = (3, 4)


def validate_stay_dates(check_in: date, check_out: date, today: date = None):
    if check_in >= check_out:
        raise ApiError("Check-out date must be after check-in date")
    if check_in < (today or date.today()):
        raise ApiError("Check-in date cannot be in the past")


def validate_card(card_number: str, cvv: str):
    # format only, no payment gateway behind this
    if not CARD_NUMBER_MIN_LENGTH <= len(card_number) <= CARD_NUMBER_MAX_LENGTH:
        raise ApiError("Invalid card number")
    if len(cvv) not in CVV_LENGTHS:
        raise ApiError("Invalid CVV")
