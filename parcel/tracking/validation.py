"""
Input validation for tracking requests.
Runs before any network call.
"""

import re

from parcel.exceptions import InputValidationError
from parcel.models import Carrier


MIN_TRACKING_LENGTH = 7
MAX_TRACKING_LENGTH = 40

_NON_ALPHANUMERIC = re.compile(r"[^0-9A-Za-z]")


def sanitize_tracking_number(tracking_number: str) -> str:
    """
    Strip everything but ASCII letters and digits from a tracking number.

    Raises:
        InputValidationError: If the stripped number is too short or too long
    """
    cleaned = _NON_ALPHANUMERIC.sub("", tracking_number)
    if not MIN_TRACKING_LENGTH <= len(cleaned) <= MAX_TRACKING_LENGTH:
        raise InputValidationError(
            f"Invalid tracking number: {tracking_number!r} "
            f"(expected {MIN_TRACKING_LENGTH}-{MAX_TRACKING_LENGTH} letters or digits)",
            tracking_number=tracking_number,
        )
    return cleaned


def validate_carrier(carrier: str) -> Carrier:
    """Match a carrier code case-insensitively."""
    try:
        return Carrier(carrier.upper())
    except ValueError:
        valid = ", ".join(c.value for c in Carrier)
        raise InputValidationError(
            f"Invalid carrier: {carrier!r} (expected one of {valid})",
            carrier=carrier,
        ) from None
