"""
Date Normalizer.
Converts the loosely formatted dates shown by the tracking widget into
RFC 3339 timestamps.

The widget omits the year on update rows and delivered dates. Those are
resolved with the most recent plausible year: the current year, or the
previous one when the current year would put the event in the future.
This breaks down for shipments older than a year.

Every normalizer returns the source text unchanged when it cannot be
parsed, so no information is lost.
"""

from datetime import datetime, timedelta, tzinfo
from typing import Callable, Optional
from dateutil import tz
from dateutil.relativedelta import relativedelta
from loguru import logger

from parcel.exceptions import ConfigurationError


DEFAULT_TIME = "12:00 AM"

# Update rows: "Sep 19" + "2:51 PM", or "Sep 19, 2023" + "2:51 PM"
UPDATE_LAYOUT = "%b %d %I:%M %p %Y"
UPDATE_LAYOUT_WITH_YEAR = "%b %d, %Y %I:%M %p"

# Delivered: "Mon, Sep 18, 2:30 PM", or "Mon, Sep 18, 2023, 2:30 PM"
DELIVERY_LAYOUT = "%a, %b %d, %I:%M %p %Y"
DELIVERY_LAYOUT_WITH_YEAR = "%a, %b %d, %Y, %I:%M %p"

# Estimated delivery: "Monday, January 2, 2025"
ESTIMATED_LAYOUT = "%A, %B %d, %Y"


def resolve_timezone(name: str = "") -> tzinfo:
    """
    Resolve an IANA zone name.

    Args:
        name: Zone name such as "America/New_York"; empty for system local

    Returns:
        tzinfo for the zone

    Raises:
        ConfigurationError: If the zone is unknown
    """
    if not name:
        return tz.tzlocal()

    zone = tz.gettz(name)
    if zone is None:
        raise ConfigurationError(f"Unknown time zone: {name}", timezone=name)
    return zone


def format_timestamp(dt: datetime) -> str:
    """Format an aware datetime as RFC 3339, using Z for a zero offset."""
    stamp = dt.isoformat(timespec="seconds")
    if dt.utcoffset() == timedelta(0):
        stamp = stamp[:-len("+00:00")] + "Z"
    return stamp


class DateNormalizer:
    """
    Normalizes tracking widget dates in a fixed time zone.

    Args:
        zone: Time zone applied to every parsed date
        clock: Returns the current aware datetime; defaults to now in `zone`
    """

    def __init__(self, zone: tzinfo, clock: Optional[Callable[[], datetime]] = None):
        self.zone = zone
        self._clock = clock or (lambda: datetime.now(self.zone))

    def _parse(self, text: str, layout: str) -> Optional[datetime]:
        try:
            return datetime.strptime(text, layout).replace(tzinfo=self.zone)
        except ValueError:
            return None

    def _parse_yearless(self, text: str, layout: str) -> Optional[datetime]:
        """Parse text without a year, assuming the most recent plausible year."""
        now = self._clock()
        dt = self._parse(f"{text} {now.year}", layout)
        if dt is None:
            return None

        # Assuming all dates are within the current or preceding year
        if dt > now:
            dt = dt - relativedelta(years=1)
        return dt

    def normalize_update_datetime(self, date_text: str, time_text: str) -> str:
        """
        Normalize the date and time cells of an update row.

        Returns:
            RFC 3339 timestamp, or "<date>, <time>" if neither layout matches
        """
        if not time_text:
            time_text = DEFAULT_TIME

        dt = self._parse_yearless(f"{date_text} {time_text}", UPDATE_LAYOUT)
        if dt is None:
            dt = self._parse(f"{date_text} {time_text}", UPDATE_LAYOUT_WITH_YEAR)
        if dt is None:
            logger.debug(f"Unrecognized update date: {date_text!r} {time_text!r}")
            return f"{date_text}, {time_text}"

        return format_timestamp(dt)

    def normalize_delivery_date(self, date_text: str) -> str:
        """Normalize the date of a delivered shipment."""
        dt = self._parse_yearless(date_text, DELIVERY_LAYOUT)
        if dt is None:
            dt = self._parse(date_text, DELIVERY_LAYOUT_WITH_YEAR)
        if dt is None:
            logger.debug(f"Unrecognized delivery date: {date_text!r}")
            return date_text

        return format_timestamp(dt)

    def normalize_estimated_delivery(self, date_text: str) -> str:
        """Normalize an estimated delivery date. The year is always present."""
        dt = self._parse(date_text, ESTIMATED_LAYOUT)
        if dt is None:
            logger.debug(f"Unrecognized estimated delivery: {date_text!r}")
            return date_text

        return format_timestamp(dt)
