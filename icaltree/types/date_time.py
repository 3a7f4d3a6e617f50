"""Library for parsing DATE-TIME and DATE values.

A DATE-TIME value is either in UTC, marked with a trailing "Z", or a
"floating" local time:

    19980119T070000Z    (UTC)
    19980118T230000     (local time)

Timezone references via a TZID parameter are not resolved here; such values
are treated as local time.
"""

from __future__ import annotations

import datetime
import logging
import re
from dataclasses import dataclass

from dateutil import tz

__all__ = [
    "DateTimeValue",
    "parse_date_time",
    "parse_date",
]

_LOGGER = logging.getLogger(__name__)

DATETIME_REGEX = re.compile(r"^([0-9]{8})T([0-9]{6})([Zz])?$")
DATE_REGEX = re.compile(r"^([0-9]{4})([0-9]{2})([0-9]{2})$")


@dataclass(frozen=True)
class DateTimeValue:
    """A scanned DATE-TIME, flagged as either UTC or local time."""

    value: datetime.datetime
    """An aware datetime in UTC or in the local timezone of the host."""

    utc: bool

    def timestamp(self) -> float:
        """Return the POSIX timestamp of the instant."""
        return self.value.timestamp()


def parse_date_time(value: str) -> DateTimeValue:
    """Parse a rfc5545 DATE-TIME value."""
    if not (match := DATETIME_REGEX.fullmatch(value)):
        raise ValueError(f"Expected value to match DATE-TIME pattern: {value}")

    # Example: 19980118T230000
    date_value = match.group(1)
    year = int(date_value[0:4])
    month = int(date_value[4:6])
    day = int(date_value[6:])
    time_value = match.group(2)
    hour = int(time_value[0:2])
    minute = int(time_value[2:4])
    second = int(time_value[4:6])

    utc = match.group(3) is not None
    timezone: datetime.tzinfo = datetime.timezone.utc if utc else tz.tzlocal()
    result = datetime.datetime(year, month, day, hour, minute, second, tzinfo=timezone)
    _LOGGER.debug("Parsed DATE-TIME %s as %s", value, result)
    return DateTimeValue(value=result, utc=utc)


def parse_date(value: str) -> datetime.date:
    """Parse a rfc5545 DATE value."""
    if not (match := DATE_REGEX.fullmatch(value)):
        raise ValueError(f"Expected value to match DATE pattern: {value}")
    return datetime.date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
