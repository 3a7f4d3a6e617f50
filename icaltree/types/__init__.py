"""Libraries for scanning rfc5545 property value data types."""

from .date_time import DateTimeValue, parse_date, parse_date_time
from .text import unescape_text

__all__ = [
    "DateTimeValue",
    "parse_date",
    "parse_date_time",
    "unescape_text",
]
