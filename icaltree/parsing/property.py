"""Library for handling rfc5545 properties and parameters.

A property is the definition of an individual attribute describing a
calendar object or a calendar component. A property is also really
just a "contentline", however properties in this file are the
output of the parser and are provided in the context of where
they live on a component hierarchy (e.g. attached to a component,
or sub component).

This is a very simple tokenizer that splits an unfolded line into a name,
a list of parameters and a raw value. It does not attempt to interpret the
meaning of the properties or value types themselves.

For example, given a content line of:

  ATTENDEE;ROLE=REQ-PARTICIPANT;DELEGATED-FROM="mailto:a@example.com",
   "mailto:b@example.com":mailto:c@example.com

This library would create a ParsedProperty with this structure:

  ParsedProperty(
    name='ATTENDEE',
    value='mailto:c@example.com',
    params=[
        ParsedPropertyParameter(name='ROLE', values=['REQ-PARTICIPANT']),
        ParsedPropertyParameter(
            name='DELEGATED-FROM',
            values=['mailto:a@example.com', 'mailto:b@example.com'],
        ),
    ]
  )

Quoted parameter values may contain the ':', ';' and ',' delimiters. The
quote characters themselves are not part of the parsed value.
"""

from __future__ import annotations

import re
from collections.abc import Generator, Iterable
from dataclasses import dataclass, field

from icaltree.exceptions import MalformedContentLine

from .const import (
    NAME_DELIMITERS,
    PARAM_DELIMITERS,
    PARAM_NAME_VALUE_SEP,
    QUOTE,
)

__all__ = [
    "ParsedProperty",
    "ParsedPropertyParameter",
    "parse_line",
    "parse_contentlines",
]

# Characters that should be encoded in quotes
_UNSAFE_CHAR_RE = re.compile(r"[,:;]")


@dataclass
class ParsedPropertyParameter:
    """An rfc5545 property parameter."""

    name: str

    values: list[str] = field(default_factory=list)
    """Parameter values in the order they appeared, with quotes removed."""


@dataclass
class ParsedProperty:
    """An rfc5545 property."""

    name: str
    value: str
    params: list[ParsedPropertyParameter] = field(default_factory=list)

    def get_parameter(self, name: str) -> ParsedPropertyParameter | None:
        """Return the first ParsedPropertyParameter with the specified name."""
        for param in self.params:
            if param.name.upper() == name.upper():
                return param
        return None

    def get_parameter_values(self, name: str) -> list[str]:
        """Return the list of property parameter values."""
        if not (param := self.get_parameter(name)):
            return []
        return param.values

    def get_parameter_value(self, name: str) -> str | None:
        """Return the single property parameter value."""
        values = self.get_parameter_values(name)
        if not values:
            return None
        if len(values) > 1:
            raise ValueError(f"Expected only a single parameter value, got {values}")
        return values[0]

    def ics(self) -> str:
        """Encode a ParsedProperty into the serialized format."""
        result = [self.name]
        for parameter in self.params:
            result_param_values = []
            for value in parameter.values:
                # Property parameters with values contain a colon, semicolon,
                # or a comma character must be placed in quoted text
                if _UNSAFE_CHAR_RE.search(value):
                    result_param_values.append(f"{QUOTE}{value}{QUOTE}")
                else:
                    result_param_values.append(value)
            values = ",".join(result_param_values)
            result.append(f";{parameter.name}{PARAM_NAME_VALUE_SEP}{values}")
        result.append(":")
        result.append(self.value)
        return "".join(result)

    @classmethod
    def from_ics(cls, contentline: str) -> ParsedProperty:
        """Decode a ParsedProperty from an rfc5545 iCalendar content line.

        Will raise a MalformedContentLine on failure.
        """
        return parse_line(contentline)


def _read_param_value(line: str, pos: int) -> tuple[str, int]:
    """Read a parameter value starting at pos.

    Returns the value with quote characters removed and the position of the
    unquoted delimiter that ended it.
    """
    chars: list[str] = []
    quoted = False
    line_len = len(line)
    while pos < line_len:
        char = line[pos]
        if char == QUOTE:
            quoted = not quoted
        elif not quoted and char in PARAM_DELIMITERS:
            return "".join(chars), pos
        else:
            chars.append(char)
        pos += 1
    if quoted:
        raise MalformedContentLine(
            "Unexpected end of line: unclosed quoted parameter value",
            detailed_error=line,
        )
    raise MalformedContentLine(
        f"Unexpected end of line after parameter value '{''.join(chars)}'. "
        f"Expected one of {PARAM_DELIMITERS}",
        detailed_error=line,
    )


def _read_param_name(line: str, pos: int) -> tuple[str, int]:
    """Read a parameter name, returning it and the position after the '='."""
    start = pos
    line_len = len(line)
    while pos < line_len and line[pos] != PARAM_NAME_VALUE_SEP:
        if line[pos] in PARAM_DELIMITERS or line[pos] == QUOTE:
            break
        pos += 1
    if pos >= line_len or line[pos] != PARAM_NAME_VALUE_SEP:
        raise MalformedContentLine(
            f"Invalid parameter format: missing '=' after parameter name part "
            f"'{line[start:pos]}'",
            detailed_error=line,
        )
    if pos == start:
        raise MalformedContentLine(
            "Invalid parameter format: empty parameter name", detailed_error=line
        )
    return line[start:pos], pos + 1


def parse_line(line: str) -> ParsedProperty:
    """Parse a single unfolded content line into a ParsedProperty."""

    # parse NAME, delimiters inside a quoted region are literal
    line_len = len(line)
    pos = 0
    quoted = False
    while pos < line_len:
        char = line[pos]
        if char == QUOTE:
            quoted = not quoted
        elif not quoted and char in NAME_DELIMITERS:
            break
        pos += 1
    else:
        raise MalformedContentLine(
            f"Invalid property line, no value found: expected one of "
            f"{NAME_DELIMITERS} after property name",
            detailed_error=line,
        )
    if pos == 0:
        raise MalformedContentLine("Missing property name", detailed_error=line)
    property_name = line[0:pos]

    # parse PARAMS if any
    params: list[ParsedPropertyParameter] = []
    delimiter = line[pos]
    pos += 1
    while delimiter == ";":
        param_name, pos = _read_param_name(line, pos)

        # parse one or more comma-separated PARAM-VALUES
        param_values: list[str] = []
        delimiter = ","
        while delimiter == ",":
            param_value, pos = _read_param_value(line, pos)
            param_values.append(param_value)
            delimiter = line[pos]
            pos += 1
        params.append(ParsedPropertyParameter(name=param_name, values=param_values))

    return ParsedProperty(name=property_name, value=line[pos:], params=params)


def parse_contentlines(
    contentlines: Iterable[str],
) -> Generator[ParsedProperty, None, None]:
    """Parse contentlines into ParsedProperty objects, skipping blank lines."""
    for contentline in contentlines:
        if not contentline:
            continue
        yield ParsedProperty.from_ics(contentline)
