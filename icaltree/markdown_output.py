"""Library for rendering a parsed component tree as Markdown.

Components become headings, nested components one heading level deeper
(up to the deepest markdown level), and properties become bullet lists
with their parameters as nested bullets.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable

from .parsing.component import ParsedComponent
from .parsing.property import ParsedProperty
from .types.date_time import parse_date, parse_date_time
from .types.text import unescape_text

__all__ = [
    "render_markdown",
    "render_value",
]

_LOGGER = logging.getLogger(__name__)

MAX_HEADING_LEVEL = 6
DATE_PROPERTIES = {"DTSTART", "DTEND", "DUE", "TRIGGER", "DTSTAMP"}
MAILTO = "mailto:"
URL_SCHEMES = ("http://", "https://")
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"


def _render_timestamp(value: str) -> str | None:
    """Return a human readable DATE-TIME or DATE, or None if not one."""
    try:
        scanned = parse_date_time(value)
    except ValueError:
        pass
    else:
        if scanned.utc:
            return f"{scanned.value.strftime(DATETIME_FORMAT)} UTC"
        return scanned.value.strftime(DATETIME_FORMAT)
    try:
        date: datetime.date = parse_date(value)
    except ValueError:
        _LOGGER.debug("Value '%s' is not a timestamp", value)
        return None
    return date.strftime(DATE_FORMAT)


def render_value(prop: ParsedProperty, unescape: bool = False) -> str:
    """Render a property value, recognizing addresses, links and timestamps."""
    value = prop.value
    if value[: len(MAILTO)].lower() == MAILTO:
        return f"<{value[len(MAILTO):]}>"
    if value.lower().startswith(URL_SCHEMES):
        return f"[{value}]({value})"
    if prop.name.upper() in DATE_PROPERTIES and (
        timestamp := _render_timestamp(value)
    ):
        return timestamp
    return unescape_text(value) if unescape else value


def _render_property(prop: ParsedProperty, unescape: bool) -> list[str]:
    if prop.value:
        lines = [f"- *{prop.name}*: {render_value(prop, unescape)}"]
    else:
        lines = [f"- *{prop.name}*"]
    for param in prop.params:
        lines.append(f"  - *{param.name}*")
        lines.extend(f"    - {value}" for value in param.values)
    return lines


def _render_component(
    component: ParsedComponent, depth: int, unescape: bool
) -> list[str]:
    level = min(depth + 1, MAX_HEADING_LEVEL)
    lines = [f"{'#' * level} {component.name}", ""]
    for prop in component.properties:
        lines.extend(_render_property(prop, unescape))
    if component.properties:
        lines.append("")
    for child in component.components:
        lines.extend(_render_component(child, depth + 1, unescape))
    return lines


def render_markdown(
    components: Iterable[ParsedComponent], unescape: bool = False
) -> str:
    """Render the top level components as a Markdown document."""
    lines: list[str] = []
    for component in components:
        lines.extend(_render_component(component, 0, unescape))
    return "\n".join(lines)
