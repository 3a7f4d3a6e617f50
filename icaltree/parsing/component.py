"""Library for handling rfc5545 components.

An iCalendar object consists of one or more components, that may have
properties or sub-components. An example of a component might be the
calendar itself, an event, a to-do, a journal entry, timezone info, etc.

Components created here have no semantic meaning, but hold all the
data needed to interpret them based on the type.

Components are assembled with an explicit stack rather than recursion, so
arbitrarily deep nesting does not grow the call stack:

```python
from icaltree.parsing.component import iter_components

with open("calendar.ics", encoding="utf-8") as ics_file:
    for component in iter_components(ics_file):
        print(component.name, len(component.components))
```
"""

from __future__ import annotations

import io
import logging
from collections.abc import Generator
from dataclasses import dataclass, field
from typing import TextIO

from icaltree.config import ParserConfig, current_config
from icaltree.exceptions import (
    CalendarParseError,
    LineTooLong,
    MalformedContentLine,
    MismatchedEnd,
    NestingTooDeep,
    PropertyOutsideComponent,
    UnbalancedEnd,
    UnterminatedComponent,
)

from .const import ATTR_BEGIN, ATTR_END, ATTR_STREAM
from .property import ParsedProperty, parse_line
from .reader import LineReader, fold_line

__all__ = [
    "ParsedComponent",
    "ComponentBuilder",
    "iter_components",
    "parse_stream",
    "parse_content",
    "encode_content",
]

_LOGGER = logging.getLogger(__name__)


@dataclass
class ParsedComponent:
    """An rfc5545 component."""

    name: str
    properties: list[ParsedProperty] = field(default_factory=list)
    components: list[ParsedComponent] = field(default_factory=list)

    def ics(self) -> str:
        """Encode a component as rfc5545 text."""
        contentlines = [f"{ATTR_BEGIN}:{self.name}"]
        for prop in self.properties:
            contentlines.extend(fold_line(prop.ics()))
        contentlines.extend([component.ics() for component in self.components])
        contentlines.append(f"{ATTR_END}:{self.name}")
        return "\n".join(contentlines)


class ComponentBuilder:
    """Stack machine that assembles content lines into a component tree.

    Lines are fed one at a time. The component on top of the stack receives
    properties; a BEGIN pushes a new component and an END pops it, attaching
    it to its parent, or to the output when no parent remains.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        """Initialize ComponentBuilder."""
        self._config = config if config is not None else current_config()
        self._stack: list[ParsedComponent] = []
        self.root = ParsedComponent(name=ATTR_STREAM)
        """Container that owns every completed top level component."""
        self.errors: list[CalendarParseError] = []
        """Errors that were recovered from by skipping a line."""

    @property
    def depth(self) -> int:
        """Return the number of currently open components."""
        return len(self._stack)

    @property
    def components(self) -> list[ParsedComponent]:
        """Return the completed top level components."""
        return self.root.components

    def feed(
        self, line: str, line_number: int | None = None
    ) -> ParsedComponent | None:
        """Consume a single unfolded content line.

        Returns the top level component when the line completes one.
        """
        if not line:
            return None
        try:
            prop = parse_line(line)
        except MalformedContentLine as err:
            err.line_number = line_number
            self.recover(err)
            return None

        name = prop.name.upper()
        if name == ATTR_BEGIN:
            self._begin(prop, line_number)
            return None
        if name == ATTR_END:
            return self._end(prop, line_number)
        if not self._stack:
            self.recover(
                PropertyOutsideComponent(
                    f"Property '{prop.name}' is not inside a component",
                    detailed_error=line,
                    line_number=line_number,
                )
            )
            return None
        self._stack[-1].properties.append(prop)
        return None

    def recover(self, err: CalendarParseError) -> None:
        """Record a local error and skip the line, or raise it if configured."""
        if not self._config.skip_malformed and not isinstance(
            err, PropertyOutsideComponent
        ):
            raise err
        _LOGGER.warning("Skipping content line: %s (%s)", err, err.detailed_error)
        self.errors.append(err)

    def _begin(self, prop: ParsedProperty, line_number: int | None) -> None:
        if not prop.value:
            self.recover(
                MalformedContentLine(
                    f"{ATTR_BEGIN} is missing a component name",
                    detailed_error=prop.ics(),
                    line_number=line_number,
                )
            )
            return
        max_depth = self._config.max_depth
        if max_depth is not None and len(self._stack) >= max_depth:
            raise NestingTooDeep(
                f"Component '{prop.value}' exceeds maximum nesting depth of {max_depth}",
                detailed_error=self._path(),
                line_number=line_number,
            )
        _LOGGER.debug("%s:%s (depth %d)", ATTR_BEGIN, prop.value, len(self._stack))
        self._stack.append(ParsedComponent(name=prop.value))

    def _end(
        self, prop: ParsedProperty, line_number: int | None
    ) -> ParsedComponent | None:
        if not self._stack:
            raise UnbalancedEnd(
                f"Unexpected '{ATTR_END}:{prop.value}' with no open component",
                detailed_error=prop.ics(),
                line_number=line_number,
            )
        if self._config.strict and prop.value.upper() != self._stack[-1].name.upper():
            raise MismatchedEnd(
                f"Unexpected '{ATTR_END}:{prop.value}', expected "
                f"{ATTR_END}:{self._stack[-1].name}",
                detailed_error=self._path(),
                line_number=line_number,
            )
        component = self._stack.pop()
        _LOGGER.debug("%s:%s (depth %d)", ATTR_END, prop.value, len(self._stack))
        if self._stack:
            self._stack[-1].components.append(component)
            return None
        self.root.components.append(component)
        return component

    def close(self) -> list[ParsedComponent]:
        """Signal the end of the stream and return the top level components."""
        if self._stack:
            raise UnterminatedComponent(
                f"Unexpected end of stream, expected {ATTR_END}:{self._stack[-1].name}",
                detailed_error=self._path(),
            )
        return self.root.components

    def _path(self) -> str:
        return "/".join(component.name for component in self._stack)


def iter_components(
    stream: TextIO, config: ParserConfig | None = None
) -> Generator[ParsedComponent, None, None]:
    """Parse a stream, yielding each top level component once it is complete.

    Components already yielded are complete even if a later error aborts
    the parse.
    """
    if config is None:
        config = current_config()
    reader = LineReader(stream, max_line_length=config.max_line_length)
    builder = ComponentBuilder(config)
    while True:
        try:
            line = next(reader)
        except StopIteration:
            break
        except LineTooLong as err:
            builder.recover(err)
            continue
        if (component := builder.feed(line, reader.line_number)) is not None:
            yield component
    builder.close()


def parse_stream(
    stream: TextIO, config: ParserConfig | None = None
) -> list[ParsedComponent]:
    """Parse a stream of content lines into a list of top level components.

    This includes all necessary unfolding of long lines into full properties.
    Structural errors raise and no partial tree is returned.
    """
    return list(iter_components(stream, config))


def parse_content(
    content: str, config: ParserConfig | None = None
) -> list[ParsedComponent]:
    """Parse rfc5545 content into a list of top level components."""
    return parse_stream(io.StringIO(content), config)


def encode_content(components: list[ParsedComponent]) -> str:
    """Encode a set of parsed components into content."""
    return "\n".join([component.ics() for component in components])
