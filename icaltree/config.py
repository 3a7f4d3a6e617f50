"""Configuration for the icaltree parser.

A `ParserConfig` can be passed explicitly to the parsing functions, or
installed as the default for the current context:

```python
from icaltree.config import ParserConfig, use_config
from icaltree.parsing.component import parse_content

with use_config(ParserConfig(strict=True)):
    components = parse_content(ics)
```
"""

from __future__ import annotations

from collections.abc import Generator
import contextlib
import contextvars
import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, PositiveInt

__all__ = [
    "ParserConfig",
    "current_config",
    "use_config",
]

_LOGGER = logging.getLogger(__name__)


class ParserConfig(BaseModel):
    """Options that control how strictly an ics stream is parsed."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    strict: bool = False
    """Require each END marker to name the component that is open.

    Many real world producers are sloppy here, so by default any END simply
    closes the innermost open component.
    """

    skip_malformed: bool = True
    """Skip content lines that can't be tokenized instead of failing the parse."""

    max_depth: Optional[PositiveInt] = None
    """Maximum number of simultaneously open components, or unbounded."""

    max_line_length: Optional[PositiveInt] = None
    """Maximum length of an unfolded content line, or unbounded."""


_DEFAULT_CONFIG = ParserConfig()
_current_config: contextvars.ContextVar[ParserConfig] = contextvars.ContextVar(
    "parser_config", default=_DEFAULT_CONFIG
)


@contextlib.contextmanager
def use_config(config: ParserConfig) -> Generator[ParserConfig]:
    """Context manager to install a default parser configuration."""
    _LOGGER.debug("Using parser configuration %s", config)
    token = _current_config.set(config)
    try:
        yield config
    finally:
        _current_config.reset(token)


def current_config() -> ParserConfig:
    """Return the parser configuration for the current context."""
    return _current_config.get()
