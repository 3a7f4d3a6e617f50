"""Test fixtures."""

from collections.abc import Generator
import dataclasses
import json
from typing import Any

from pydantic_core import to_jsonable_python
import pytest

from icaltree.config import ParserConfig, use_config


def _omit_empty(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _omit_empty(v) for (k, v) in value.items() if v}
    if isinstance(value, list):
        return [_omit_empty(v) for v in value]
    return value


class DataclassEncoder(json.JSONEncoder):
    """Class that can dump data classes as dict for comparison to golden."""

    def default(self, o: Any) -> Any:
        if dataclasses.is_dataclass(o) and not isinstance(o, type):
            # Omit empty
            return _omit_empty(dataclasses.asdict(o))
        return to_jsonable_python(o)


@pytest.fixture
def json_encoder() -> json.JSONEncoder:
    """Fixture that creates a json encoder."""
    return DataclassEncoder()


@pytest.fixture
def strict_config() -> Generator[ParserConfig, None, None]:
    """Fixture that installs a strict parser configuration."""
    with use_config(ParserConfig(strict=True)) as config:
        yield config
