"""Library for rendering a parsed component tree as JSON.

Each component is rendered as an object with its name, its properties under
"prop" and its sub-components under "components":

    [
      {
        "name": "VCALENDAR",
        "prop": [{"name": "VERSION", "value": "2.0"}],
        "components": []
      }
    ]
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from .parsing.component import ParsedComponent
from .parsing.property import ParsedProperty
from .types.text import unescape_text

__all__ = [
    "component_as_dict",
    "render_json",
]


def _property_as_dict(prop: ParsedProperty, unescape: bool) -> dict[str, Any]:
    result: dict[str, Any] = {"name": prop.name}
    if prop.params:
        result["params"] = [
            {"name": param.name, "values": list(param.values)} for param in prop.params
        ]
    result["value"] = unescape_text(prop.value) if unescape else prop.value
    return result


def component_as_dict(
    component: ParsedComponent, unescape: bool = False
) -> dict[str, Any]:
    """Convert a component and its subtree into json serializable objects."""
    return {
        "name": component.name,
        "prop": [_property_as_dict(prop, unescape) for prop in component.properties],
        "components": [
            component_as_dict(child, unescape) for child in component.components
        ],
    }


def render_json(
    components: Iterable[ParsedComponent], unescape: bool = False, indent: int = 2
) -> str:
    """Render the top level components as a JSON array."""
    return json.dumps(
        [component_as_dict(component, unescape) for component in components],
        indent=indent,
        ensure_ascii=False,
    )
