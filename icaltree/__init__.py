"""Parse iCalendar (rfc5545) streams into a tree of components.

```python
from icaltree.parsing.component import parse_content

components = parse_content(ics)
for calendar in components:
    print(calendar.name, [child.name for child in calendar.components])
```
"""

__all__ = [
    "config",
    "exceptions",
    "json_output",
    "markdown_output",
    "parsing",
    "types",
]
