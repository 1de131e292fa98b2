"""Property interpolation for ${...} expressions in POM values."""
from __future__ import annotations

import re
from typing import Mapping, Optional

_EXPRESSION = re.compile(r"\$\{([^}]+)\}")
_MAX_DEPTH = 10


def interpolate(value: Optional[str], properties: Mapping[str, str]) -> Optional[str]:
    """Replace known ``${name}`` expressions; unknown ones are left as-is.

    Nested references are resolved up to a fixed depth so self-referencing
    properties cannot loop forever.
    """
    if not value or "${" not in value:
        return value
    result = value
    for _ in range(_MAX_DEPTH):
        expanded = _EXPRESSION.sub(lambda m: properties.get(m.group(1), m.group(0)), result)
        if expanded == result:
            break
        result = expanded
    return result
