"""Snapshot version detection."""
from __future__ import annotations

import re
from typing import Optional

# Literal -SNAPSHOT or a deployed timestamped build such as -20230101.120000-5.
SNAPSHOT_PATTERN = re.compile(r"^(.+)-((SNAPSHOT)|(\d{8}\.\d{6}-\d+))$")


def match_snapshot(version: Optional[str]) -> Optional[str]:
    """Return the release prefix of a snapshot version, or None.

    >>> match_snapshot("1.2.3-SNAPSHOT")
    '1.2.3'
    >>> match_snapshot("1.2.3-RC1") is None
    True
    """
    if not version:
        return None
    m = SNAPSHOT_PATTERN.fullmatch(version)
    if m is None:
        return None
    return m.group(1)


def is_snapshot(version: Optional[str]) -> bool:
    """Return True if ``version`` is a snapshot version."""
    return match_snapshot(version) is not None
