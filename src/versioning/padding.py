"""Zero padding of release prefixes for range matching.

Unpadded prefix matching is ambiguous: "4.2" prefix-matches "4.2.1". Padding
to "4.2.0" restricts the match to the intended release line.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

_DIGITS = re.compile(r"\d+")


@dataclass(frozen=True)
class ParsedVersion:
    """Numeric components of a Maven-style version; absent parts are None."""
    major: Optional[int] = None
    minor: Optional[int] = None
    incremental: Optional[int] = None
    build_number: Optional[int] = None
    qualifier: Optional[str] = None


def _int_token(token: str) -> int:
    # Leading zeros (other than "0" itself) are not numeric components.
    if len(token) > 1 and token.startswith("0"):
        raise ValueError(token)
    if not token.isdigit():
        raise ValueError(token)
    return int(token)


def parse_version(version: str) -> ParsedVersion:
    """Split a version into major/minor/incremental/build/qualifier.

    Follows Maven's DefaultArtifactVersion rules: anything that does not fit
    the numeric layout becomes a pure qualifier with no numeric parts.
    """
    part1, sep, part2 = version.partition("-")
    build_number = None
    qualifier = None
    if sep:
        if (len(part2) == 1 or not part2.startswith("0")) and part2.isdigit():
            build_number = int(part2)
        else:
            qualifier = part2

    if "." not in part1 and not part1.startswith("0"):
        try:
            return ParsedVersion(major=_int_token(part1), build_number=build_number, qualifier=qualifier)
        except ValueError:
            return ParsedVersion(qualifier=version)

    if ".." in part1 or part1.startswith(".") or part1.endswith("."):
        return ParsedVersion(qualifier=version)

    tokens = part1.split(".")
    try:
        major = _int_token(tokens[0])
        minor = _int_token(tokens[1]) if len(tokens) > 1 else None
        incremental = _int_token(tokens[2]) if len(tokens) > 2 else None
    except ValueError:
        return ParsedVersion(qualifier=version)
    if len(tokens) > 3:
        qualifier = tokens[3]
        if _DIGITS.fullmatch(qualifier):
            return ParsedVersion(qualifier=version)
    return ParsedVersion(major, minor, incremental, build_number, qualifier)


def pad_version(version: str) -> str:
    """Pad omitted minor/incremental components with zeros.

    >>> pad_version("4")
    '4.0.0'
    >>> pad_version("4.2")
    '4.2.0'
    >>> pad_version("4.2.1")
    '4.2.1'
    """
    parsed = parse_version(version)
    major = parsed.major or 0
    minor = parsed.minor or 0
    incremental = parsed.incremental or 0
    if minor == 0 and incremental == 0:
        return f"{major}.0.0"
    if incremental == 0:
        return f"{major}.{minor}.0"
    return version
