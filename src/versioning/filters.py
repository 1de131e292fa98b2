"""Include/exclude filtering of artifacts by coordinate patterns."""
from __future__ import annotations

from fnmatch import fnmatchcase
from typing import Iterable, List, Optional, Sequence

from .models import ArtifactCoordinate


def _split_patterns(patterns: Optional[Iterable[str]]) -> List[str]:
    """Flatten comma-separated pattern lists, dropping blanks."""
    result: List[str] = []
    for item in patterns or []:
        for part in str(item).split(","):
            part = part.strip()
            if part:
                result.append(part)
    return result


def _pattern_matches(pattern: str, coordinate: ArtifactCoordinate) -> bool:
    """Match ``groupId[:artifactId[:type[:classifier[:version]]]]`` with * wildcards.

    Omitted trailing segments match anything.
    """
    values: Sequence[str] = (
        coordinate.group_id,
        coordinate.artifact_id,
        coordinate.type or "",
        coordinate.classifier or "",
        coordinate.version or "",
    )
    segments = pattern.split(":")
    if len(segments) > len(values):
        return False
    return all(fnmatchcase(value, segment) for segment, value in zip(segments, values))


class ArtifactFilter:
    """Decide whether an artifact takes part in the update run."""

    def __init__(self, includes: Optional[Iterable[str]] = None, excludes: Optional[Iterable[str]] = None):
        self.includes = _split_patterns(includes)
        self.excludes = _split_patterns(excludes)

    def is_included(self, coordinate: ArtifactCoordinate) -> bool:
        if self.includes and not any(_pattern_matches(p, coordinate) for p in self.includes):
            return False
        return not any(_pattern_matches(p, coordinate) for p in self.excludes)
