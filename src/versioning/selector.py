"""Release selection policies: exact match and prefix ("range") match."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .matcher import is_snapshot
from .padding import pad_version


@dataclass(frozen=True)
class Selection:
    """Result of a selection.

    ``prefix`` is the release prefix actually compared, after padding.
    ``target`` is None when nothing matched.
    """
    prefix: str
    target: Optional[str]
    padded: bool = False
    range_matching: bool = False

    @property
    def resolved(self) -> bool:
        return self.target is not None


def select_exact(release_prefix: str, known_versions: Iterable[str]) -> Optional[str]:
    """Return ``release_prefix`` if it is one of ``known_versions``."""
    for candidate in known_versions:
        if candidate == release_prefix:
            return candidate
    return None


def select_by_prefix(release_prefix: str, known_versions: Iterable[str]) -> Optional[str]:
    """Return the last known version whose text starts with ``release_prefix``.

    The scan keeps source order and the last match wins; versions are not
    compared numerically. Snapshot versions are never selected.
    """
    selected = None
    for candidate in known_versions:
        if is_snapshot(candidate):
            continue
        if candidate.startswith(release_prefix):
            selected = candidate
    return selected


class VersionSelector:
    """Apply the configured selection policy to a set of known versions."""

    def __init__(self, allow_range_matching: bool = False, pad_version_for_range_matching: bool = False):
        self.allow_range_matching = allow_range_matching
        # Padding only applies to prefix matching.
        self.pad_version_for_range_matching = pad_version_for_range_matching

    def select(self, release_prefix: str, known_versions: Iterable[str]) -> Selection:
        """Pick the version to adopt for ``release_prefix``."""
        if not self.allow_range_matching:
            return Selection(prefix=release_prefix, target=select_exact(release_prefix, known_versions))

        prefix = release_prefix
        padded = False
        if self.pad_version_for_range_matching:
            prefix = pad_version(release_prefix)
            padded = prefix != release_prefix
        return Selection(
            prefix=prefix,
            target=select_by_prefix(prefix, known_versions),
            padded=padded,
            range_matching=True,
        )
