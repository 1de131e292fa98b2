"""Data models for snapshot detection, lookup and rewrite decisions."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from constants import Sections


class Outcome(Enum):
    """Terminal state of one dependency entry."""
    SKIPPED = "skipped"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class ArtifactCoordinate:
    """Maven coordinate; version is optional for lookup keys."""
    group_id: str
    artifact_id: str
    version: Optional[str] = None
    type: str = "jar"
    classifier: Optional[str] = None

    @property
    def key(self) -> str:
        """Return the "groupId:artifactId" lookup key."""
        return f"{self.group_id}:{self.artifact_id}"

    def with_version(self, version: str) -> "ArtifactCoordinate":
        """Return a copy carrying ``version``."""
        return replace(self, version=version)

    def __str__(self) -> str:
        parts = [self.group_id, self.artifact_id, self.type]
        if self.classifier:
            parts.append(self.classifier)
        if self.version:
            parts.append(self.version)
        return ":".join(parts)


@dataclass(frozen=True)
class DependencyLocator:
    """Where an entry's version lives in the POM text."""
    section: Sections
    group_id: str
    artifact_id: str


@dataclass(frozen=True)
class DependencyEntry:
    """One parent reference or dependency declaration read from the POM.

    ``version`` is the effective (interpolated) version used for matching;
    ``raw_version`` is the literal text of the <version> element.
    """
    coordinate: ArtifactCoordinate
    version: str
    raw_version: str
    locator: DependencyLocator
    scope: Optional[str] = None

    @property
    def section(self) -> Sections:
        return self.locator.section

    def __str__(self) -> str:
        return f"{self.coordinate.key}:{self.coordinate.type}:{self.version}"


@dataclass
class UpdateDecision:
    """Outcome of processing a single entry."""
    entry: DependencyEntry
    outcome: Outcome
    target_version: Optional[str] = None
    message: Optional[str] = None


@dataclass
class PomEntries:
    """All entries read from one POM, grouped by section."""
    parent: Optional[DependencyEntry] = None
    imported_management: List[DependencyEntry] = field(default_factory=list)
    dependency_management: List[DependencyEntry] = field(default_factory=list)
    dependencies: List[DependencyEntry] = field(default_factory=list)


@dataclass
class UpdateReport:
    """Collected decisions of one run."""
    decisions: List[UpdateDecision] = field(default_factory=list)

    def by_outcome(self, outcome: Outcome) -> List[UpdateDecision]:
        return [d for d in self.decisions if d.outcome == outcome]

    @property
    def updated(self) -> List[UpdateDecision]:
        return self.by_outcome(Outcome.UPDATED)

    @property
    def unresolved(self) -> List[UpdateDecision]:
        return self.by_outcome(Outcome.UNRESOLVED)
