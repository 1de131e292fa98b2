"""Replace snapshot versions in a POM with their released counterparts.

For every parent reference, managed dependency and direct dependency the
planner detects a snapshot version, looks up known versions for the release
prefix, selects a release under the configured policy and asks the rewriter
to substitute it. A missing release is logged, or raised as
UnresolvedVersionError when ``fail_if_not_replaced`` is set. Any other error
aborts the run; edits already applied stay in the rewriter's document.
"""
from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, Optional

from constants import Sections
from errors import UnresolvedVersionError
from common.logging_utils import extra_context, is_debug_enabled
from .filters import ArtifactFilter
from .matcher import match_snapshot
from .models import DependencyEntry, Outcome, PomEntries, UpdateDecision, UpdateReport
from .range_spec import parse_version_spec
from .selector import VersionSelector


class DependencyUpdatePlanner:
    """Drive detection, lookup, selection and rewrite for each entry."""

    def __init__(
        self,
        config,
        version_source,
        rewriter,
        artifact_filter: Optional[ArtifactFilter] = None,
        reactor: AbstractSet[str] = frozenset(),
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.version_source = version_source
        self.rewriter = rewriter
        self.artifact_filter = artifact_filter or ArtifactFilter(config.includes, config.excludes)
        self.reactor = reactor
        self.log = logger or logging.getLogger(__name__)
        self.selector = VersionSelector(
            allow_range_matching=config.allow_range_matching,
            pad_version_for_range_matching=config.pad_version_for_range_matching,
        )

    def plan_and_apply(self, entries: PomEntries) -> UpdateReport:
        """Process all enabled sections in order: parent, management, dependencies."""
        report = UpdateReport()
        if entries.parent is not None and self.config.process_parent:
            report.decisions.append(self.process_entry(entries.parent))
        if self.config.process_dependency_management:
            self._process_all(entries.imported_management, report)
            self._process_all(entries.dependency_management, report)
        if self.config.process_dependencies:
            self._process_all(entries.dependencies, report)
        return report

    def _process_all(self, entries: Iterable[DependencyEntry], report: UpdateReport) -> None:
        for entry in entries:
            report.decisions.append(self.process_entry(entry))

    def _is_reactor_entry(self, entry: DependencyEntry) -> bool:
        return entry.section != Sections.PARENT and entry.coordinate.key in self.reactor

    def process_entry(self, entry: DependencyEntry) -> UpdateDecision:
        """Run one entry to a terminal state.

        Raises:
            InvalidVersionSpecError: the release prefix is malformed.
            MetadataRetrievalError: the version source failed.
            UnresolvedVersionError: no release found in strict mode.
            DocumentRewriteError: the POM text could not be edited.
        """
        if self.config.exclude_reactor and self._is_reactor_entry(entry):
            self.log.info("Ignoring reactor dependency: %s", entry)
            return UpdateDecision(entry, Outcome.SKIPPED, message="reactor")

        if not self.artifact_filter.is_included(entry.coordinate):
            if is_debug_enabled(self.log):
                self.log.debug("Excluded by filter: %s", entry)
            return UpdateDecision(entry, Outcome.SKIPPED, message="excluded")

        release_prefix = match_snapshot(entry.version)
        if release_prefix is None:
            return UpdateDecision(entry, Outcome.SKIPPED, message="not a snapshot")

        parse_version_spec(release_prefix)

        self.log.debug("Looking for a release of %s", entry)
        # Query with the release version; snapshot lookups report snapshot metadata.
        lookup = entry.coordinate.with_version(release_prefix)
        known_versions = self.version_source.lookup(lookup)

        selection = self.selector.select(release_prefix, known_versions)
        if selection.padded:
            self.log.info("Padded version %s to %s for %s", release_prefix, selection.prefix, entry)
        if is_debug_enabled(self.log):
            self.log.debug(
                "Release selection",
                extra=extra_context(
                    event="decision",
                    component="planner",
                    action="select",
                    target=entry.coordinate.key,
                    outcome="resolved" if selection.resolved else "unresolved",
                    candidate_count=len(known_versions),
                )
            )

        if not selection.resolved:
            suffix = " via rangeMatching" if selection.range_matching else ""
            self.log.info("No matching release of %s to update%s.", entry, suffix)
            if self.config.fail_if_not_replaced:
                raise UnresolvedVersionError(entry.coordinate.key, entry.version, selection.range_matching)
            return UpdateDecision(entry, Outcome.UNRESOLVED, message=f"no release matching {selection.prefix}")

        if entry.section == Sections.PARENT:
            changed = self.rewriter.set_parent_version(entry.version, selection.target)
        else:
            changed = self.rewriter.set_dependency_version(entry.locator, entry.version, selection.target)

        if changed:
            self.log.info("Updated %s to version %s", entry, selection.target)
            return UpdateDecision(entry, Outcome.UPDATED, target_version=selection.target)
        return UpdateDecision(entry, Outcome.UNCHANGED, target_version=selection.target,
                              message="version not rewritten in document")
