"""In-place version edits on POM text.

Every edit touches only the character data of one <version> element; all
other bytes of the document are preserved. The document is re-scanned on each
call so later edits see earlier ones.
"""
from __future__ import annotations

import logging
import re
from typing import List, Mapping, Optional, Tuple
from xml.sax.saxutils import escape

from constants import Sections
from errors import DocumentRewriteError
from versioning.models import DependencyLocator
from common.logging_utils import extra_context, is_debug_enabled
from .properties import interpolate
from .scanner import Element, element_content, element_text, scan

logger = logging.getLogger(__name__)

_PARENT_VERSION_PATH = "/project/parent/version"
_SECTION_PATHS = {
    Sections.IMPORTED_MANAGEMENT: re.compile(
        r"^/project(/profiles/profile)?/dependencyManagement/dependencies/dependency$"
    ),
    Sections.DEPENDENCY_MANAGEMENT: re.compile(
        r"^/project(/profiles/profile)?/dependencyManagement/dependencies/dependency$"
    ),
    Sections.DEPENDENCIES: re.compile(r"^/project(/profiles/profile)?/dependencies/dependency$"),
}


class PomRewriter:
    """Holds a POM document in memory and applies version substitutions."""

    def __init__(self, text: str, properties: Optional[Mapping[str, str]] = None):
        self._original = text
        self._text = text
        self._properties = dict(properties or {})

    @property
    def text(self) -> str:
        return self._text

    @property
    def modified(self) -> bool:
        return self._text != self._original

    def set_parent_version(self, old_version: str, new_version: str) -> bool:
        """Replace the parent <version> if it currently reads ``old_version``."""
        root = scan(self._text)
        spans = [
            span for span in (
                self._replaceable_span(el, old_version)
                for el in root.iter() if el.path == _PARENT_VERSION_PATH
            ) if span is not None
        ]
        return self._apply(spans, new_version, target="parent")

    def set_dependency_version(self, locator: DependencyLocator, old_version: str, new_version: str) -> bool:
        """Replace the version of matching dependencies in the locator's section.

        Returns:
            True if the document text changed.
        """
        if locator.section not in _SECTION_PATHS:
            raise DocumentRewriteError(f"Section {locator.section.value} holds no dependency versions")
        path_re = _SECTION_PATHS[locator.section]
        root = scan(self._text)

        spans: List[Tuple[int, int]] = []
        for dep in root.iter():
            if dep.local_name != "dependency" or not path_re.match(dep.path):
                continue
            if not self._coordinate_matches(dep, locator):
                continue
            version_el = dep.child("version")
            if version_el is None:
                continue
            span = self._replaceable_span(version_el, old_version)
            if span is not None:
                spans.append(span)
        return self._apply(spans, new_version, target=f"{locator.group_id}:{locator.artifact_id}")

    def _coordinate_matches(self, dep: Element, locator: DependencyLocator) -> bool:
        group_el = dep.child("groupId")
        artifact_el = dep.child("artifactId")
        if group_el is None or artifact_el is None:
            return False
        group_id = interpolate(element_text(self._text, group_el), self._properties)
        artifact_id = interpolate(element_text(self._text, artifact_el), self._properties)
        return group_id == locator.group_id and artifact_id == locator.artifact_id

    def _replaceable_span(self, element: Element, old_version: str) -> Optional[Tuple[int, int]]:
        """Span of the stripped character data if it literally equals ``old_version``."""
        content = element_content(self._text, element)
        if "<" in content:
            if is_debug_enabled(logger):
                logger.debug("Skipping version with embedded markup at %s", element.path)
            return None
        current = element_text(self._text, element)
        if current != old_version:
            if current.startswith("${") and interpolate(current, self._properties) == old_version:
                logger.info("Version %s at %s is defined by a property; not rewritten", current, element.path)
            return None
        leading = len(content) - len(content.lstrip())
        trailing = len(content.rstrip())
        return element.open_end + leading, element.open_end + trailing

    def _apply(self, spans: List[Tuple[int, int]], new_version: str, target: str) -> bool:
        if not spans:
            return False
        before = self._text
        replacement = escape(new_version)
        text = before
        for start, end in sorted(spans, reverse=True):
            text = text[:start] + replacement + text[end:]
        self._text = text
        changed = text != before
        if is_debug_enabled(logger):
            logger.debug(
                "Version rewrite",
                extra=extra_context(
                    event="rewrite",
                    component="rewriter",
                    action="set_version",
                    target=target,
                    outcome="changed" if changed else "unchanged",
                    occurrences=len(spans),
                )
            )
        return changed
