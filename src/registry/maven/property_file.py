"""Known versions from a local dependencies property file.

Properties-style text: one ``groupId:artifactId = versions`` entry per line,
versions comma-separated and kept in file order. ``#`` and ``!`` start
comments, a trailing backslash continues the line, and ``\\:``/``\\=`` escapes
are accepted in keys::

    # released versions
    com.example\\:core = 1.0.0, 1.1.0, 1.2.0
    org.acme:widgets = 2.0
"""
from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional, Tuple

from errors import MetadataRetrievalError
from versioning.models import ArtifactCoordinate

logger = logging.getLogger(__name__)

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _logical_lines(text: str) -> List[str]:
    """Join backslash-continued lines and drop comments and blanks."""
    lines: List[str] = []
    current = ""
    for raw in text.splitlines():
        line = raw.lstrip()
        if not current and (not line or line[0] in "#!"):
            continue
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            current += line[:-1]
            continue
        lines.append(current + line)
        current = ""
    if current:
        lines.append(current)
    return lines


def _unescape(value: str) -> str:
    out = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch == "\\" and i + 1 < len(value):
            nxt = value[i + 1]
            out.append(_ESCAPES.get(nxt, nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _split_entry(line: str) -> Tuple[str, str]:
    """Split at the first unescaped '='."""
    i = 0
    while i < len(line):
        if line[i] == "\\":
            i += 2
            continue
        if line[i] == "=":
            return line[:i], line[i + 1:]
        i += 1
    return line, ""


def parse_property_file(text: str) -> Dict[str, List[str]]:
    """Parse property text into ``{"groupId:artifactId": [versions...]}``."""
    result: Dict[str, List[str]] = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        key = _unescape(key).strip()
        if not key:
            continue
        result[key] = [v.strip() for v in _unescape(value).split(",") if v.strip()]
    return result


class PropertyFileVersionSource:
    """Look up versions in a dependencies property file.

    The file is read on every lookup so each coordinate is resolved
    independently, as with the repository source.
    """

    def __init__(self, path: str):
        self.path = os.path.abspath(path)

    def describe(self) -> str:
        return f"file {self.path}"

    def _load(self) -> Dict[str, List[str]]:
        try:
            with open(self.path, encoding="utf-8") as fh:
                return parse_property_file(fh.read())
        except OSError as e:
            raise MetadataRetrievalError(f"Unable to read dependencies property file {self.path}: {e}") from e

    def lookup(self, coordinate: ArtifactCoordinate) -> List[str]:
        versions: Optional[List[str]] = self._load().get(coordinate.key)
        if versions is None:
            logger.debug("No entry for %s in %s", coordinate.key, self.path)
            return []
        return list(versions)
