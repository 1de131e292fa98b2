"""POM reading: dependency entries, properties and reactor membership."""
from __future__ import annotations

import codecs
import logging
import os
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from constants import Constants, Sections
from errors import DescriptorReadError
from versioning.models import ArtifactCoordinate, DependencyEntry, DependencyLocator, PomEntries
from .properties import interpolate

logger = logging.getLogger(__name__)

_XML_DECL_ENCODING = re.compile(rb"""\s*<\?xml[^>]*?\sencoding\s*=\s*["']([A-Za-z][A-Za-z0-9._-]*)["']""")


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(element: Optional[ET.Element], name: str) -> Optional[ET.Element]:
    if element is None:
        return None
    for c in element:
        if isinstance(c.tag, str) and _local(c.tag) == name:
            return c
    return None


def _children(element: Optional[ET.Element], name: str) -> List[ET.Element]:
    if element is None:
        return []
    return [c for c in element if isinstance(c.tag, str) and _local(c.tag) == name]


def _text(element: Optional[ET.Element], name: str) -> Optional[str]:
    node = _child(element, name)
    if node is None or node.text is None:
        return None
    value = node.text.strip()
    return value or None


@dataclass
class PomModel:
    """The parts of a POM the updater needs."""
    group_id: Optional[str]
    artifact_id: Optional[str]
    version: Optional[str]
    properties: Dict[str, str] = field(default_factory=dict)
    entries: PomEntries = field(default_factory=PomEntries)
    modules: List[str] = field(default_factory=list)

    @property
    def key(self) -> Optional[str]:
        if not self.group_id or not self.artifact_id:
            return None
        return f"{self.group_id}:{self.artifact_id}"


def _collect_properties(root: ET.Element, group_id, artifact_id, version, parent: Optional[ET.Element]) -> Dict[str, str]:
    props: Dict[str, str] = {}
    properties = _child(root, "properties")
    for prop in (list(properties) if properties is not None else []):
        if isinstance(prop.tag, str):
            props[_local(prop.tag)] = (prop.text or "").strip()
    builtins = {
        "groupId": group_id,
        "artifactId": artifact_id,
        "version": version,
    }
    for name, value in builtins.items():
        if value:
            props[f"project.{name}"] = value
            props[f"pom.{name}"] = value
    if parent is not None:
        for name in ("groupId", "artifactId", "version"):
            value = _text(parent, name)
            if value:
                props[f"project.parent.{name}"] = value
                props[f"parent.{name}"] = value
    return props


def _dependency_entry(dep: ET.Element, section: Sections, props: Dict[str, str]) -> Optional[DependencyEntry]:
    group_id = interpolate(_text(dep, "groupId"), props)
    artifact_id = interpolate(_text(dep, "artifactId"), props)
    raw_version = _text(dep, "version")
    if not group_id or not artifact_id:
        logger.debug("Skipping dependency without groupId/artifactId in %s", section.value)
        return None
    if raw_version is None:
        # Version inherited from dependency management.
        return None
    coordinate = ArtifactCoordinate(
        group_id=group_id,
        artifact_id=artifact_id,
        version=interpolate(raw_version, props),
        type=_text(dep, "type") or "jar",
        classifier=_text(dep, "classifier"),
    )
    return DependencyEntry(
        coordinate=coordinate,
        version=coordinate.version,
        raw_version=raw_version,
        locator=DependencyLocator(section, group_id, artifact_id),
        scope=_text(dep, "scope"),
    )


def read_pom(text: str) -> PomModel:
    """Parse POM text into a PomModel.

    Raises:
        DescriptorReadError: the text is not well-formed XML.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise DescriptorReadError(f"Unable to parse POM: {e}") from e

    parent = _child(root, "parent")
    group_id = _text(root, "groupId") or _text(parent, "groupId")
    artifact_id = _text(root, "artifactId")
    version = _text(root, "version") or _text(parent, "version")
    props = _collect_properties(root, group_id, artifact_id, version, parent)

    entries = PomEntries()
    if parent is not None:
        p_group, p_artifact, p_version = _text(parent, "groupId"), _text(parent, "artifactId"), _text(parent, "version")
        if p_group and p_artifact and p_version:
            entries.parent = DependencyEntry(
                coordinate=ArtifactCoordinate(p_group, p_artifact, p_version, type="pom"),
                version=p_version,
                raw_version=p_version,
                locator=DependencyLocator(Sections.PARENT, p_group, p_artifact),
            )

    managed = _child(_child(root, "dependencyManagement"), "dependencies")
    for dep in _children(managed, "dependency"):
        is_import = _text(dep, "scope") == "import" and _text(dep, "type") == "pom"
        section = Sections.IMPORTED_MANAGEMENT if is_import else Sections.DEPENDENCY_MANAGEMENT
        entry = _dependency_entry(dep, section, props)
        if entry is None:
            continue
        if is_import:
            entries.imported_management.append(entry)
        else:
            entries.dependency_management.append(entry)

    for dep in _children(_child(root, "dependencies"), "dependency"):
        entry = _dependency_entry(dep, Sections.DEPENDENCIES, props)
        if entry is not None:
            entries.dependencies.append(entry)

    modules = [m.text.strip() for m in _children(_child(root, "modules"), "module") if m.text and m.text.strip()]

    return PomModel(
        group_id=group_id,
        artifact_id=artifact_id,
        version=version,
        properties=props,
        entries=entries,
        modules=modules,
    )


def detect_encoding(data: bytes) -> str:
    """Encoding of a raw POM: byte order mark, then XML declaration, then UTF-8."""
    if data.startswith(codecs.BOM_UTF8):
        return "utf-8-sig"
    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return "utf-16"
    match = _XML_DECL_ENCODING.match(data)
    if match:
        return match.group(1).decode("ascii")
    return "utf-8"


def read_pom_text(path: str) -> Tuple[str, str]:
    """Return the decoded text of the POM at ``path`` and the encoding used.

    Line endings are kept as they are in the file.

    Raises:
        DescriptorReadError: the file cannot be read or decoded.
    """
    try:
        with open(path, "rb") as fh:
            data = fh.read()
    except OSError as e:
        raise DescriptorReadError(f"Unable to read {path}: {e}") from e

    encoding = detect_encoding(data)
    try:
        return data.decode(encoding), encoding
    except LookupError as e:
        raise DescriptorReadError(f"Unknown encoding {encoding} declared in {path}") from e
    except UnicodeDecodeError as e:
        raise DescriptorReadError(f"Unable to decode {path} as {encoding}: {e}") from e


def read_pom_file(path: str) -> PomModel:
    """Read and parse the POM at ``path``."""
    text, _ = read_pom_text(path)
    return read_pom(text)


def _module_pom_path(base_dir: str, module: str) -> str:
    path = os.path.normpath(os.path.join(base_dir, module))
    if os.path.isdir(path):
        path = os.path.join(path, Constants.POM_XML_FILE)
    return path


def collect_reactor(pom_path: str, model: Optional[PomModel] = None) -> Set[str]:
    """Return "groupId:artifactId" keys of every module built with ``pom_path``.

    The project itself is included. Module POMs that are missing or
    unreadable are logged and skipped.
    """
    reactor: Set[str] = set()
    seen: Set[str] = set()
    pending = [(os.path.abspath(pom_path), model)]

    while pending:
        path, current = pending.pop()
        if path in seen:
            continue
        seen.add(path)
        if current is None:
            try:
                current = read_pom_file(path)
            except DescriptorReadError as e:
                logger.warning("Ignoring reactor module %s: %s", path, e)
                continue
        if current.key:
            reactor.add(current.key)
        base_dir = os.path.dirname(path)
        for module in current.modules:
            pending.append((_module_pom_path(base_dir, module), None))

    return reactor
