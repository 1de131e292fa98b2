"""Known versions from remote maven-metadata.xml documents."""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Iterable, List, Optional

from constants import Constants
from errors import MetadataRetrievalError
from common.http_client import robust_get
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from versioning.models import ArtifactCoordinate

logger = logging.getLogger(__name__)


def metadata_url(repository: str, group_id: str, artifact_id: str) -> str:
    """Build the artifact-level maven-metadata.xml URL in ``repository``."""
    group_path = group_id.replace(".", "/")
    return f"{repository.rstrip('/')}/{group_path}/{artifact_id}/{Constants.MAVEN_METADATA_FILE}"


def parse_metadata_versions(text: str) -> List[str]:
    """Return versions listed under versioning/versions in document order.

    Raises:
        MetadataRetrievalError: the document is not well-formed XML.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise MetadataRetrievalError(f"Unable to parse {Constants.MAVEN_METADATA_FILE}: {e}") from e

    versions: List[str] = []
    versions_elem = root.find("versioning/versions")
    if versions_elem is None:
        return versions
    for item in versions_elem.findall("version"):
        if isinstance(item.text, str) and item.text.strip():
            versions.append(item.text.strip())
    return versions


def fetch_versions(repository: str, coordinate: ArtifactCoordinate) -> List[str]:
    """Fetch known versions of ``coordinate`` from one repository.

    A 404 means the repository does not host the artifact and yields no
    versions. Other non-200 statuses are retrieval failures.
    """
    url = metadata_url(repository, coordinate.group_id, coordinate.artifact_id)
    if is_debug_enabled(logger):
        logger.debug("Fetching Maven metadata", extra=extra_context(
            event="function_entry", component="metadata", action="fetch_versions",
            target=safe_url(url), package_manager="maven"
        ))

    status_code, _, text = robust_get(url)
    if status_code == 404:
        logger.debug("No metadata for %s in %s", coordinate.key, safe_url(repository))
        return []
    if status_code != 200:
        raise MetadataRetrievalError(
            f"Unable to retrieve metadata for {coordinate.key} from {safe_url(url)}: HTTP {status_code}"
        )
    return parse_metadata_versions(text)


class RepositoryVersionSource:
    """Look up versions across remote repositories.

    Versions from all repositories are concatenated in repository order with
    duplicates dropped. Nothing is cached between lookups.
    """

    def __init__(self, repositories: Optional[Iterable[str]] = None):
        self.repositories = list(repositories or [Constants.MAVEN_CENTRAL_URL])

    def describe(self) -> str:
        return "repositories " + ", ".join(safe_url(r) for r in self.repositories)

    def lookup(self, coordinate: ArtifactCoordinate) -> List[str]:
        versions: List[str] = []
        seen = set()
        for repository in self.repositories:
            for version in fetch_versions(repository, coordinate):
                if version not in seen:
                    seen.add(version)
                    versions.append(version)
        if is_debug_enabled(logger):
            logger.debug("Known versions", extra=extra_context(
                event="function_exit", component="metadata", action="lookup",
                target=coordinate.key, outcome="found" if versions else "none",
                count=len(versions)
            ))
        return versions
