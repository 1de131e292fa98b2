"""Version source selection."""
from __future__ import annotations

import logging
from typing import List, Protocol

from versioning.models import ArtifactCoordinate
from .metadata import RepositoryVersionSource
from .property_file import PropertyFileVersionSource

logger = logging.getLogger(__name__)


class VersionSource(Protocol):
    """Supplies known versions for an artifact coordinate."""

    def lookup(self, coordinate: ArtifactCoordinate) -> List[str]:
        """Return known versions in source order.

        Raises:
            MetadataRetrievalError: on any retrieval or parse failure.
        """

    def describe(self) -> str:
        """Human-readable origin, used in logs."""


def create_version_source(config) -> VersionSource:
    """Use the dependencies property file when configured, else repositories."""
    if config.dependencies_property_file:
        source = PropertyFileVersionSource(config.dependencies_property_file)
        logger.info("Using file for use-releases: %s", source.path)
        return source
    logger.info("Using repositories for use-releases")
    return RepositoryVersionSource(config.repositories)
