"""Maven version sources: remote repositories and local property files."""

from .metadata import RepositoryVersionSource, fetch_versions, metadata_url, parse_metadata_versions
from .property_file import PropertyFileVersionSource, parse_property_file
from .source import VersionSource, create_version_source

__all__ = [
    "RepositoryVersionSource",
    "PropertyFileVersionSource",
    "VersionSource",
    "create_version_source",
    "fetch_versions",
    "metadata_url",
    "parse_metadata_versions",
    "parse_property_file",
]
