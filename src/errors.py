"""Error types raised by the release updater.

Library code raises these; only the CLI entry point maps them to exit codes.
"""
from __future__ import annotations

from typing import Optional


class PomReleaseError(Exception):
    """Base class for all updater errors."""


class ConfigError(PomReleaseError):
    """Configuration file or option values are invalid."""


class InvalidVersionSpecError(PomReleaseError):
    """A release prefix is not a valid Maven version specification."""

    def __init__(self, spec: str, reason: Optional[str] = None):
        self.spec = spec
        self.reason = reason
        message = f"Invalid version range specification: {spec}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MetadataRetrievalError(PomReleaseError):
    """Known versions could not be retrieved from a repository or file."""


class UnresolvedVersionError(PomReleaseError):
    """No release matching a snapshot was found and strict mode is on."""

    def __init__(self, coordinate: str, requested_version: str, range_matching: bool = False):
        self.coordinate = coordinate
        self.requested_version = requested_version
        self.range_matching = range_matching
        message = f"No matching release of {coordinate}:{requested_version} found for update"
        if range_matching:
            message += " via rangeMatching"
        super().__init__(message + ".")


class DocumentRewriteError(PomReleaseError):
    """The POM text could not be scanned or edited."""


class DescriptorReadError(PomReleaseError):
    """A POM could not be read or parsed."""
