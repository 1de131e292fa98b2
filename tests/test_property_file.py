"""Tests for the dependencies property file version source."""
from __future__ import annotations

import os
import tempfile
from unittest.mock import MagicMock

import pytest

from config import UpdateConfig
from errors import MetadataRetrievalError
from registry.maven import (
    PropertyFileVersionSource,
    RepositoryVersionSource,
    create_version_source,
    parse_property_file,
)
from versioning.models import ArtifactCoordinate


CONTENT = """# released versions
! another comment
com.example\\:core = 1.0.0, 1.1.0 ,1.2.0
org.acme:widgets=2.0

org.acme:long = 1.0, \\
    1.1
org.acme:none =
"""


def test_parse_property_file():
    parsed = parse_property_file(CONTENT)
    assert parsed == {
        "com.example:core": ["1.0.0", "1.1.0", "1.2.0"],
        "org.acme:widgets": ["2.0"],
        "org.acme:long": ["1.0", "1.1"],
        "org.acme:none": [],
    }


def test_file_source_lookup():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "versions.properties")
        with open(path, "w", encoding="utf-8") as f:
            f.write(CONTENT)
        source = PropertyFileVersionSource(path)
        assert source.lookup(ArtifactCoordinate("com.example", "core", "1.1.0")) == ["1.0.0", "1.1.0", "1.2.0"]
        assert source.lookup(ArtifactCoordinate("com.example", "unknown", "1.0")) == []
        assert source.describe() == f"file {os.path.abspath(path)}"


def test_missing_file_is_retrieval_failure():
    with tempfile.TemporaryDirectory() as tmpdir:
        source = PropertyFileVersionSource(os.path.join(tmpdir, "absent.properties"))
        with pytest.raises(MetadataRetrievalError):
            source.lookup(ArtifactCoordinate("g", "a", "1"))


def test_create_version_source_prefers_file(caplog):
    caplog.set_level("INFO")
    source = create_version_source(UpdateConfig(dependencies_property_file="deps.properties"))
    assert isinstance(source, PropertyFileVersionSource)
    assert "Using file for use-releases" in caplog.text


def test_create_version_source_defaults_to_repositories(caplog):
    caplog.set_level("INFO")
    config = MagicMock(dependencies_property_file=None, repositories=["https://repo.example/m2"])
    source = create_version_source(config)
    assert isinstance(source, RepositoryVersionSource)
    assert source.repositories == ["https://repo.example/m2"]
    assert "Using repositories for use-releases" in caplog.text
