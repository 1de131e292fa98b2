"""Tests for reading dependency entries and reactor modules from POMs."""
from __future__ import annotations

import os
import tempfile

import pytest

from constants import Sections
from errors import DescriptorReadError
from pom.reader import collect_reactor, detect_encoding, read_pom, read_pom_text


POM = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <parent>
    <groupId>com.example</groupId>
    <artifactId>parent</artifactId>
    <version>1.0-SNAPSHOT</version>
  </parent>
  <artifactId>app</artifactId>
  <properties>
    <lib.version>3.0-SNAPSHOT</lib.version>
  </properties>
  <dependencyManagement>
    <dependencies>
      <dependency>
        <groupId>com.example</groupId>
        <artifactId>bom</artifactId>
        <version>5.0-SNAPSHOT</version>
        <type>pom</type>
        <scope>import</scope>
      </dependency>
      <dependency>
        <groupId>com.example</groupId>
        <artifactId>core</artifactId>
        <version>2.0-SNAPSHOT</version>
      </dependency>
    </dependencies>
  </dependencyManagement>
  <dependencies>
    <dependency>
      <groupId>com.example</groupId>
      <artifactId>core</artifactId>
    </dependency>
    <dependency>
      <groupId>${project.groupId}</groupId>
      <artifactId>lib</artifactId>
      <version>${lib.version}</version>
      <classifier>tests</classifier>
    </dependency>
    <dependency>
      <artifactId>no-group</artifactId>
      <version>1.0</version>
    </dependency>
  </dependencies>
</project>
"""


class TestReadPom:
    def test_project_coordinates_inherit_from_parent(self):
        model = read_pom(POM)
        assert model.group_id == "com.example"
        assert model.artifact_id == "app"
        assert model.version == "1.0-SNAPSHOT"
        assert model.key == "com.example:app"

    def test_parent_entry(self):
        parent = read_pom(POM).entries.parent
        assert parent is not None
        assert parent.coordinate.key == "com.example:parent"
        assert parent.coordinate.type == "pom"
        assert parent.section == Sections.PARENT
        assert parent.version == "1.0-SNAPSHOT"

    def test_imported_management_is_separated(self):
        entries = read_pom(POM).entries
        assert [e.coordinate.artifact_id for e in entries.imported_management] == ["bom"]
        assert [e.coordinate.artifact_id for e in entries.dependency_management] == ["core"]
        assert entries.imported_management[0].section == Sections.IMPORTED_MANAGEMENT

    def test_dependencies_without_version_or_group_are_not_entries(self):
        deps = read_pom(POM).entries.dependencies
        assert [d.coordinate.artifact_id for d in deps] == ["lib"]

    def test_property_versions_are_interpolated(self):
        (lib,) = read_pom(POM).entries.dependencies
        assert lib.version == "3.0-SNAPSHOT"
        assert lib.raw_version == "${lib.version}"
        assert lib.coordinate.group_id == "com.example"
        assert lib.coordinate.classifier == "tests"

    def test_pom_without_namespace(self):
        model = read_pom(
            "<project><groupId>g</groupId><artifactId>a</artifactId><version>1</version>"
            "<dependencies><dependency><groupId>x</groupId><artifactId>y</artifactId>"
            "<version>2-SNAPSHOT</version></dependency></dependencies></project>"
        )
        assert model.entries.parent is None
        assert model.entries.dependencies[0].version == "2-SNAPSHOT"

    def test_malformed_xml(self):
        with pytest.raises(DescriptorReadError):
            read_pom("<project><dependencies></project>")


def _write(path: str, content: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def test_collect_reactor_recurses_into_modules():
    with tempfile.TemporaryDirectory() as tmpdir:
        _write(os.path.join(tmpdir, "pom.xml"), """<project>
  <groupId>com.example</groupId><artifactId>root</artifactId><version>1.0-SNAPSHOT</version>
  <modules><module>api</module><module>missing</module><module>impl/custom-pom.xml</module></modules>
</project>""")
        _write(os.path.join(tmpdir, "api", "pom.xml"), """<project>
  <parent><groupId>com.example</groupId><artifactId>root</artifactId><version>1.0-SNAPSHOT</version></parent>
  <artifactId>api</artifactId>
  <modules><module>nested</module></modules>
</project>""")
        _write(os.path.join(tmpdir, "api", "nested", "pom.xml"), """<project>
  <groupId>org.other</groupId><artifactId>nested</artifactId><version>1</version>
</project>""")
        _write(os.path.join(tmpdir, "impl", "custom-pom.xml"), """<project>
  <groupId>com.example</groupId><artifactId>impl</artifactId><version>1</version>
</project>""")

        reactor = collect_reactor(os.path.join(tmpdir, "pom.xml"))
        assert reactor == {
            "com.example:root",
            "com.example:api",
            "org.other:nested",
            "com.example:impl",
        }


def _write_bytes(path: str, data: bytes) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)


LATIN1_POM = """<?xml version="1.0" encoding="ISO-8859-1"?>
<project>
  <groupId>com.example</groupId><artifactId>café</artifactId><version>1</version>
  <name>Café à la carte</name>
</project>
"""


@pytest.mark.parametrize(
    "data, expected",
    [
        (b'<?xml version="1.0" encoding="ISO-8859-1"?><project/>', "ISO-8859-1"),
        (b"<?xml version='1.0' encoding='windows-1252' ?>\n<project/>", "windows-1252"),
        (b'<?xml version="1.0"?><project/>', "utf-8"),
        (b"<project/>", "utf-8"),
        (b"\xef\xbb\xbf<project/>", "utf-8-sig"),
    ],
)
def test_detect_encoding(data, expected):
    assert detect_encoding(data) == expected


def test_read_pom_text_uses_declared_encoding_and_keeps_line_endings():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "pom.xml")
        _write_bytes(path, LATIN1_POM.replace("\n", "\r\n").encode("iso-8859-1"))
        text, encoding = read_pom_text(path)
    assert encoding == "ISO-8859-1"
    assert "café" in text
    assert "\r\n" in text
    assert read_pom(text).key == "com.example:café"


def test_read_pom_text_undecodable_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "pom.xml")
        _write_bytes(path, LATIN1_POM.replace(' encoding="ISO-8859-1"', "").encode("iso-8859-1"))
        with pytest.raises(DescriptorReadError):
            read_pom_text(path)


def test_read_pom_text_unknown_encoding():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "pom.xml")
        _write_bytes(path, b'<?xml version="1.0" encoding="no-such-codec"?><project/>')
        with pytest.raises(DescriptorReadError):
            read_pom_text(path)


def test_collect_reactor_handles_non_utf8_modules(caplog):
    with tempfile.TemporaryDirectory() as tmpdir:
        _write(os.path.join(tmpdir, "pom.xml"), """<project>
  <groupId>com.example</groupId><artifactId>root</artifactId><version>1</version>
  <modules><module>latin</module><module>broken</module></modules>
</project>""")
        _write_bytes(os.path.join(tmpdir, "latin", "pom.xml"), LATIN1_POM.encode("iso-8859-1"))
        _write_bytes(
            os.path.join(tmpdir, "broken", "pom.xml"),
            LATIN1_POM.replace(' encoding="ISO-8859-1"', "").encode("iso-8859-1"),
        )

        reactor = collect_reactor(os.path.join(tmpdir, "pom.xml"))
    assert reactor == {"com.example:root", "com.example:café"}
    assert "Ignoring reactor module" in caplog.text
