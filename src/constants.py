"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    UNRESOLVED_VERSION = 4
    INVALID_VERSION_SPEC = 5


class Sections(Enum):
    """POM sections visited by the updater, in processing order.

    Args:
        Enum (string): Section names used in logs and locators.
    """

    PARENT = "parent"
    IMPORTED_MANAGEMENT = "imported-management"
    DEPENDENCY_MANAGEMENT = "dependency-management"
    DEPENDENCIES = "dependencies"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    MAVEN_CENTRAL_URL = "https://repo1.maven.org/maven2"
    MAVEN_METADATA_FILE = "maven-metadata.xml"
    POM_XML_FILE = "pom.xml"
    BACKUP_SUFFIX = ".versionsBackup"
    CONFIG_SECTION = "use-releases"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    ENV_LOG_LEVEL = "POMRELEASE_LOG_LEVEL"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
