"""Argument parsing functionality for pomrelease."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program.

    Flags that are not given parse to None so config file values survive.
    """
    parser = argparse.ArgumentParser(
        prog="pomrelease",
        description=(
            "Replace -SNAPSHOT versions in a pom.xml with the corresponding release version"
        ),
        add_help=True,
    )

    parser.add_argument("-f", "--file",
                        dest="POM_FILE",
                        help="POM file to update (default: pom.xml)",
                        action="store", type=str,
                        default=Constants.POM_XML_FILE)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)

    matching = parser.add_argument_group("matching")
    matching.add_argument("--allow-range-matching",
                          dest="allowRangeMatching",
                          help="Accept the last released version starting with the snapshot's release prefix",
                          action="store_true", default=None)
    matching.add_argument("--pad-version-for-range-matching",
                          dest="padVersionForRangeMatching",
                          help="Pad 4 to 4.0.0 and 4.2 to 4.2.0 before range matching",
                          action="store_true", default=None)
    matching.add_argument("--fail-if-not-replaced",
                          dest="failIfNotReplaced",
                          help="Fail when a snapshot has no matching release",
                          action="store_true", default=None)

    sources = parser.add_argument_group("version sources")
    sources.add_argument("--dependencies-property-file",
                         dest="dependenciesPropertyFile",
                         help="Read known versions from this file instead of repositories",
                         action="store", type=str)
    sources.add_argument("--repository",
                         dest="repositories",
                         help="Repository base URL (repeatable; default: Maven Central)",
                         action="append", type=str)

    scope = parser.add_argument_group("scope")
    scope.add_argument("--process-parent",
                       dest="processParent",
                       help="Also update the parent reference",
                       action="store_true", default=None)
    scope.add_argument("--no-process-dependency-management",
                       dest="processDependencyManagement",
                       help="Skip the dependencyManagement section",
                       action="store_false", default=None)
    scope.add_argument("--no-process-dependencies",
                       dest="processDependencies",
                       help="Skip the dependencies section",
                       action="store_false", default=None)
    scope.add_argument("--no-exclude-reactor",
                       dest="excludeReactor",
                       help="Also update dependencies on modules of the same build",
                       action="store_false", default=None)
    scope.add_argument("--includes",
                       dest="includes",
                       help="groupId:artifactId[:type[:classifier[:version]]] patterns to include (repeatable)",
                       action="append", type=str)
    scope.add_argument("--excludes",
                       dest="excludes",
                       help="groupId:artifactId[:type[:classifier[:version]]] patterns to exclude (repeatable)",
                       action="append", type=str)

    parser.add_argument("--no-backup",
                        dest="generateBackupPoms",
                        help="Do not write pom.xml.versionsBackup before changing the POM",
                        action="store_false", default=None)
    parser.add_argument("--dry-run",
                        dest="DRY_RUN",
                        help="Report changes without writing the POM",
                        action="store_true")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)


# Parsed attributes that map one-to-one onto configuration options.
CONFIG_OPTIONS = (
    "allowRangeMatching",
    "padVersionForRangeMatching",
    "failIfNotReplaced",
    "dependenciesPropertyFile",
    "repositories",
    "processParent",
    "processDependencyManagement",
    "processDependencies",
    "excludeReactor",
    "includes",
    "excludes",
    "generateBackupPoms",
)


def config_overrides(args):
    """Return the configuration options given on the command line."""
    return {name: getattr(args, name, None) for name in CONFIG_OPTIONS}
