"""pomrelease - replace snapshot dependency versions with released versions."""
import logging
import os
import shutil
import sys

from args import config_overrides, parse_args
from config import UpdateConfig, build_config
from constants import Constants, ExitCodes
from errors import (
    ConfigError,
    DescriptorReadError,
    DocumentRewriteError,
    InvalidVersionSpecError,
    MetadataRetrievalError,
    UnresolvedVersionError,
)
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from pom import PomRewriter, collect_reactor, read_pom, read_pom_text
from registry.maven import create_version_source
from versioning.models import UpdateReport
from versioning.planner import DependencyUpdatePlanner

logger = logging.getLogger(__name__)


def use_releases(pom_path: str, config: UpdateConfig, dry_run: bool = False) -> UpdateReport:
    """Replace snapshot versions in the POM at ``pom_path``.

    The file is written only when the whole run succeeded and changed the
    text. With backups enabled the previous content is kept next to it.
    """
    text, encoding = read_pom_text(pom_path)

    model = read_pom(text)
    reactor = collect_reactor(pom_path, model) if config.exclude_reactor else set()
    if is_debug_enabled(logger):
        logger.debug(
            "POM loaded",
            extra=extra_context(
                event="function_entry", component="cli", action="use_releases",
                target=pom_path, reactor_size=len(reactor)
            )
        )

    rewriter = PomRewriter(text, model.properties)
    planner = DependencyUpdatePlanner(
        config,
        create_version_source(config),
        rewriter,
        reactor=reactor,
        logger=logging.getLogger("pomrelease.use_releases"),
    )
    report = planner.plan_and_apply(model.entries)

    if not rewriter.modified:
        logger.info("No versions changed in %s", pom_path)
        return report
    if dry_run:
        logger.info("Dry run: %d version(s) would change in %s", len(report.updated), pom_path)
        return report

    try:
        data = rewriter.text.encode(encoding)
    except UnicodeEncodeError as e:
        raise DocumentRewriteError(f"Unable to encode {pom_path} as {encoding}: {e}") from e
    try:
        if config.generate_backup_poms:
            shutil.copyfile(pom_path, pom_path + Constants.BACKUP_SUFFIX)
        with open(pom_path, "wb") as fh:
            fh.write(data)
    except OSError as e:
        raise DocumentRewriteError(f"Unable to write {pom_path}: {e}") from e
    logger.info("Updated %d version(s) in %s", len(report.updated), pom_path)
    return report


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL, args.LOG_FILE)

    try:
        config = build_config(args.CONFIG, config_overrides(args))
    except ConfigError as e:
        logger.error("%s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    pom_path = os.path.abspath(args.POM_FILE)
    if not os.path.isfile(pom_path):
        logger.error("%s not found. Unable to update.", pom_path)
        sys.exit(ExitCodes.FILE_ERROR.value)

    try:
        use_releases(pom_path, config, dry_run=args.DRY_RUN)
    except UnresolvedVersionError as e:
        logger.error("%s", e)
        sys.exit(ExitCodes.UNRESOLVED_VERSION.value)
    except InvalidVersionSpecError as e:
        logger.error("%s", e)
        sys.exit(ExitCodes.INVALID_VERSION_SPEC.value)
    except MetadataRetrievalError as e:
        logger.error("%s", e)
        sys.exit(ExitCodes.CONNECTION_ERROR.value)
    except (DescriptorReadError, DocumentRewriteError) as e:
        logger.error("%s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
