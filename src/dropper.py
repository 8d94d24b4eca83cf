"""Dropper - A Minecraft plugin package manager.

Resolves package specifiers such as ``WorldEdit@6.1.*`` against the releases
listed on dev.bukkit.org and prints the download link to install.
"""
import json
import logging
import os
import sys

from args import parse_args
from cli_config import apply_http_overrides, build_settings
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes
from registry.bukkit import BukkitReleaseSource
from versioning.errors import SourceUnavailableError, SpecifierError
from versioning.service import ReleaseResolutionService


def export_json(results, path):
    """Exports the resolution results to a JSON file.

    Args:
        results (list): List of ResolutionResult.
        path (str): File path to export the JSON.
    """
    data = [r.to_dict() for r in results]
    try:
        with open(path, "w", encoding="utf-8") as file:
            json.dump(data, file, ensure_ascii=False, indent=4)
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def run_search(source, query, quiet=False):
    """Print search hits as ``name<TAB>url`` lines."""
    try:
        hits = source.search(query)
    except SourceUnavailableError as e:
        logging.error("%s", e)
        return ExitCodes.CONNECTION_ERROR.value
    if not hits:
        logging.warning("No plugins found for '%s'.", query)
    if not quiet:
        for name, url in hits.items():
            print(f"{name}\t{url}")
    return ExitCodes.SUCCESS.value


def report(results, quiet=False):
    """Print one line per resolution result."""
    if quiet:
        return
    for r in results:
        if r.release is not None:
            print(f"{r.raw}: Install your package ({r.release.version}) at: {r.release.link}")
        elif r.error is None:
            print(f"{r.raw}: I'm sorry! We couldn't find that version")


def exit_code_for(results, error_on_missing=False):
    """Map resolution results to a process exit code."""
    if any(isinstance(r.error, SpecifierError) for r in results):
        return ExitCodes.INVALID_INPUT.value
    if any(isinstance(r.error, SourceUnavailableError) for r in results):
        return ExitCodes.CONNECTION_ERROR.value
    if any(r.error is not None for r in results):
        return ExitCodes.RESOLUTION_ERROR.value
    if error_on_missing and any(not r.found for r in results):
        return ExitCodes.NOT_FOUND.value
    return ExitCodes.SUCCESS.value


def main(argv=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    if getattr(args, "LOG_LEVEL", None):
        os.environ['DROPPER_LOG_LEVEL'] = str(args.LOG_LEVEL).upper()
    if getattr(args, "LOG_FILE", None):
        os.environ['DROPPER_LOG_FILE'] = args.LOG_FILE
    configure_logging()

    try:
        settings = build_settings(args)
    except FileNotFoundError as e:
        logging.error("Config file not found: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except (OSError, ValueError) as e:
        logging.error("Invalid configuration: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    apply_http_overrides(settings)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(
                event="function_entry",
                component="cli",
                action="main",
                count=len(settings.packages),
                target=settings.game_version,
            )
        )

    try:
        source = BukkitReleaseSource(
            search_url=settings.search_url,
            files_url=settings.files_url,
            game_versions=settings.game_versions,
            game_version=settings.game_version,
        )
    except ValueError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.INVALID_INPUT.value)

    if args.SEARCH:
        sys.exit(run_search(source, args.SEARCH, args.QUIET))

    if not settings.packages:
        logging.warning("No packages given. Use -p NAME[@VERSION] or list them under 'packages' in the config.")
        sys.exit(ExitCodes.SUCCESS.value)

    logging.info("Resolving %d package(s).", len(settings.packages))
    service = ReleaseResolutionService(source)
    results = service.resolve_all(settings.packages)

    report(results, args.QUIET)

    if args.OUTPUT:
        export_json(results, args.OUTPUT)

    missing = [r.raw for r in results if r.error is None and not r.found]
    if missing:
        logging.warning("No matching release for: %s", ", ".join(missing))

    code = exit_code_for(results, args.ERROR_ON_MISSING)
    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(
                event="function_exit",
                component="cli",
                action="main",
                outcome="success" if code == ExitCodes.SUCCESS.value else "failure",
            )
        )
    sys.exit(code)


if __name__ == "__main__":
    main()
