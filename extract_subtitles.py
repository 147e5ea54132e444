from __future__ import annotations

import argparse
import sys
from enum import IntEnum
from typing import List, Optional

from subextract.config import ExtractSettings
from subextract.errors import ConfigError, DiscoveryError, RootPathError, ToolNotFoundError, UnsupportedInputError
from subextract.logging_utils import Reporter, get_logger, setup_logging
from subextract.pipeline import run_extraction
from subextract.runner import ensure_tool_available

log = get_logger(__name__)


class ExitCode(IntEnum):
    OK = 0
    ITEM_FAILURES = 1
    USAGE = 2
    TOOL_NOT_FOUND = 3
    ROOT_INACCESSIBLE = 4
    UNSUPPORTED_INPUT = 5
    DISCOVERY_ABORTED = 6
    CONFIG = 7


_DISCOVERY_EXIT_CODES = {
    RootPathError: ExitCode.ROOT_INACCESSIBLE,
    UnsupportedInputError: ExitCode.UNSUPPORTED_INPUT,
    DiscoveryError: ExitCode.DISCOVERY_ABORTED,
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments for subtitle extraction."""
    parser = argparse.ArgumentParser(
        description="Extract the first subtitle track of every .mkv file into a .vtt sidecar")
    parser.add_argument("root", nargs="?", default=None, help="MKV file or directory to scan recursively")
    parser.add_argument("--workers", type=int, default=None,
                        help="number of concurrent extractions (default: SUBEXTRACT_WORKERS or 4)")
    parser.add_argument("--log_level", type=str, default=None, help="log level (e.g., INFO, DEBUG)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for batch subtitle extraction.

    Examples:
      python3 extract_subtitles.py movies/
      python3 extract_subtitles.py movies/movie.mkv --workers 2
    """
    args = parse_args(argv)
    setup_logging(args.log_level)
    reporter = Reporter()

    try:
        settings = ExtractSettings.from_env(workers=args.workers).validate()
    except ConfigError as e:
        reporter.error(f"Invalid configuration: {e}")
        return ExitCode.CONFIG

    try:
        ensure_tool_available(settings.tool)
    except ToolNotFoundError as e:
        reporter.error(f"{settings.tool.upper()} not found", error=str(e))
        return ExitCode.TOOL_NOT_FOUND

    if not args.root:
        reporter.error(f"Please provide the path to an {settings.input_suffix.lstrip('.').upper()} file or a directory")
        return ExitCode.USAGE

    summary = run_extraction(args.root, settings=settings, reporter=reporter)
    log.info("run summary", extra={
        "discovered": summary.discovered, "succeeded": summary.succeeded,
        "skipped": summary.skipped, "failed": summary.failed,
    })
    if summary.discovery_error is not None:
        return _DISCOVERY_EXIT_CODES.get(type(summary.discovery_error), ExitCode.DISCOVERY_ABORTED)
    if summary.failed:
        return ExitCode.ITEM_FAILURES
    return ExitCode.OK


def cli() -> None:
    sys.exit(int(main()))


if __name__ == "__main__":
    cli()
