from __future__ import annotations

import logging
import os
from typing import Any, Optional

from subextract.types import OutcomeStatus, ProcessingOutcome


_CONFIGURED = False


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once with a consistent, readable format.

    Later calls with an explicit level only change the root level.

    Args:
        level: Optional log level name (e.g., "INFO", "DEBUG"). If omitted,
               reads LOG_LEVEL env or defaults to INFO.
    """
    global _CONFIGURED
    if _CONFIGURED:
        # Module loggers configure at import; an explicit level still wins.
        if level:
            logging.getLogger().setLevel(_resolve_level(level))
        return

    log_level = _resolve_level(level or os.getenv("LOG_LEVEL") or "INFO")

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger().setLevel(log_level)
    _CONFIGURED = True


def _resolve_level(name: str) -> int:
    value = getattr(logging, name.upper(), logging.INFO)
    return value if isinstance(value, int) else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """Return a module logger with global config ensured."""
    setup_logging()
    return logging.getLogger(name)


class Reporter:
    """Outcome sink passed to discovery, the worker pool and the CLI.

    Success, skip and failure each go to their own logger channel so they can
    be filtered independently. Logging handlers serialize writes, so workers
    may report concurrently.
    """

    def __init__(self, name: str = "subextract") -> None:
        self.success_log = get_logger(f"{name}.success")
        self.skip_log = get_logger(f"{name}.skip")
        self.error_log = get_logger(f"{name}.error")

    def report(self, outcome: ProcessingOutcome) -> None:
        path = str(outcome.path)
        if outcome.status is OutcomeStatus.SUCCEEDED:
            self.success_log.info(f"Successfully processed {path}",
                                  extra={"file": path, "output": str(outcome.output_path)})
        elif outcome.status is OutcomeStatus.SKIPPED:
            self.skip_log.info(f"Subtitle file already exists for {path}, skipping...",
                               extra={"file": path, "output": str(outcome.output_path)})
        else:
            self.error_log.error(f"Failed to extract subtitles from {path}: {outcome.reason}",
                                 extra={"file": path, "error": outcome.reason})

    def error(self, message: str, **context: Any) -> None:
        self.error_log.error(message, extra=context)
