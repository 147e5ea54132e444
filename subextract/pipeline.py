"""Wire discovery, the work queue and the worker pool into one run."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from subextract.config import ExtractSettings
from subextract.discovery import PathDiscoverer
from subextract.errors import DiscoveryError, RootPathError, UnsupportedInputError
from subextract.logging_utils import Reporter, get_logger
from subextract.pool import WorkerPool
from subextract.runner import ExternalToolRunner, FfmpegRunner, IdempotencyChecker
from subextract.types import RunSummary
from subextract.work_queue import WorkQueue

log = get_logger(__name__)


def run_extraction(
    root: Union[str, Path],
    settings: Optional[ExtractSettings] = None,
    runner: Optional[ExternalToolRunner] = None,
    reporter: Optional[Reporter] = None,
) -> RunSummary:
    """Discover inputs under ``root`` and process them with a bounded worker pool.

    Workers start before discovery so processing overlaps the walk. The queue
    is closed only after discovery finishes or aborts, and this returns only
    after every enqueued item has an outcome. Fatal discovery conditions are
    recorded on the returned summary rather than raised.
    """
    settings = (settings or ExtractSettings()).validate()
    reporter = reporter or Reporter()
    runner = runner or FfmpegRunner(tool=settings.tool, stream_map=settings.stream_map)

    queue = WorkQueue(settings.queue_capacity)
    pool = WorkerPool(
        queue=queue,
        checker=IdempotencyChecker(settings.output_suffix),
        runner=runner,
        reporter=reporter,
        workers=settings.workers,
    )
    discoverer = PathDiscoverer(settings.input_suffix, reporter=reporter, walk_errors=settings.walk_errors)

    summary = RunSummary()
    log.info("extraction start", extra={
        "root": str(root), "workers": settings.workers, "queue_capacity": settings.queue_capacity,
    })
    pool.start()
    try:
        summary.discovered = discoverer.discover_into(root, queue)
    except (RootPathError, UnsupportedInputError, DiscoveryError) as e:
        summary.aborted_discovery = True
        summary.discovery_error = e
        reporter.error(str(e), root=str(root))
    finally:
        queue.close()
        summary.outcomes = pool.join()

    if summary.aborted_discovery:
        # Items enqueued before the abort were still processed.
        summary.discovered = len(summary.outcomes)
    log.info("extraction done", extra={
        "discovered": summary.discovered, "succeeded": summary.succeeded,
        "skipped": summary.skipped, "failed": summary.failed,
    })
    return summary
