"""Fixed-size pool of worker threads draining the work queue."""

from __future__ import annotations

import threading
from typing import List

from subextract.logging_utils import Reporter, get_logger
from subextract.runner import ExternalToolRunner, IdempotencyChecker, process_item
from subextract.types import ProcessingOutcome
from subextract.work_queue import WorkQueue

log = get_logger(__name__)


class WorkerPool:
    """Run ``workers`` threads, each handling one item at a time until end-of-stream.

    Each worker keeps its own outcome list; ``join`` merges them once all
    threads have exited, so outcomes are never shared between threads.
    """

    def __init__(self, queue: WorkQueue, checker: IdempotencyChecker, runner: ExternalToolRunner,
                 reporter: Reporter, workers: int = 4) -> None:
        if workers < 1:
            raise ValueError(f"workers must be positive, got {workers}")
        self.queue = queue
        self.checker = checker
        self.runner = runner
        self.reporter = reporter
        self.workers = workers
        self._threads: List[threading.Thread] = []
        self._results: List[List[ProcessingOutcome]] = [[] for _ in range(workers)]

    def start(self) -> None:
        if self._threads:
            raise RuntimeError("worker pool already started")
        for i in range(self.workers):
            t = threading.Thread(target=self._work, args=(i,), name=f"subextract-worker-{i}")
            t.start()
            self._threads.append(t)
        log.debug("workers started", extra={"workers": self.workers})

    def join(self) -> List[ProcessingOutcome]:
        for t in self._threads:
            t.join()
        merged: List[ProcessingOutcome] = []
        for outcomes in self._results:
            merged.extend(outcomes)
        return merged

    def _work(self, index: int) -> None:
        outcomes = self._results[index]
        while True:
            item = self.queue.get()
            if item is None:
                return
            try:
                outcome = process_item(item.path, self.checker, self.runner)
            except Exception as e:
                # Anything unexpected still yields a terminal outcome for this item.
                log.exception("unexpected worker error", extra={"file": str(item.path)})
                outcome = ProcessingOutcome.failed(item.path, f"{type(e).__name__}: {e}")
            outcomes.append(outcome)
            try:
                self.reporter.report(outcome)
            except Exception:
                log.exception("reporter failed", extra={"file": str(item.path)})
