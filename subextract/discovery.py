"""Enumerate candidate inputs below a root path."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Iterator, Optional, Union

from subextract.errors import DiscoveryError, RootPathError, UnsupportedInputError
from subextract.logging_utils import Reporter, get_logger
from subextract.types import WorkItem
from subextract.work_queue import WorkQueue

log = get_logger(__name__)


class PathDiscoverer:
    """Yield every file under a root whose suffix matches ``input_suffix``.

    The suffix comparison is case-sensitive. Directories are walked in
    lexical order without following symlinked directories. With
    ``walk_errors="abort"`` the first unreadable entry stops the walk with
    DiscoveryError; with ``"skip"`` it is reported and the walk continues.
    """

    def __init__(self, input_suffix: str = ".mkv", reporter: Optional[Reporter] = None,
                 walk_errors: str = "abort") -> None:
        self.input_suffix = input_suffix
        self.reporter = reporter or Reporter()
        self.walk_errors = walk_errors

    def qualifies(self, path: Path) -> bool:
        return path.suffix == self.input_suffix

    def iter_candidates(self, root: Union[str, Path]) -> Iterator[Path]:
        root_path = Path(root)
        try:
            st = root_path.stat()
        except OSError as e:
            raise RootPathError(str(root_path), e) from e

        if not stat.S_ISDIR(st.st_mode):
            if not self.qualifies(root_path):
                raise UnsupportedInputError(
                    f"The provided file is not a {self.input_suffix} file: {root_path}"
                )
            yield root_path
            return

        for dirpath, dirnames, filenames in os.walk(root_path, onerror=self._on_walk_error):
            dirnames.sort()
            for name in sorted(filenames):
                candidate = Path(dirpath) / name
                if self.qualifies(candidate):
                    yield candidate

    def discover_into(self, root: Union[str, Path], queue: WorkQueue) -> int:
        """Enqueue every candidate, blocking while the queue is full. Returns the count."""
        count = 0
        for candidate in self.iter_candidates(root):
            queue.put(WorkItem(candidate))
            count += 1
            log.debug("enqueued", extra={"file": str(candidate), "count": count})
        return count

    def _on_walk_error(self, err: OSError) -> None:
        path = err.filename if err.filename is not None else "?"
        self.reporter.error(f"Error accessing file {path}: {err}", file=str(path), error=str(err))
        if self.walk_errors == "abort":
            raise DiscoveryError(f"Error walking through the directory: {err}") from err
