"""Shared test fixtures."""

from __future__ import annotations

import os
import stat
import threading
import time
from pathlib import Path

import pytest

from subextract.errors import ToolInvocationError
from subextract.logging_utils import Reporter


class CapturingReporter(Reporter):
    """Reporter that also keeps every outcome and run-level error."""

    def __init__(self) -> None:
        super().__init__(name="subextract.test")
        self._lock = threading.Lock()
        self.outcomes = []
        self.errors = []

    def report(self, outcome) -> None:
        with self._lock:
            self.outcomes.append(outcome)
        super().report(outcome)

    def error(self, message, **context) -> None:
        with self._lock:
            self.errors.append(message)
        super().error(message, **context)


class FakeRunner:
    """Stands in for ffmpeg: writes the output file and tracks concurrency."""

    def __init__(self, delay: float = 0.0, fail_names=()) -> None:
        self.delay = delay
        self.fail_names = set(fail_names)
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def run(self, input_path: Path, output_path: Path) -> None:
        with self._lock:
            self.calls.append(input_path)
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                time.sleep(self.delay)
            if input_path.name in self.fail_names:
                raise ToolInvocationError("ffmpeg exited with status 1", returncode=1)
            output_path.write_text("WEBVTT\n", encoding="utf-8")
        finally:
            with self._lock:
                self.in_flight -= 1


@pytest.fixture()
def reporter() -> CapturingReporter:
    return CapturingReporter()


@pytest.fixture()
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def stub_tool(tmp_path: Path) -> Path:
    """Executable that mimics ffmpeg's argv and writes the last argument.

    Inputs whose name contains "broken" make it exit with status 1.
    """
    script = tmp_path / "bin" / "fake-ffmpeg"
    script.parent.mkdir()
    script.write_text(
        "#!/bin/sh\n"
        'case "$2" in *broken*) echo "no subtitle stream" >&2; exit 1;; esac\n'
        'for last in "$@"; do :; done\n'
        'echo WEBVTT > "$last"\n',
        encoding="utf-8",
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


def make_files(root: Path, *names: str) -> None:
    for name in names:
        p = root / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"")


posix_only = pytest.mark.skipif(os.name != "posix", reason="needs a POSIX shell script")
