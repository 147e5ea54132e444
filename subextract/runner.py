"""Idempotency check and external tool invocation for one input."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import List, Protocol

from subextract.errors import ToolInvocationError, ToolNotFoundError
from subextract.logging_utils import get_logger
from subextract.types import ProcessingOutcome

log = get_logger(__name__)


def derive_output_path(path: Path, output_suffix: str) -> Path:
    """Return the sidecar path: same location, final suffix replaced."""
    return path.with_suffix(output_suffix)


def ensure_tool_available(tool: str) -> str:
    """Return the resolved executable path or raise ToolNotFoundError."""
    resolved = shutil.which(tool)
    if resolved is None:
        raise ToolNotFoundError(f"{tool} not found on PATH")
    return resolved


class IdempotencyChecker:
    """Skip inputs whose sidecar output already exists.

    Not atomic against concurrent changes to the file system; a race only
    causes duplicate work.
    """

    def __init__(self, output_suffix: str = ".vtt") -> None:
        self.output_suffix = output_suffix

    def output_for(self, path: Path) -> Path:
        return derive_output_path(path, self.output_suffix)

    def should_skip(self, path: Path) -> bool:
        return self.output_for(path).exists()


class ExternalToolRunner(Protocol):
    """Produce ``output_path`` from ``input_path`` or raise ToolInvocationError."""

    def run(self, input_path: Path, output_path: Path) -> None:
        ...


class FfmpegRunner:
    """Extract one subtitle stream with ffmpeg, blocking until it exits.

    The tool's stdout and stderr are inherited so its progress output shows
    up on the console as-is. stdin is the null device so parallel runs never
    read keystrokes or block on an overwrite prompt.
    """

    def __init__(self, tool: str = "ffmpeg", stream_map: str = "0:s:0") -> None:
        self.tool = tool
        self.stream_map = stream_map

    def build_command(self, input_path: Path, output_path: Path) -> List[str]:
        return [self.tool, "-i", str(input_path), "-map", self.stream_map, str(output_path)]

    def run(self, input_path: Path, output_path: Path) -> None:
        cmd = self.build_command(input_path, output_path)
        log.debug("tool start", extra={"cmd": cmd})
        try:
            result = subprocess.run(cmd, stdin=subprocess.DEVNULL, check=False)
        except OSError as e:
            raise ToolInvocationError(f"failed to start {self.tool}: {e}") from e
        if result.returncode != 0:
            raise ToolInvocationError(
                f"{self.tool} exited with status {result.returncode}", returncode=result.returncode
            )


def process_item(path: Path, checker: IdempotencyChecker, runner: ExternalToolRunner) -> ProcessingOutcome:
    """Turn one candidate into exactly one outcome; tool failures do not propagate."""
    output_path = checker.output_for(path)
    if checker.should_skip(path):
        return ProcessingOutcome.skipped(path, output_path)
    try:
        runner.run(path, output_path)
    except ToolInvocationError as e:
        return ProcessingOutcome.failed(path, str(e), output_path)
    return ProcessingOutcome.succeeded(path, output_path)
