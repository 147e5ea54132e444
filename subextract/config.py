"""Runtime settings for the extraction run."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from subextract.errors import ConfigError

WALK_ERROR_POLICIES = ("abort", "skip")


@dataclass(slots=True)
class ExtractSettings:
    """Extraction settings with defaults matching the reference tool.

    workers bounds how many external tool processes run at once and
    queue_capacity bounds how far discovery may run ahead of the workers.
    """

    workers: int = 4
    queue_capacity: int = 100
    input_suffix: str = ".mkv"
    output_suffix: str = ".vtt"
    tool: str = "ffmpeg"
    stream_map: str = "0:s:0"
    walk_errors: str = "abort"

    @classmethod
    def from_env(cls, workers: Optional[int] = None) -> ExtractSettings:
        """Load settings from SUBEXTRACT_* environment variables."""
        try:
            env_workers = int(os.getenv("SUBEXTRACT_WORKERS", "4"))
            queue_capacity = int(os.getenv("SUBEXTRACT_QUEUE_CAPACITY", "100"))
        except ValueError as e:
            raise ConfigError(f"Invalid integer setting: {e}") from e
        return cls(
            workers=workers if workers is not None else env_workers,
            queue_capacity=queue_capacity,
            input_suffix=os.getenv("SUBEXTRACT_INPUT_SUFFIX", ".mkv"),
            output_suffix=os.getenv("SUBEXTRACT_OUTPUT_SUFFIX", ".vtt"),
            tool=os.getenv("SUBEXTRACT_TOOL", "ffmpeg"),
            stream_map=os.getenv("SUBEXTRACT_STREAM_MAP", "0:s:0"),
            walk_errors=os.getenv("SUBEXTRACT_WALK_ERRORS", "abort").strip().lower(),
        )

    def validate(self) -> ExtractSettings:
        if self.workers < 1:
            raise ConfigError(f"workers must be positive, got {self.workers}")
        if self.queue_capacity < 1:
            raise ConfigError(f"queue_capacity must be positive, got {self.queue_capacity}")
        for name in ("input_suffix", "output_suffix"):
            value = getattr(self, name)
            if not value.startswith(".") or len(value) < 2:
                raise ConfigError(f"{name} must look like '.ext', got {value!r}")
        if self.input_suffix == self.output_suffix:
            raise ConfigError("input_suffix and output_suffix must differ")
        if self.walk_errors not in WALK_ERROR_POLICIES:
            raise ConfigError(
                f"walk_errors must be one of {', '.join(WALK_ERROR_POLICIES)}, got {self.walk_errors!r}"
            )
        return self
