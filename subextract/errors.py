from __future__ import annotations

from typing import Optional


class ExtractError(Exception):
    """Base error for the subtitle extraction pipeline."""


class ConfigError(ExtractError):
    """Raised when settings are invalid."""


class ToolNotFoundError(ExtractError):
    """Raised when the external media tool is not on PATH."""


class RootPathError(ExtractError):
    """Raised when the root path does not exist or cannot be accessed."""

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"Error accessing the path {path}: {cause}")
        self.path = path
        self.cause = cause


class UnsupportedInputError(ExtractError, ValueError):
    """Raised when the root is a single file without the expected suffix."""


class DiscoveryError(ExtractError):
    """Raised when a directory walk hits an entry it cannot visit."""


class QueueClosedError(ExtractError, RuntimeError):
    """Raised when an item is enqueued after the queue was closed."""


class ToolInvocationError(ExtractError):
    """Raised when the external tool fails for one input."""

    def __init__(self, message: str, returncode: Optional[int] = None) -> None:
        super().__init__(message)
        self.returncode = returncode
