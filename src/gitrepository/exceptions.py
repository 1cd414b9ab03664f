"""gitrepository exceptions."""

from collections.abc import Sequence
from pathlib import Path
from typing import Any


class GitRepositoryError(Exception):
    """Base exception for gitrepository errors."""


# =============================================================================
# Resolution Exceptions
# =============================================================================


class NotARepositoryError(GitRepositoryError):
    """No git metadata entry was found above the given path.

    Attributes:
        path: The path resolution started from.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialize with error message and the starting path."""
        super().__init__(message)
        self.path: Path | None = path


class RepositoryStateUnreadableError(GitRepositoryError):
    """The metadata store is corrupt, incomplete or unsupported."""


class UnrecognizedUrlError(GitRepositoryError, ValueError):
    """A remote URL matches none of the supported dialects.

    Attributes:
        url: The offending URL, or None when no URL was configured.
    """

    def __init__(self, message: str, *, url: str | None = None) -> None:
        """Initialize with error message and the offending URL."""
        super().__init__(message)
        self.url: str | None = url


class ProcessTimedOutError(GitRepositoryError):
    """An external git command did not finish in time.

    Attributes:
        command_args: Arguments passed to git.
        timeout_ms: The timeout that expired, in milliseconds.
    """

    def __init__(
        self,
        message: str,
        *,
        args: Sequence[str] = (),
        timeout_ms: int | None = None,
    ) -> None:
        """Initialize with error message and command context."""
        super().__init__(message)
        self.command_args: tuple[str, ...] = tuple(args)
        self.timeout_ms: int | None = timeout_ms


# =============================================================================
# Worktree Exceptions
# =============================================================================


class WorktreeError(GitRepositoryError):
    """Base exception for worktree errors."""


class WorktreeCreationFailedError(WorktreeError):
    """A git command failed while creating a worktree.

    Attributes:
        stderr: Standard error of the failing command, verbatim.
    """

    def __init__(self, message: str, *, stderr: str = "") -> None:
        """Initialize with error message and captured stderr."""
        super().__init__(message)
        self.stderr: str = stderr


class WorktreeTeardownFailedError(WorktreeError):
    """A teardown step failed. Recorded and logged, never raised to callers.

    Attributes:
        step: Name of the teardown step that failed.
    """

    def __init__(self, message: str, *, step: str) -> None:
        """Initialize with error message and the failing step name."""
        super().__init__(message)
        self.step: str = step


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(GitRepositoryError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
