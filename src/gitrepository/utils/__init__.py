"""Utilities for gitrepository.

This package provides the git process runner and structlog logger factories.
"""

from gitrepository.utils._exec import (
    DEFAULT_GIT_EXECUTABLE,
    DEFAULT_TIMEOUT_MS,
    GitCommand,
    GitRunner,
    ProcessResult,
    execute,
    run_git,
)
from gitrepository.utils._logging import LogFormatType, create_logger, get_logger

__all__ = [
    "DEFAULT_GIT_EXECUTABLE",
    "DEFAULT_TIMEOUT_MS",
    "GitCommand",
    "GitRunner",
    "LogFormatType",
    "ProcessResult",
    "create_logger",
    "execute",
    "get_logger",
    "run_git",
]
