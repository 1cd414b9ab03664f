"""Configuration models.

This module provides the Pydantic models for gitrepository settings. All
models are frozen and ignore unknown keys so that newer config files stay
readable by older releases.
"""

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class GitSettings(BaseModel):
    """Settings for external git invocations.

    Attributes:
        executable: Git executable name or absolute path.
        timeout_ms: Timeout applied to every git command, in milliseconds.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    executable: str = Field(default="git", min_length=1)
    timeout_ms: int = Field(default=30000, gt=0)


class RemoteSettings(BaseModel):
    """Settings for choosing the primary remote.

    Attributes:
        default_name: Remote used when the current branch tracks none.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    default_name: str = Field(default="origin", min_length=1)


class WorktreeSettings(BaseModel):
    """Settings for managed linked worktrees.

    Attributes:
        suffix: Appended to the main tree's directory name to form the
            worktree directory name.
        branch_prefix: Prefix of the generated worktree branch names.
        dispose_at_exit: Register an interpreter exit hook that disposes
            worktrees the caller forgot to dispose.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    suffix: str = Field(default="-test-worktree", min_length=1)
    branch_prefix: str = "test-worktree-"
    dispose_at_exit: bool = True


class LoggingSettings(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    file: str = ""


class Settings(BaseModel):
    """Top-level gitrepository settings."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    git: GitSettings = Field(default_factory=GitSettings)
    remote: RemoteSettings = Field(default_factory=RemoteSettings)
    worktree: WorktreeSettings = Field(default_factory=WorktreeSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
