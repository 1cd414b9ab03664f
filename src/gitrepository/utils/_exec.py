"""Execution utilities for external git commands.

This module provides the process runner used for every git invocation that
mutates repository state. Commands run synchronously with a timeout, output is
captured as text, and failures to start or finish are reported on the result
instead of being raised.
"""

import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

# Default timeout in milliseconds
DEFAULT_TIMEOUT_MS: int = 30000  # 30 seconds

DEFAULT_GIT_EXECUTABLE: str = "git"


@dataclass(frozen=True, slots=True)
class GitCommand:
    """A single git invocation.

    Attributes:
        args: Arguments passed to git (without the executable).
        cwd: Working directory for the command.
        executable: Git executable name or path.
        env: Additional environment variables to set.
        timeout_ms: Execution timeout in milliseconds.
    """

    args: tuple[str, ...]
    cwd: Path | None = None
    executable: str = DEFAULT_GIT_EXECUTABLE
    env: dict[str, str] = field(default_factory=dict)
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @property
    def argv(self) -> list[str]:
        """Full argument vector including the executable."""
        return [self.executable, *self.args]


@dataclass(frozen=True, slots=True)
class ProcessResult:
    """Result from a git command.

    Attributes:
        success: Whether the process ran to completion (regardless of exit code).
        exit_code: Process exit code, or None if execution failed.
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        error: Error message if execution failed (timeout, not found, etc.).
        timed_out: Whether the command timed out.
        command_not_found: Whether the git executable was not found.
    """

    success: bool
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    error: str | None = None
    timed_out: bool = False
    command_not_found: bool = False

    @property
    def ok(self) -> bool:
        """True when the command completed with exit code 0."""
        return self.success and self.exit_code == 0

    @property
    def failure_detail(self) -> str:
        """Best available description of why the command failed."""
        if self.error:
            return self.error
        return self.stderr.strip() or f"exit code {self.exit_code}"


class GitRunner(Protocol):
    """Callable signature shared by run_git and test doubles."""

    def __call__(
        self,
        args: tuple[str, ...] | list[str],
        *,
        cwd: Path | str | None = None,
        executable: str = DEFAULT_GIT_EXECUTABLE,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ) -> ProcessResult: ...


def execute(command: GitCommand) -> ProcessResult:
    """Execute a git command.

    Args:
        command: The command to run.

    Returns:
        ProcessResult with execution outcome.
    """
    # Never block on an interactive credential prompt
    env = {**os.environ, "GIT_TERMINAL_PROMPT": "0", **command.env}
    cwd = str(command.cwd) if command.cwd else None
    timeout_seconds = command.timeout_ms / 1000.0

    try:
        result = subprocess.run(  # noqa: S603
            command.argv,
            env=env,
            cwd=cwd,
            capture_output=True,
            timeout=timeout_seconds,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return ProcessResult(
            success=False,
            error=f"Command timed out after {timeout_seconds}s",
            timed_out=True,
        )
    except FileNotFoundError as e:
        return ProcessResult(
            success=False,
            error=str(e),
            command_not_found=True,
        )
    except OSError as e:
        return ProcessResult(
            success=False,
            error=str(e),
        )

    stdout = result.stdout.decode("utf-8", errors="replace")
    stderr = result.stderr.decode("utf-8", errors="replace")

    return ProcessResult(
        success=True,
        exit_code=result.returncode,
        stdout=stdout,
        stderr=stderr,
    )


def run_git(
    args: tuple[str, ...] | list[str],
    *,
    cwd: Path | str | None = None,
    executable: str = DEFAULT_GIT_EXECUTABLE,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> ProcessResult:
    """Run git with the given arguments in a working directory.

    Args:
        args: Arguments passed to git, e.g. ``("worktree", "prune")``.
        cwd: Working directory for the command.
        executable: Git executable name or path.
        timeout_ms: Execution timeout in milliseconds.

    Returns:
        ProcessResult with execution outcome.
    """
    return execute(
        GitCommand(
            args=tuple(args),
            cwd=Path(cwd) if cwd is not None else None,
            executable=executable,
            timeout_ms=timeout_ms,
        )
    )
