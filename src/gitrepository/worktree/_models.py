"""Worktree lifecycle result models."""

from dataclasses import dataclass

from gitrepository.exceptions import WorktreeTeardownFailedError


@dataclass(frozen=True, slots=True)
class TeardownStepResult:
    """Outcome of a single teardown step.

    Attributes:
        step: Step name (remove_worktree, delete_branch, delete_directory).
        success: Whether the step completed.
        error: The recorded failure, or None on success.
    """

    step: str
    success: bool
    error: WorktreeTeardownFailedError | None = None


@dataclass(frozen=True, slots=True)
class WorktreeTeardownResult:
    """Outcome of disposing a worktree.

    Attributes:
        steps: Per-step results in execution order. Empty when there was
            nothing to tear down.
    """

    steps: tuple[TeardownStepResult, ...] = ()

    @property
    def success(self) -> bool:
        """Whether every step completed."""
        return all(step.success for step in self.steps)

    @property
    def errors(self) -> tuple[WorktreeTeardownFailedError, ...]:
        """Failures recorded by the steps, in execution order."""
        return tuple(step.error for step in self.steps if step.error is not None)
