"""Linked worktree lifecycle management.

This package creates a disposable linked worktree next to a repository's main
working tree on a generated branch, and tears it down without raising.

Functions:
    create_worktree: Create a worktree and return its handle.
    worktree_path_for: Compute the directory a managed worktree uses.

Models:
    WorktreeHandle: Owner of a single worktree's lifecycle.
    WorktreeTeardownResult: Per-step outcome of disposal.
    TeardownStepResult: Outcome of a single teardown step.

Example:
    >>> from gitrepository.repository import resolve_repository
    >>> from gitrepository.worktree import create_worktree
    >>> with create_worktree(resolve_repository(Path.cwd())) as worktree:
    ...     print(worktree.resolve().commit)
"""

from gitrepository.worktree._manager import (
    STEP_DELETE_BRANCH,
    STEP_DELETE_DIRECTORY,
    STEP_REMOVE_WORKTREE,
    WorktreeHandle,
    create_worktree,
    worktree_path_for,
)
from gitrepository.worktree._models import TeardownStepResult, WorktreeTeardownResult

__all__ = [
    "STEP_DELETE_BRANCH",
    "STEP_DELETE_DIRECTORY",
    "STEP_REMOVE_WORKTREE",
    "TeardownStepResult",
    "WorktreeHandle",
    "WorktreeTeardownResult",
    "create_worktree",
    "worktree_path_for",
]
