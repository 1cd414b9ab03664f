"""Linked worktree lifecycle management.

This module creates an isolated linked worktree next to a repository's main
working tree on a freshly generated branch, and tears it down again. Creation
failures propagate to the caller. Teardown never raises: each step's failure is
recorded on the result and logged as a warning.
"""

import atexit
import shutil
import uuid
from collections.abc import Callable
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING, Self

from gitrepository.config import Settings, load_settings
from gitrepository.enums import WorktreeState
from gitrepository.exceptions import (
    ProcessTimedOutError,
    WorktreeCreationFailedError,
    WorktreeError,
    WorktreeTeardownFailedError,
)
from gitrepository.repository import (
    GitRepository,
    read_main_work_tree,
    resolve_repository,
)
from gitrepository.utils import GitRunner, ProcessResult, get_logger, run_git
from gitrepository.worktree._models import TeardownStepResult, WorktreeTeardownResult

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

STEP_REMOVE_WORKTREE = "remove_worktree"
STEP_DELETE_BRANCH = "delete_branch"
STEP_DELETE_DIRECTORY = "delete_directory"


def worktree_path_for(repository: GitRepository, suffix: str) -> Path:
    """Compute the directory for a repository's managed worktree.

    The worktree is a sibling of the main working tree, named after it plus
    the suffix: ``/src/widgets`` becomes ``/src/widgets-test-worktree``.

    A linked worktree locates its main tree through the shared metadata
    store; any other working tree is its own main tree, wherever its store
    lives (submodules, separate git directories).

    Args:
        repository: Descriptor of any working tree of the repository.
        suffix: Suffix appended to the main working tree's directory name.

    Returns:
        Absolute path of the worktree directory.

    Raises:
        RepositoryStateUnreadableError: If the main store configuration cannot
            be read.
    """
    if repository.is_linked_worktree:
        main_work_tree = read_main_work_tree(repository.common_directory)
    else:
        main_work_tree = repository.local_directory
    return main_work_tree.parent / f"{main_work_tree.name}{suffix}"


class WorktreeHandle:
    """A linked worktree on a generated branch, owned by this object.

    The handle moves from uninitialized to created (create) to disposed
    (dispose) and never back. Use it as a context manager so disposal happens
    on scope exit; skipping disposal is a caller error, mitigated by an
    optional interpreter exit hook.

    Example:
        >>> with create_worktree(repository) as worktree:
        ...     isolated = worktree.resolve()
    """

    def __init__(
        self,
        repository: GitRepository,
        *,
        settings: Settings | None = None,
        logger: "FilteringBoundLogger | None" = None,
        runner: GitRunner = run_git,
    ) -> None:
        """Prepare a handle without touching the filesystem.

        Args:
            repository: Descriptor of the repository to add the worktree to.
            settings: Settings to use. Loaded from the environment when None.
            logger: Diagnostic sink for lifecycle events and teardown
                failures. Built from settings when None.
            runner: Process runner used for git commands.
        """
        self._settings: Settings = settings if settings is not None else load_settings()
        self._logger: "FilteringBoundLogger" = (
            logger
            if logger is not None
            else get_logger(self._settings, component="worktree")
        )
        self._runner: GitRunner = runner
        self._repository: GitRepository = repository
        self._path: Path = worktree_path_for(repository, self._settings.worktree.suffix)
        self._branch: str | None = None
        self._state: WorktreeState = WorktreeState.UNINITIALIZED
        self._teardown: WorktreeTeardownResult | None = None

    @property
    def repository(self) -> GitRepository:
        """Descriptor of the repository the worktree belongs to."""
        return self._repository

    @property
    def path(self) -> Path:
        """Directory of the worktree."""
        return self._path

    @property
    def branch(self) -> str | None:
        """Generated branch name, or None before creation."""
        return self._branch

    @property
    def state(self) -> WorktreeState:
        """Current lifecycle state."""
        return self._state

    def __repr__(self) -> str:
        return (
            f"WorktreeHandle(path={str(self._path)!r}, branch={self._branch!r}, "
            f"state={self._state.value!r})"
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        _ = self.dispose()

    def _git(self, *args: str) -> ProcessResult:
        return self._runner(
            args,
            cwd=self._repository.local_directory,
            executable=self._settings.git.executable,
            timeout_ms=self._settings.git.timeout_ms,
        )

    # Creation
    # ========

    def _run_or_fail(
        self, args: tuple[str, ...], action: str, *, branch: str | None = None
    ) -> None:
        result = self._git(*args)
        if result.timed_out:
            self._abandon(branch)
            msg = f"{action} timed out: {result.error}"
            raise ProcessTimedOutError(
                msg, args=args, timeout_ms=self._settings.git.timeout_ms
            )
        if not result.ok:
            msg = f"{action} failed with error message: {result.failure_detail}"
            raise WorktreeCreationFailedError(msg, stderr=result.stderr)

    def _abandon(self, branch: str | None) -> None:
        """Best-effort cleanup after a timed out creation step."""
        shutil.rmtree(self._path, ignore_errors=True)
        if branch is not None:
            for args in (("worktree", "prune"), ("branch", "-D", branch)):
                result = self._git(*args)
                if not result.ok:
                    self._logger.warning(
                        "worktree_cleanup_failed",
                        args=list(args),
                        error=result.failure_detail,
                    )

    def create(self) -> Self:
        """Create the worktree on a new, uniquely named branch.

        Deletes any leftover directory or file from an earlier run, prunes
        orphaned worktree records so the path can be registered again, then
        adds the worktree.

        Returns:
            This handle, now in the created state.

        Raises:
            WorktreeError: If the handle was already created or disposed.
            WorktreeCreationFailedError: If a git command exits non-zero or
                the leftover directory cannot be deleted. The handle stays
                uninitialized.
            ProcessTimedOutError: If a git command times out.
        """
        if self._state is not WorktreeState.UNINITIALIZED:
            msg = f"Worktree at {self._path} is already {self._state.value}"
            raise WorktreeError(msg)

        if self._path.exists() or self._path.is_symlink():
            try:
                if self._path.is_dir() and not self._path.is_symlink():
                    shutil.rmtree(self._path)
                else:
                    self._path.unlink()
            except OSError as e:
                msg = f"Removing leftover worktree directory {self._path} failed: {e}"
                raise WorktreeCreationFailedError(msg) from e

        self._run_or_fail(("worktree", "prune"), "Pruning orphaned worktrees")

        branch = f"{self._settings.worktree.branch_prefix}{uuid.uuid4().hex}"
        self._run_or_fail(
            ("worktree", "add", str(self._path), "-b", branch),
            "Creating the worktree",
            branch=branch,
        )

        self._branch = branch
        self._state = WorktreeState.CREATED
        if self._settings.worktree.dispose_at_exit:
            atexit.register(self.dispose)

        self._logger.info("worktree_created", path=str(self._path), branch=branch)
        return self

    def resolve(self) -> GitRepository:
        """Resolve the descriptor of the worktree itself.

        Raises:
            WorktreeError: If the worktree is not in the created state.
        """
        if self._state is not WorktreeState.CREATED:
            msg = f"Worktree at {self._path} is {self._state.value}"
            raise WorktreeError(msg)
        return resolve_repository(
            self._path, settings=self._settings, logger=self._logger
        )

    # Teardown
    # ========

    def _remove_worktree(self) -> None:
        if self._path.exists():
            # Forced twice to override both the dirty and the locked guard
            args: tuple[str, ...] = (
                "worktree",
                "remove",
                str(self._path),
                "--force",
                "--force",
            )
        else:
            # Directory already gone, only the worktree record is left
            args = ("worktree", "prune")
        result = self._git(*args)
        if not result.ok:
            msg = (
                "Removing the worktree failed with error message: "
                f"{result.failure_detail}"
            )
            raise WorktreeTeardownFailedError(msg, step=STEP_REMOVE_WORKTREE)

    def _delete_branch(self) -> None:
        if self._branch is None:
            return
        result = self._git("branch", "-D", self._branch)
        if not result.ok:
            msg = (
                f"Removing the branch ({self._branch}) failed with error message: "
                f"{result.failure_detail}"
            )
            raise WorktreeTeardownFailedError(msg, step=STEP_DELETE_BRANCH)

    def _delete_directory(self) -> None:
        if self._path.exists():
            shutil.rmtree(self._path)

    def _run_step(self, step: str, action: Callable[[], None]) -> TeardownStepResult:
        try:
            action()
        except Exception as e:  # noqa: BLE001 - Teardown must never raise
            error = (
                e
                if isinstance(e, WorktreeTeardownFailedError)
                else WorktreeTeardownFailedError(str(e), step=step)
            )
            self._logger.warning(
                "worktree_teardown_step_failed",
                step=step,
                path=str(self._path),
                branch=self._branch,
                error=str(error),
            )
            return TeardownStepResult(step=step, success=False, error=error)
        return TeardownStepResult(step=step, success=True)

    def dispose(self) -> WorktreeTeardownResult:
        """Remove the worktree, its branch and its directory.

        The three steps run in order and independently of each other's
        success. Failures are logged and recorded on the result, never raised.
        Calling dispose again returns the first result without side effects.

        Returns:
            Per-step teardown results.
        """
        if self._teardown is not None:
            return self._teardown

        if self._state is WorktreeState.CREATED:
            result = WorktreeTeardownResult(
                steps=(
                    self._run_step(STEP_REMOVE_WORKTREE, self._remove_worktree),
                    self._run_step(STEP_DELETE_BRANCH, self._delete_branch),
                    self._run_step(STEP_DELETE_DIRECTORY, self._delete_directory),
                )
            )
            self._logger.info(
                "worktree_disposed",
                path=str(self._path),
                branch=self._branch,
                success=result.success,
            )
        else:
            result = WorktreeTeardownResult()

        self._state = WorktreeState.DISPOSED
        self._teardown = result
        atexit.unregister(self.dispose)
        return result


def create_worktree(
    repository: GitRepository,
    *,
    settings: Settings | None = None,
    logger: "FilteringBoundLogger | None" = None,
    runner: GitRunner = run_git,
) -> WorktreeHandle:
    """Create a managed linked worktree for a repository.

    Args:
        repository: Descriptor of the repository to add the worktree to.
        settings: Settings to use. Loaded from the environment when None.
        logger: Diagnostic sink. Built from settings when None.
        runner: Process runner used for git commands.

    Returns:
        A handle in the created state. Dispose it, preferably by using it as a
        context manager.

    Raises:
        WorktreeCreationFailedError: If creating the worktree fails.
        ProcessTimedOutError: If a git command times out.
    """
    handle = WorktreeHandle(repository, settings=settings, logger=logger, runner=runner)
    return handle.create()
