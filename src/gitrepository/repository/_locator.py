"""Git metadata directory discovery.

This module locates the metadata store for a path inside a working tree,
following the ``gitdir:`` pointer file that linked worktrees use in place of a
`.git` directory.
"""

from pathlib import Path

from gitrepository.exceptions import (
    NotARepositoryError,
    RepositoryStateUnreadableError,
)
from gitrepository.repository._models import GitDirectory

DOT_GIT = ".git"
GITDIR_PREFIX = "gitdir:"


def parse_gitdir_file(path: Path) -> Path:
    """Read the metadata path named by a `.git` pointer file.

    Args:
        path: Path to the pointer file.

    Returns:
        Absolute path to the referenced metadata directory. Relative targets
        are resolved against the directory holding the pointer file.

    Raises:
        RepositoryStateUnreadableError: If the file cannot be read or is not a
            ``gitdir:`` pointer.
    """
    try:
        data = path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read git pointer file {path}: {e}"
        raise RepositoryStateUnreadableError(msg) from e

    first_line = data.splitlines()[0] if data else ""
    if not first_line.startswith(GITDIR_PREFIX):
        msg = f"{path} does not start with '{GITDIR_PREFIX}'"
        raise RepositoryStateUnreadableError(msg)

    raw = first_line[len(GITDIR_PREFIX) :].strip()
    if not raw:
        msg = f"{path} has an empty gitdir target"
        raise RepositoryStateUnreadableError(msg)

    gitdir = Path(raw)
    if not gitdir.is_absolute():
        gitdir = path.parent / gitdir
    return gitdir.resolve()


def _read_common_dir(git_dir: Path) -> Path:
    """Return the main metadata store for a (possibly worktree) git_dir."""
    commondir_file = git_dir / "commondir"
    if not commondir_file.is_file():
        return git_dir

    try:
        raw = commondir_file.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read {commondir_file}: {e}"
        raise RepositoryStateUnreadableError(msg) from e

    common_dir = Path(raw)
    if not common_dir.is_absolute():
        common_dir = git_dir / common_dir
    common_dir = common_dir.resolve()
    if not common_dir.is_dir():
        msg = f"{commondir_file} points to missing directory {common_dir}"
        raise RepositoryStateUnreadableError(msg)
    return common_dir


def _git_directory_at(work_tree: Path, dot_git: Path) -> GitDirectory:
    if dot_git.is_dir():
        git_dir = dot_git.resolve()
    else:
        git_dir = parse_gitdir_file(dot_git)
        if not git_dir.is_dir():
            msg = f"{dot_git} points to missing directory {git_dir}"
            raise RepositoryStateUnreadableError(msg)

    return GitDirectory(
        work_tree=work_tree,
        git_dir=git_dir,
        common_dir=_read_common_dir(git_dir),
    )


def locate_git_directory(start: Path | str) -> GitDirectory:
    """Find the metadata store for a path inside a working tree.

    Searches from the starting directory upward through parent directories
    until a `.git` entry is found. A `.git` directory is the metadata store
    itself; a `.git` file is a linked worktree pointer, and its target (the
    worktree-specific store) is returned as git_dir while common_dir names
    the main store.

    Args:
        start: File or directory to start searching from.

    Returns:
        GitDirectory describing the working tree and its stores.

    Raises:
        NotARepositoryError: If the path does not exist or no `.git` entry is
            found before reaching the filesystem root.
        RepositoryStateUnreadableError: If a pointer file is malformed or
            names a missing directory.

    Examples:
        >>> location = locate_git_directory(Path("/path/to/repo/src"))
        >>> location.work_tree
        PosixPath('/path/to/repo')
    """
    start_path = Path(start)
    if not start_path.exists():
        msg = f"Path does not exist: {start_path}"
        raise NotARepositoryError(msg, path=start_path)

    current = start_path.resolve()
    if not current.is_dir():
        current = current.parent

    while True:
        dot_git = current / DOT_GIT
        if dot_git.exists():
            return _git_directory_at(current, dot_git)
        parent = current.parent
        if parent == current:  # Reached filesystem root
            msg = f"Not inside a git repository: {start_path}"
            raise NotARepositoryError(msg, path=start_path)
        current = parent
