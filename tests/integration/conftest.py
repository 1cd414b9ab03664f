import subprocess
from pathlib import Path

import pytest

WIDGETS_ORIGIN = "git@example.com:acme/widgets.git"


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


def git(path: Path, *args: str) -> str:
    """Run git in path and return its stripped standard output."""
    result = subprocess.run(  # noqa: S603
        ["git", *args],  # noqa: S607
        cwd=str(path),
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def init_git_repo(
    path: Path, *, branch: str = "main", separate_git_dir: Path | None = None
) -> None:
    """Initialize a git repository in the given path with no commits.

    HEAD points at `branch` regardless of the installed git's default branch.
    With separate_git_dir the metadata store lives there and path gets a
    `.git` pointer file.
    """
    path.mkdir(parents=True, exist_ok=True)
    if separate_git_dir is None:
        _ = git(path, "init")
    else:
        separate_git_dir.parent.mkdir(parents=True, exist_ok=True)
        _ = git(path, "init", "--separate-git-dir", str(separate_git_dir))
    _ = git(path, "symbolic-ref", "HEAD", f"refs/heads/{branch}")
    _ = git(path, "config", "user.email", "test@example.com")
    _ = git(path, "config", "user.name", "Test User")
    _ = git(path, "config", "commit.gpgsign", "false")
    _ = git(path, "config", "tag.gpgsign", "false")


def commit(path: Path, message: str) -> str:
    """Create an empty commit and return its SHA."""
    _ = git(path, "commit", "--allow-empty", "-m", message)
    return git(path, "rev-parse", "HEAD")


def branch_names(path: Path) -> list[str]:
    """List local branch names."""
    output = git(path, "branch", "--list", "--format=%(refname:short)")
    return output.splitlines()


def inside_git_repository(path: Path) -> bool:
    """Whether any parent of path holds a `.git` entry."""
    return any((parent / ".git").exists() for parent in path.parents)


@pytest.fixture
def widgets_repo(tmp_path: Path) -> Path:
    """Repository on branch main with one commit tagged v1.0 and an SSH origin."""
    root = tmp_path / "widgets"
    init_git_repo(root)
    _ = commit(root, "Initial commit")
    _ = git(root, "tag", "v1.0")
    _ = git(root, "remote", "add", "origin", WIDGETS_ORIGIN)
    return root
