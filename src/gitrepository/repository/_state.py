"""Ref and configuration state reading.

This module reads HEAD, tracking configuration, tags and remote URLs for a
located working tree using GitPython. Nothing here writes to the repository.
Worktree-specific state (HEAD) comes from the worktree's own store; refs, tags
and configuration come from the main store.
"""

import configparser
from pathlib import Path

from git import Repo
from git.config import GitConfigParser
from git.exc import GitError, InvalidGitRepositoryError, NoSuchPathError

from gitrepository.exceptions import RepositoryStateUnreadableError
from gitrepository.repository._models import GitDirectory, RefState

HEADS_PREFIX = "refs/heads/"


def strip_refs_heads(ref: str | None) -> str | None:
    """Strip the refs/heads/ prefix from a branch reference.

    Args:
        ref: Branch reference, possibly with refs/heads/ prefix.

    Returns:
        Branch name without prefix, or None if input is None.
    """
    if ref is None:
        return None
    return ref.removeprefix(HEADS_PREFIX)


def open_repo(location: GitDirectory) -> Repo:
    """Open a GitPython repository for a located working tree.

    Args:
        location: Result of locating the metadata store.

    Returns:
        An open Repo. Callers must close it.

    Raises:
        RepositoryStateUnreadableError: If GitPython cannot open the store.
    """
    try:
        return Repo(str(location.work_tree))
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        msg = f"Cannot open git metadata at {location.git_dir}: {e}"
        raise RepositoryStateUnreadableError(msg) from e


def _config_reader(location: GitDirectory) -> GitConfigParser:
    # Remote and branch configuration always lives in the main store
    return GitConfigParser(str(location.common_dir / "config"), read_only=True)


def _read_config_value(
    reader: GitConfigParser, section: str, option: str
) -> str | None:
    if not reader.has_section(section) or not reader.has_option(section, option):
        return None
    value = reader.get_value(section, option)
    return str(value) if value != "" else None


def _read_head(repo: Repo) -> tuple[str | None, str, str | None]:
    """Return (branch, commit, head) for the repository's HEAD."""
    head = repo.head
    if head.is_detached:
        commit = head.commit.hexsha
        return None, commit, commit

    ref_path = head.reference.path
    commit = head.commit.hexsha
    branch = strip_refs_heads(ref_path) if ref_path.startswith(HEADS_PREFIX) else None
    return branch, commit, ref_path


def _read_tags(repo: Repo, commit: str) -> frozenset[str]:
    tags: set[str] = set()
    for tag in repo.tags:
        try:
            # Peels annotated tags down to the tagged commit
            target = tag.commit.hexsha
        except ValueError:
            # Tag on a tree or blob
            continue
        if target == commit:
            tags.add(tag.name)
    return frozenset(tags)


def _read_tracking(
    location: GitDirectory, branch: str | None
) -> tuple[str | None, str | None]:
    if branch is None:
        return None, None

    reader = _config_reader(location)
    section = f'branch "{branch}"'
    remote_name = _read_config_value(reader, section, "remote")
    if remote_name is None:
        return None, None
    return remote_name, strip_refs_heads(_read_config_value(reader, section, "merge"))


def read_ref_state(location: GitDirectory) -> RefState:
    """Read HEAD, tracking and tag state of a working tree.

    Args:
        location: Result of locating the metadata store.

    Returns:
        RefState snapshot.

    Raises:
        RepositoryStateUnreadableError: If HEAD is unborn or unreadable, or
            the store is corrupted.
    """
    repo = open_repo(location)
    try:
        branch, commit, head = _read_head(repo)
        tags = _read_tags(repo, commit)
        remote_name, remote_branch = _read_tracking(location, branch)
    except (ValueError, TypeError, GitError, OSError, configparser.Error) as e:
        msg = f"Cannot read repository state at {location.git_dir}: {e}"
        raise RepositoryStateUnreadableError(msg) from e
    finally:
        # Always close the repository to stop GitPython's helper processes
        repo.close()

    return RefState(
        branch=branch,
        commit=commit,
        head=head,
        remote_name=remote_name,
        remote_branch=remote_branch,
        tags=tags,
    )


def remote_exists(location: GitDirectory, remote_name: str) -> bool:
    """Check whether a remote section is configured in the main store."""
    try:
        return _config_reader(location).has_section(f'remote "{remote_name}"')
    except (GitError, OSError, configparser.Error) as e:
        msg = f"Cannot read configuration at {location.common_dir}: {e}"
        raise RepositoryStateUnreadableError(msg) from e


def read_main_work_tree(common_dir: Path) -> Path:
    """Find the main working tree that owns a metadata store.

    A `core.worktree` setting in the store's configuration wins, resolved
    relative to the store as git does; submodule stores under
    ``.git/modules`` carry one. Otherwise the store is taken to be the
    ``.git`` directory of its working tree.

    Args:
        common_dir: The shared main metadata store.

    Returns:
        Absolute path of the main working tree.

    Raises:
        RepositoryStateUnreadableError: If the configuration cannot be read.
    """
    config_file = common_dir / "config"
    if config_file.is_file():
        try:
            reader = GitConfigParser(str(config_file), read_only=True)
            value = _read_config_value(reader, "core", "worktree")
        except (GitError, OSError, configparser.Error) as e:
            msg = f"Cannot read configuration at {common_dir}: {e}"
            raise RepositoryStateUnreadableError(msg) from e
        if value is not None:
            work_tree = Path(value)
            if not work_tree.is_absolute():
                work_tree = common_dir / work_tree
            return work_tree.resolve()
    return common_dir.parent


def read_remote_urls(location: GitDirectory, remote_name: str) -> tuple[str, ...]:
    """Read every configured URL of a remote, in configuration order.

    Args:
        location: Result of locating the metadata store.
        remote_name: Name of the remote, e.g. ``origin``.

    Returns:
        Tuple of URLs. Empty if the remote or its URL is not configured.

    Raises:
        RepositoryStateUnreadableError: If the configuration cannot be read.
    """
    section = f'remote "{remote_name}"'
    try:
        reader = _config_reader(location)
        if not reader.has_section(section) or not reader.has_option(section, "url"):
            return ()
        return tuple(str(url) for url in reader.get_values(section, "url"))
    except (GitError, OSError, configparser.Error) as e:
        msg = f"Cannot read configuration at {location.common_dir}: {e}"
        raise RepositoryStateUnreadableError(msg) from e
