"""Repository descriptor resolution.

This module composes directory location, ref state reading and remote URL
normalization into a single immutable GitRepository descriptor.
"""

from pathlib import Path
from typing import TYPE_CHECKING

from gitrepository.config import Settings, load_settings
from gitrepository.repository._locator import locate_git_directory
from gitrepository.repository._models import GitDirectory, GitRepository, RefState
from gitrepository.repository._remote import normalize_remote_urls
from gitrepository.repository._state import (
    read_ref_state,
    read_remote_urls,
    remote_exists,
)
from gitrepository.utils import get_logger

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


def select_remote(
    location: GitDirectory, state: RefState, default_name: str
) -> str | None:
    """Choose the primary remote for a working tree.

    The remote tracked by the current branch wins; otherwise the default
    remote is used when it is configured.

    Args:
        location: Result of locating the metadata store.
        state: Ref state of the working tree.
        default_name: Conventional remote name, normally ``origin``.

    Returns:
        The remote name, or None if neither remote is configured.
    """
    if state.remote_name is not None and remote_exists(location, state.remote_name):
        return state.remote_name
    if remote_exists(location, default_name):
        return default_name
    return None


def resolve_repository(
    path: Path | str,
    *,
    settings: Settings | None = None,
    logger: "FilteringBoundLogger | None" = None,
) -> GitRepository:
    """Resolve a path inside a working tree into a repository descriptor.

    Steps run in a fixed order: locate the metadata store, read HEAD and
    tracking state, choose the primary remote, read its URLs from the main
    store's configuration, and normalize them. The first failure propagates
    and no descriptor is returned.

    Args:
        path: Any file or directory inside a main or linked working tree.
        settings: Settings to use. Loaded from the environment when None.
        logger: Logger for diagnostics. Built from settings when None.

    Returns:
        The immutable GitRepository descriptor.

    Raises:
        NotARepositoryError: If no metadata store is found above path.
        RepositoryStateUnreadableError: If the store is corrupted or HEAD has
            no commit.
        UnrecognizedUrlError: If the primary remote URL is not recognized.

    Example:
        >>> repository = resolve_repository(Path.cwd())
        >>> repository.branch
        'main'
    """
    settings = settings if settings is not None else load_settings()
    log = logger if logger is not None else get_logger(settings, component="resolver")

    location = locate_git_directory(path)
    state = read_ref_state(location)

    remote_fields: dict[str, object] = {}
    remote_name = select_remote(location, state, settings.remote.default_name)
    if remote_name is not None:
        urls = read_remote_urls(location, remote_name)
        if urls:
            remote = normalize_remote_urls(urls)
            remote_fields = {
                "protocol": remote.protocol,
                "endpoint": remote.endpoint,
                "identifier": remote.identifier,
                "https_url": remote.https_url,
                "ssh_url": remote.ssh_url,
            }

    repository = GitRepository(
        local_directory=location.work_tree,
        git_directory=location.git_dir,
        common_directory=location.common_dir,
        branch=state.branch,
        commit=state.commit,
        head=state.head,
        remote_name=state.remote_name,
        remote_branch=state.remote_branch,
        tags=state.tags,
        **remote_fields,  # pyright: ignore[reportArgumentType]
    )
    log.debug(
        "repository_resolved",
        path=str(path),
        git_directory=str(location.git_dir),
        branch=state.branch,
        commit=state.commit,
        remote=remote_name,
    )
    return repository
