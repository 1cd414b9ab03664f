"""Repository descriptor resolution.

This package turns a path inside a git working tree (main tree or linked
worktree) into an immutable GitRepository descriptor.

Functions:
    resolve_repository: Public entry point; path to descriptor.
    locate_git_directory: Find the metadata stores for a path.
    read_ref_state: Read HEAD, tracking and tag state.
    read_main_work_tree: Find the main working tree owning a metadata store.
    normalize_remote_urls: Normalize configured remote URLs.

Models:
    GitRepository: The immutable repository descriptor.
    GitDirectory: Working tree and metadata store locations.
    RefState: HEAD, tracking and tag snapshot.
    RemoteEndpoint: Protocol-independent remote endpoint.

Example:
    >>> from gitrepository.repository import is_on_release_branch, resolve_repository
    >>> repository = resolve_repository(Path.cwd())
    >>> if is_on_release_branch(repository):
    ...     print(repository.commit)
"""

from gitrepository.repository._branches import (
    get_github_name,
    get_github_owner,
    is_github_repository,
    is_on_develop_branch,
    is_on_feature_branch,
    is_on_hotfix_branch,
    is_on_main_branch,
    is_on_master_branch,
    is_on_release_branch,
)
from gitrepository.repository._locator import locate_git_directory, parse_gitdir_file
from gitrepository.repository._models import (
    GitDirectory,
    GitRepository,
    RefState,
    RemoteEndpoint,
)
from gitrepository.repository._remote import (
    build_remote_endpoint,
    normalize_remote_urls,
    parse_remote_url,
)
from gitrepository.repository._resolve import resolve_repository, select_remote
from gitrepository.repository._state import (
    read_main_work_tree,
    read_ref_state,
    read_remote_urls,
    strip_refs_heads,
)

__all__ = [
    "GitDirectory",
    "GitRepository",
    "RefState",
    "RemoteEndpoint",
    "build_remote_endpoint",
    "get_github_name",
    "get_github_owner",
    "is_github_repository",
    "is_on_develop_branch",
    "is_on_feature_branch",
    "is_on_hotfix_branch",
    "is_on_main_branch",
    "is_on_master_branch",
    "is_on_release_branch",
    "locate_git_directory",
    "normalize_remote_urls",
    "parse_gitdir_file",
    "parse_remote_url",
    "read_main_work_tree",
    "read_ref_state",
    "read_remote_urls",
    "resolve_repository",
    "select_remote",
    "strip_refs_heads",
]
