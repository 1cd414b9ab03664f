"""Branch and hosting classification for build decisions."""

from gitrepository.exceptions import GitRepositoryError
from gitrepository.repository._models import GitRepository

GITHUB_HOST = "github.com"


def _branch_is(repository: GitRepository, *names: str) -> bool:
    if repository.branch is None:
        return False
    return repository.branch.lower() in names


def _branch_starts_with(repository: GitRepository, prefix: str) -> bool:
    if repository.branch is None:
        return False
    return repository.branch.lower().startswith(f"{prefix}/")


def is_on_main_branch(repository: GitRepository) -> bool:
    """Whether the current branch is ``main``."""
    return _branch_is(repository, "main")


def is_on_master_branch(repository: GitRepository) -> bool:
    """Whether the current branch is ``master``."""
    return _branch_is(repository, "master")


def is_on_develop_branch(repository: GitRepository) -> bool:
    """Whether the current branch is ``develop``, ``development`` or ``dev``."""
    return _branch_is(repository, "develop", "development", "dev")


def is_on_feature_branch(repository: GitRepository) -> bool:
    """Whether the current branch is a ``feature/...`` branch."""
    return _branch_starts_with(repository, "feature")


def is_on_release_branch(repository: GitRepository) -> bool:
    """Whether the current branch is a ``release/...`` branch."""
    return _branch_starts_with(repository, "release")


def is_on_hotfix_branch(repository: GitRepository) -> bool:
    """Whether the current branch is a ``hotfix/...`` branch."""
    return _branch_starts_with(repository, "hotfix")


def is_github_repository(repository: GitRepository) -> bool:
    """Whether the primary remote is hosted on github.com."""
    if repository.endpoint is None:
        return False
    host = repository.endpoint.split("/", 1)[0]
    return host.lower() == GITHUB_HOST


def _github_identifier_parts(repository: GitRepository) -> tuple[str, str]:
    if not is_github_repository(repository) or repository.identifier is None:
        msg = f"Not a GitHub repository: {repository}"
        raise GitRepositoryError(msg)
    owner, _, name = repository.identifier.rpartition("/")
    return owner, name


def get_github_owner(repository: GitRepository) -> str:
    """Return the GitHub owner (user or organization) of the repository.

    Raises:
        GitRepositoryError: If the repository is not hosted on GitHub.
    """
    return _github_identifier_parts(repository)[0]


def get_github_name(repository: GitRepository) -> str:
    """Return the GitHub repository name.

    Raises:
        GitRepositoryError: If the repository is not hosted on GitHub.
    """
    return _github_identifier_parts(repository)[1]
