from collections.abc import Callable

import pytest

from gitrepository.exceptions import GitRepositoryError
from gitrepository.repository import (
    GitRepository,
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

MakeRepository = Callable[..., GitRepository]


class TestBranchClassification:
    @pytest.mark.parametrize("branch", ["main", "Main", "MAIN"])
    def test_main(self, make_repository: MakeRepository, branch: str) -> None:
        assert is_on_main_branch(make_repository(branch=branch)) is True

    def test_master(self, make_repository: MakeRepository) -> None:
        repository = make_repository(branch="master")

        assert is_on_master_branch(repository) is True
        assert is_on_main_branch(repository) is False

    @pytest.mark.parametrize("branch", ["develop", "development", "dev", "Develop"])
    def test_develop(self, make_repository: MakeRepository, branch: str) -> None:
        assert is_on_develop_branch(make_repository(branch=branch)) is True

    def test_developer_is_not_develop(self, make_repository: MakeRepository) -> None:
        assert is_on_develop_branch(make_repository(branch="developer")) is False

    def test_feature(self, make_repository: MakeRepository) -> None:
        repository = make_repository(branch="feature/JIRA-12-widgets")

        assert is_on_feature_branch(repository) is True
        assert is_on_release_branch(repository) is False

    def test_release(self, make_repository: MakeRepository) -> None:
        assert is_on_release_branch(make_repository(branch="release/1.2")) is True

    def test_hotfix(self, make_repository: MakeRepository) -> None:
        assert is_on_hotfix_branch(make_repository(branch="Hotfix/urgent")) is True

    def test_prefix_without_slash_does_not_match(
        self, make_repository: MakeRepository
    ) -> None:
        assert is_on_release_branch(make_repository(branch="releases")) is False

    def test_detached_head_matches_nothing(
        self, make_repository: MakeRepository
    ) -> None:
        repository = make_repository(branch=None, head="a" * 40)

        assert is_on_main_branch(repository) is False
        assert is_on_develop_branch(repository) is False
        assert is_on_feature_branch(repository) is False


class TestGitHubHelpers:
    def test_github_repository(self, make_repository: MakeRepository) -> None:
        repository = make_repository(
            endpoint="github.com/acme/widgets", identifier="acme/widgets"
        )

        assert is_github_repository(repository) is True
        assert get_github_owner(repository) == "acme"
        assert get_github_name(repository) == "widgets"

    def test_host_comparison_is_case_insensitive(
        self, make_repository: MakeRepository
    ) -> None:
        repository = make_repository(endpoint="GitHub.com/acme/widgets")

        assert is_github_repository(repository) is True

    def test_other_host_is_not_github(self, make_repository: MakeRepository) -> None:
        repository = make_repository()

        assert is_github_repository(repository) is False
        with pytest.raises(GitRepositoryError, match="Not a GitHub repository"):
            _ = get_github_owner(repository)
        with pytest.raises(GitRepositoryError):
            _ = get_github_name(repository)

    def test_no_remote_is_not_github(self, make_repository: MakeRepository) -> None:
        repository = make_repository(endpoint=None, identifier=None)

        assert is_github_repository(repository) is False
