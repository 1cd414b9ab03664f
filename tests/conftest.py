"""Shared test fixtures for gitrepository tests."""

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from gitrepository.config import Settings, WorktreeSettings
from gitrepository.enums import RemoteProtocol
from gitrepository.repository import GitRepository

MakeRepositoryFunc = Callable[..., GitRepository]


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer GITREPOSITORY_* variables out of every test."""
    for key in list(os.environ):
        if key.startswith("GITREPOSITORY_"):
            monkeypatch.delenv(key)


@pytest.fixture
def settings() -> Settings:
    """Default settings without the interpreter exit hook."""
    return Settings(worktree=WorktreeSettings(dispose_at_exit=False))


@pytest.fixture
def make_repository(tmp_path: Path) -> MakeRepositoryFunc:
    """Return a factory for descriptors of a main working tree under tmp_path."""

    def _make(root: Path | None = None, **overrides: object) -> GitRepository:
        root = root if root is not None else tmp_path / "widgets"
        fields: dict[str, object] = {
            "local_directory": root,
            "git_directory": root / ".git",
            "common_directory": root / ".git",
            "branch": "main",
            "commit": "a" * 40,
            "head": "refs/heads/main",
            "protocol": RemoteProtocol.SSH,
            "endpoint": "example.com/acme/widgets",
            "identifier": "acme/widgets",
            "https_url": "https://example.com/acme/widgets",
            "ssh_url": "git@example.com:acme/widgets.git",
            "tags": frozenset({"v1.0"}),
        }
        fields.update(overrides)
        return GitRepository(**fields)  # pyright: ignore[reportArgumentType]

    return _make
