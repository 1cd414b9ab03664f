from pathlib import Path

import pytest
from pydantic import ValidationError
from pytest_mock import MockerFixture

from gitrepository.config import (
    CONFIG_PATH_ENV_VAR,
    DEFAULT_CONFIG,
    LogFormat,
    LogLevel,
    Settings,
    get_user_config_path,
    load_settings,
    settings_from_dict,
)
from gitrepository.exceptions import ConfigLoadError, ConfigValidationError


@pytest.fixture
def user_config(mocker: MockerFixture, tmp_path: Path) -> Path:
    """Point the user config file at a path under tmp_path (not created)."""
    path = tmp_path / "user" / "config.toml"
    _ = mocker.patch(
        "gitrepository.config._load.get_user_config_path", return_value=path
    )
    return path


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(content)
    return path


class TestSettingsModels:
    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.git.executable == "git"
        assert settings.git.timeout_ms == 30000
        assert settings.remote.default_name == "origin"
        assert settings.worktree.suffix == "-test-worktree"
        assert settings.worktree.branch_prefix == "test-worktree-"
        assert settings.worktree.dispose_at_exit is True
        assert settings.logging.level is LogLevel.INFO
        assert settings.logging.format is LogFormat.TEXT
        assert settings.logging.file == ""

    def test_default_config_matches_model_defaults(self) -> None:
        assert Settings.model_validate(DEFAULT_CONFIG) == Settings()

    def test_is_frozen(self) -> None:
        settings = Settings()

        with pytest.raises(ValidationError):
            settings.git.timeout_ms = 1  # pyright: ignore[reportAttributeAccessIssue]

    def test_ignores_unknown_keys(self) -> None:
        settings = Settings.model_validate({"git": {"colour": "blue"}, "extra": 1})

        assert settings.git.executable == "git"


class TestSettingsFromDict:
    def test_merges_over_defaults(self) -> None:
        settings = settings_from_dict({"git": {"timeout_ms": 1000}})

        assert settings.git.timeout_ms == 1000
        assert settings.git.executable == "git"

    def test_invalid_value_raises_config_validation_error(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            _ = settings_from_dict({"git": {"timeout_ms": 0}})

        error = exc_info.value
        assert error.key == "git.timeout_ms"
        assert error.value == 0
        assert error.expected == "greater_than"
        assert isinstance(error.__cause__, ValidationError)

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            _ = settings_from_dict({"logging": {"level": "verbose"}})

        assert exc_info.value.key == "logging.level"


class TestLoadSettings:
    def test_defaults_without_sources(self, user_config: Path) -> None:
        assert load_settings(environ={}) == Settings()

    def test_reads_user_config(self, user_config: Path) -> None:
        _ = _write(user_config, '[remote]\ndefault_name = "upstream"\n')

        settings = load_settings(environ={})

        assert settings.remote.default_name == "upstream"

    def test_can_skip_user_config(self, user_config: Path) -> None:
        _ = _write(user_config, '[remote]\ndefault_name = "upstream"\n')

        settings = load_settings(include_user=False, environ={})

        assert settings.remote.default_name == "origin"

    def test_explicit_file_overrides_user_config(
        self, user_config: Path, tmp_path: Path
    ) -> None:
        _ = _write(user_config, '[worktree]\nsuffix = "-user"\nbranch_prefix = "u-"\n')
        explicit = _write(tmp_path / "project.toml", '[worktree]\nsuffix = "-ci"\n')

        settings = load_settings(explicit, environ={})

        assert settings.worktree.suffix == "-ci"
        assert settings.worktree.branch_prefix == "u-"

    def test_explicit_file_from_environment(
        self, user_config: Path, tmp_path: Path
    ) -> None:
        explicit = _write(tmp_path / "ci.toml", "[git]\ntimeout_ms = 120000\n")

        settings = load_settings(environ={CONFIG_PATH_ENV_VAR: str(explicit)})

        assert settings.git.timeout_ms == 120000

    def test_environment_overrides_files(
        self, user_config: Path, tmp_path: Path
    ) -> None:
        explicit = _write(tmp_path / "ci.toml", "[git]\ntimeout_ms = 120000\n")

        settings = load_settings(
            explicit, environ={"GITREPOSITORY_GIT__TIMEOUT_MS": "5000"}
        )

        assert settings.git.timeout_ms == 5000

    def test_can_skip_environment(self, user_config: Path) -> None:
        settings = load_settings(
            include_env=False, environ={"GITREPOSITORY_GIT__TIMEOUT_MS": "5000"}
        )

        assert settings.git.timeout_ms == 30000

    def test_reads_os_environ_by_default(
        self, user_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GITREPOSITORY_REMOTE__DEFAULT_NAME", "upstream")

        assert load_settings().remote.default_name == "upstream"

    def test_missing_explicit_file_raises(
        self, user_config: Path, tmp_path: Path
    ) -> None:
        missing = tmp_path / "missing.toml"

        with pytest.raises(ConfigLoadError) as exc_info:
            _ = load_settings(missing, environ={})

        assert exc_info.value.path == missing

    def test_invalid_user_config_raises(self, user_config: Path) -> None:
        _ = _write(user_config, "[git\n")

        with pytest.raises(ConfigLoadError):
            _ = load_settings(environ={})

    def test_invalid_environment_value_raises(self, user_config: Path) -> None:
        with pytest.raises(ConfigValidationError):
            _ = load_settings(environ={"GITREPOSITORY_GIT__EXECUTABLE": ""})


class TestGetUserConfigPath:
    def test_is_config_toml_in_app_directory(self) -> None:
        path = get_user_config_path()

        assert path.name == "config.toml"
        assert path.parent.name == "gitrepository"
