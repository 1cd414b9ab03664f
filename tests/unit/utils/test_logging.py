"""Unit tests for logging utilities."""

import json
import logging
from pathlib import Path

import pytest

from gitrepository.config import LogFormat, LoggingSettings, LogLevel, Settings
from gitrepository.utils import create_logger, get_logger
from gitrepository.utils._logging import _log_level_from_string


class TestLogLevelFromString:
    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            ("warning", logging.WARNING),
            ("error", logging.ERROR),
            ("bogus", logging.INFO),
        ],
    )
    def test_maps_names(self, level: str, expected: int) -> None:
        assert _log_level_from_string(level, respect_env=False) == expected

    def test_debug_env_var_forces_debug(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITREPOSITORY_DEBUG", "1")

        assert _log_level_from_string("error") == logging.DEBUG

    def test_debug_env_var_can_be_ignored(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GITREPOSITORY_DEBUG", "1")

        assert _log_level_from_string("error", respect_env=False) == logging.ERROR


class TestCreateLogger:
    def test_creates_log_directory_if_missing(self, tmp_path: Path) -> None:
        log_path = tmp_path / "logs" / "gitrepository.log"

        _ = create_logger(log_file=str(log_path))

        assert log_path.parent.is_dir()

    def test_json_format(self, tmp_path: Path) -> None:
        log_path = tmp_path / "gitrepository.log"
        logger = create_logger(log_format="json", log_file=str(log_path))

        logger.info("worktree_created", branch="test-worktree-abc")

        entry = json.loads(log_path.read_text().splitlines()[0])
        assert entry["event"] == "worktree_created"
        assert entry["branch"] == "test-worktree-abc"
        assert entry["level"] == "info"
        assert "timestamp" in entry

    def test_text_format(self, tmp_path: Path) -> None:
        log_path = tmp_path / "gitrepository.log"
        logger = create_logger(log_format="text", log_file=str(log_path))

        logger.warning("worktree_teardown_step_failed", step="delete_branch")

        content = log_path.read_text()
        assert "worktree_teardown_step_failed" in content
        assert "step=delete_branch" in content

    def test_filters_below_level(self, tmp_path: Path) -> None:
        log_path = tmp_path / "gitrepository.log"
        logger = create_logger(level="warning", log_file=str(log_path))

        logger.info("ignored")
        logger.warning("kept")

        content = log_path.read_text()
        assert "ignored" not in content
        assert "kept" in content

    def test_appends_to_existing_file(self, tmp_path: Path) -> None:
        log_path = tmp_path / "gitrepository.log"
        _ = log_path.write_text("previous line\n")
        logger = create_logger(log_file=str(log_path))

        logger.info("next")

        assert log_path.read_text().startswith("previous line\n")

    def test_writes_to_stderr_without_file(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        logger = create_logger(log_format="json")

        logger.info("to_stderr")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "to_stderr" in captured.err


class TestGetLogger:
    def test_uses_logging_settings(self, tmp_path: Path) -> None:
        log_path = tmp_path / "gitrepository.log"
        settings = Settings(
            logging=LoggingSettings(
                level=LogLevel.DEBUG, format=LogFormat.JSON, file=str(log_path)
            )
        )
        logger = get_logger(settings)

        logger.debug("repository_resolved")

        entry = json.loads(log_path.read_text())
        assert entry["event"] == "repository_resolved"
        assert entry["level"] == "debug"

    def test_binds_context(self, tmp_path: Path) -> None:
        log_path = tmp_path / "gitrepository.log"
        settings = Settings(
            logging=LoggingSettings(format=LogFormat.JSON, file=str(log_path))
        )
        logger = get_logger(settings, component="worktree")

        logger.info("worktree_disposed")

        entry = json.loads(log_path.read_text())
        assert entry["component"] == "worktree"
