"""Settings discovery and loading."""

import os
from pathlib import Path
from typing import Any

import platformdirs
from pydantic import ValidationError

from gitrepository.exceptions import ConfigLoadError, ConfigValidationError

from ._defaults import DEFAULT_CONFIG
from ._loader import ENV_PREFIX, deep_merge, parse_env_vars, read_toml_file
from ._models import Settings

CONFIG_PATH_ENV_VAR = f"{ENV_PREFIX}CONFIG"


def get_user_config_path() -> Path:
    """Get the platform-specific user config file path.

    - Linux: ``~/.config/gitrepository/config.toml``
    - macOS: ``~/Library/Application Support/gitrepository/config.toml``

    The path is returned whether or not the file exists.
    """
    return platformdirs.user_config_path("gitrepository") / "config.toml"


def _read_optional(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    try:
        if not path.is_file():
            return {}
    except OSError:
        return {}
    return read_toml_file(path)


def settings_from_dict(data: dict[str, Any]) -> Settings:  # pyright: ignore[reportExplicitAny]
    """Validate a merged configuration dictionary.

    Args:
        data: Configuration dictionary, merged over the defaults.

    Returns:
        The validated settings.

    Raises:
        ConfigValidationError: If a value fails validation. The first failing
            key is reported.
    """
    merged = deep_merge(DEFAULT_CONFIG, data)
    try:
        return Settings.model_validate(merged)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"])
        msg = f"Invalid configuration value for {key}: {first['msg']}"
        raise ConfigValidationError(
            msg,
            key=key,
            value=first.get("input"),
            expected=first["type"],
        ) from e


def load_settings(
    config_path: Path | None = None,
    *,
    include_user: bool = True,
    include_env: bool = True,
    environ: dict[str, str] | None = None,
) -> Settings:
    """Load settings from all configuration sources.

    Sources, lowest precedence first: built-in defaults, the user config file,
    an explicit config file (`config_path` or ``GITREPOSITORY_CONFIG``), and
    ``GITREPOSITORY_*`` environment variables.

    Args:
        config_path: Explicit TOML file. Must exist when given.
        include_user: Read the user config file if present.
        include_env: Apply environment variable overrides.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        The validated settings.

    Raises:
        ConfigLoadError: If an explicit file is missing or any file cannot be
            parsed.
        ConfigValidationError: If the merged configuration is invalid.
    """
    env = os.environ if environ is None else environ
    data: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    if include_user:
        data = deep_merge(data, _read_optional(get_user_config_path()))

    explicit = config_path
    if explicit is None and env.get(CONFIG_PATH_ENV_VAR):
        explicit = Path(env[CONFIG_PATH_ENV_VAR])
    if explicit is not None:
        if not explicit.is_file():
            msg = f"Config file not found: {explicit}"
            raise ConfigLoadError(msg, path=explicit)
        data = deep_merge(data, read_toml_file(explicit))

    if include_env:
        data = deep_merge(data, parse_env_vars(dict(env)))

    return settings_from_dict(data)
