"""Default configuration values.

DEFAULT_CONFIG is a plain dict so it can be deep merged with file and
environment sources before validation.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "git": {
        "executable": "git",
        "timeout_ms": 30000,
    },
    "remote": {
        "default_name": "origin",
    },
    "worktree": {
        "suffix": "-test-worktree",
        "branch_prefix": "test-worktree-",
        "dispose_at_exit": True,
    },
    "logging": {
        "level": "info",
        "format": "text",
        "file": "",
    },
}
