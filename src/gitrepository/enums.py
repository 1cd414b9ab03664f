"""Enumeration types for gitrepository."""

from enum import StrEnum


class RemoteProtocol(StrEnum):
    """Dialect of a configured remote URL."""

    HTTPS = "https"
    SSH = "ssh"


class WorktreeState(StrEnum):
    """Lifecycle states of a managed linked worktree.

    Transitions only move forward: uninitialized -> created -> disposed.
    """

    UNINITIALIZED = "uninitialized"
    CREATED = "created"
    DISPOSED = "disposed"
