# ruff: noqa: TC003  # Path needed at runtime for dataclass fields
"""Repository descriptor models.

This module defines the immutable values produced while resolving a path into a
repository descriptor.
"""

from dataclasses import dataclass, field
from pathlib import Path

from gitrepository.enums import RemoteProtocol


@dataclass(frozen=True, slots=True)
class GitDirectory:
    """Location of a working tree and its metadata stores.

    Attributes:
        work_tree: Directory holding the `.git` entry.
        git_dir: Metadata store for this working tree. For a linked worktree
            this is the `worktrees/<name>` directory inside the main store.
        common_dir: Main metadata store shared by all worktrees.
    """

    work_tree: Path
    git_dir: Path
    common_dir: Path

    @property
    def is_linked_worktree(self) -> bool:
        """Whether git_dir is a worktree-specific store."""
        return self.git_dir != self.common_dir


@dataclass(frozen=True, slots=True)
class RemoteEndpoint:
    """A remote URL normalized into protocol-independent parts.

    Attributes:
        protocol: Dialect of the configured URL.
        host: Host name.
        path: Repository path on the host, without `.git` suffix.
        endpoint: ``host/path``.
        identifier: Short ``owner/repo`` identifier.
        https_url: Canonical HTTPS URL.
        ssh_url: Canonical scp-like SSH URL.
    """

    protocol: RemoteProtocol
    host: str
    path: str
    endpoint: str
    identifier: str
    https_url: str
    ssh_url: str


@dataclass(frozen=True, slots=True)
class RefState:
    """HEAD, tracking and tag state of a working tree.

    Attributes:
        branch: Current branch name, or None if HEAD is detached.
        commit: Full commit SHA HEAD resolves to.
        head: Symbolic value of HEAD, or the commit SHA if detached.
        remote_name: Remote tracked by the current branch, or None.
        remote_branch: Upstream branch name on that remote, or None.
        tags: Names of tags pointing at commit.
    """

    branch: str | None
    commit: str
    head: str | None
    remote_name: str | None = None
    remote_branch: str | None = None
    tags: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True, slots=True)
class GitRepository:
    """Immutable descriptor of a git repository at one point in time.

    A descriptor never changes after construction; resolve the path again to
    observe later repository state. Remote fields are all None when no remote
    is configured.

    Attributes:
        local_directory: Root of the working tree (the linked worktree's own
            directory when resolved from inside one).
        git_directory: Metadata store of this working tree.
        common_directory: Main metadata store shared by all worktrees.
        branch: Current branch name, or None if HEAD is detached.
        commit: Full commit SHA at HEAD.
        head: Symbolic value of HEAD (e.g. ``refs/heads/main``), or the
            commit SHA if detached.
        remote_name: Remote tracked by the current branch, or None.
        remote_branch: Upstream branch name on that remote, or None.
        protocol: Dialect of the primary remote URL.
        endpoint: ``host/path`` of the primary remote.
        identifier: ``owner/repo`` of the primary remote.
        https_url: Canonical HTTPS URL of the primary remote.
        ssh_url: Canonical SSH URL of the primary remote.
        tags: Names of tags pointing at commit.
    """

    local_directory: Path
    git_directory: Path
    common_directory: Path
    branch: str | None
    commit: str
    head: str | None
    remote_name: str | None = None
    remote_branch: str | None = None
    protocol: RemoteProtocol | None = None
    endpoint: str | None = None
    identifier: str | None = None
    https_url: str | None = None
    ssh_url: str | None = None
    tags: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_detached(self) -> bool:
        """Whether HEAD points directly at a commit rather than a ref."""
        return self.head == self.commit

    @property
    def is_linked_worktree(self) -> bool:
        """Whether this descriptor was resolved from a linked worktree."""
        return self.git_directory != self.common_directory

    def __str__(self) -> str:
        return self.https_url or str(self.local_directory)
