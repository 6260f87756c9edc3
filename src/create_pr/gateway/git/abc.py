"""High-level git operations interface.

This module provides a clean abstraction over git subprocess calls, making the
pipeline testable without invoking real processes.

Architecture:
- Git: Abstract base class defining the interface
- RealGit: Production implementation using subprocess
- FakeGit: In-memory implementation for tests
"""

from abc import ABC, abstractmethod
from pathlib import Path

from create_pr.gateway.git.types import GitCommandError, GitCommandResult


class Git(ABC):
    """Abstract interface for the git operations create-pr needs.

    Query operations return None, False or empty lists when git reports a
    failure. Branch mutations raise RuntimeError. Remote and history-rewriting
    mutations used by the push fallback chain return
    GitCommandResult | GitCommandError.
    """

    # ============================================================================
    # Environment
    # ============================================================================

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the git executable is installed."""
        ...

    @abstractmethod
    def get_repository_root(self, cwd: Path) -> Path | None:
        """Get the top-level directory of the repository containing cwd.

        Returns:
            Repository root, or None if cwd is not inside a git repository
        """
        ...

    # ============================================================================
    # Query Operations
    # ============================================================================

    @abstractmethod
    def get_current_branch(self, cwd: Path) -> str | None:
        """Get the currently checked-out branch, or None on a detached HEAD."""
        ...

    @abstractmethod
    def get_head_commit(self, cwd: Path) -> str | None:
        """Get the SHA of HEAD, or None in a repository with no commits."""
        ...

    @abstractmethod
    def local_branch_exists(self, repo_root: Path, branch: str) -> bool:
        """Check whether refs/heads/<branch> exists."""
        ...

    @abstractmethod
    def remote_branch_exists(self, repo_root: Path, remote: str, branch: str) -> bool:
        """Check whether the remote-tracking ref refs/remotes/<remote>/<branch> exists.

        This only consults local refs; it does not contact the remote.
        """
        ...

    @abstractmethod
    def detect_trunk_branch(self, repo_root: Path, remote: str) -> str:
        """Auto-detect the trunk branch name.

        Checks the remote's HEAD reference, then falls back to the first of
        'main' and 'master' that exists locally, then to 'main'.
        """
        ...

    @abstractmethod
    def get_commit_subjects_since(self, cwd: Path, base_ref: str) -> list[str]:
        """Get subjects of commits reachable from HEAD but not from base_ref.

        Returns:
            Subject lines ordered oldest first; empty if there are none or
            base_ref does not exist
        """
        ...

    @abstractmethod
    def is_ancestor(self, cwd: Path, ancestor: str, descendant: str) -> bool:
        """Check whether ancestor is reachable from descendant."""
        ...

    @abstractmethod
    def count_commits_between(self, cwd: Path, base: str, head: str) -> int:
        """Count commits reachable from head but not from base (0 on error)."""
        ...

    # ============================================================================
    # Branch Mutations
    # ============================================================================

    @abstractmethod
    def create_branch(self, cwd: Path, branch: str, *, start_point: str | None = None) -> None:
        """Create a branch and check it out (git checkout -b).

        The branch starts at start_point when given, otherwise at HEAD.

        Raises:
            RuntimeError: If git fails
        """
        ...

    @abstractmethod
    def checkout_branch(self, cwd: Path, branch: str) -> None:
        """Check out an existing branch.

        Raises:
            RuntimeError: If git fails
        """
        ...

    # ============================================================================
    # Remote and History Mutations
    # ============================================================================

    @abstractmethod
    def push_branch(
        self, cwd: Path, remote: str, branch: str, *, force: bool
    ) -> GitCommandResult | GitCommandError:
        """Push a branch with upstream tracking (git push -u [--force])."""
        ...

    @abstractmethod
    def fetch_branch(
        self, cwd: Path, remote: str, branch: str
    ) -> GitCommandResult | GitCommandError:
        """Fetch a single branch from a remote."""
        ...

    @abstractmethod
    def reset_hard(self, cwd: Path, ref: str) -> GitCommandResult | GitCommandError:
        """Hard-reset the current branch and working tree to ref."""
        ...

    @abstractmethod
    def cherry_pick(self, cwd: Path, commit_sha: str) -> GitCommandResult | GitCommandError:
        """Apply a single commit onto HEAD.

        A conflicting cherry-pick is aborted so the working tree is left clean.
        """
        ...
