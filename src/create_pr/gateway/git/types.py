"""Discriminated union types for Git mutation operations.

Mutations return GitCommandResult | GitCommandError instead of raising.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GitCommandResult:
    """Success result from a git mutation."""


@dataclass(frozen=True)
class GitCommandError:
    """Error result from a git mutation.

    Attributes:
        operation: Short operation name ("push", "fetch", "reset", "cherry-pick")
        message: Error text including git's stderr
    """

    operation: str
    message: str

    @property
    def error_type(self) -> str:
        return f"{self.operation}-failed"


@dataclass(frozen=True)
class PushedBranch:
    """Record of a push, used by FakeGit for test assertions."""

    remote: str
    branch: str
    force: bool


@dataclass(frozen=True)
class CommitReference:
    """Where the user was before create-pr switched branches.

    Attributes:
        branch: Checked-out branch name, or None on a detached HEAD
        commit_sha: HEAD commit at start
    """

    branch: str | None
    commit_sha: str
