"""Types for GitHub pull request operations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PRCreated:
    """Success result from creating a pull request.

    Attributes:
        url: Web URL of the new PR, as printed by `gh pr create`
    """

    url: str

    @property
    def number(self) -> int | None:
        """PR number parsed from the URL (https://github.com/owner/repo/pull/123)."""
        tail = self.url.rstrip("/").rsplit("/", 1)[-1]
        if not tail.isdigit():
            return None
        return int(tail)


@dataclass(frozen=True)
class PRCreateError:
    """Error result from creating a pull request. Implements NonIdealState."""

    message: str

    @property
    def error_type(self) -> str:
        return "pr-create-failed"


@dataclass(frozen=True)
class CreatedPR:
    """Record of a create_pr() call, used by FakeGitHub for test assertions."""

    head: str
    base: str
    title: str
    body: str
    draft: bool
