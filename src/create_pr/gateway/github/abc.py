"""Abstract interface for GitHub operations performed through the gh CLI."""

from abc import ABC, abstractmethod
from pathlib import Path

from create_pr.gateway.github.types import PRCreated, PRCreateError


class GitHub(ABC):
    """Abstract interface for the remote PR host.

    All implementations (real, fake) must implement this interface.
    """

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the gh executable is installed."""
        ...

    @abstractmethod
    def check_auth_status(self) -> tuple[bool, str | None]:
        """Check gh authentication.

        Returns:
            (is_authenticated, detail) where detail is gh's diagnostic output
            when not authenticated
        """
        ...

    @abstractmethod
    def create_pr(
        self,
        repo_root: Path,
        *,
        head: str,
        base: str,
        title: str,
        body: str,
        draft: bool,
    ) -> PRCreated | PRCreateError:
        """Create a pull request.

        Args:
            repo_root: Repository root directory
            head: Source branch for the PR
            base: Target base branch
            title: PR title
            body: PR body (markdown)
            draft: If True, create as draft PR
        """
        ...

    @abstractmethod
    def open_pr_in_browser(self, repo_root: Path, pr_url: str) -> None:
        """Open a pull request's web page.

        Raises:
            RuntimeError: If the browser could not be launched
        """
        ...
