"""Fake GitHub operations for testing."""

from pathlib import Path

from create_pr.gateway.github.abc import GitHub
from create_pr.gateway.github.types import CreatedPR, PRCreated, PRCreateError


class FakeGitHub(GitHub):
    """In-memory fake implementation of GitHub operations.

    This class has NO public setup methods. All state is provided via the
    constructor using keyword arguments with sensible defaults.

    Created PRs are numbered from `next_pr_number` upwards and given URLs under
    https://github.com/owner/repo/pull/.
    """

    def __init__(
        self,
        *,
        available: bool = True,
        authenticated: bool = True,
        create_pr_error: str | None = None,
        open_browser_raises: Exception | None = None,
        next_pr_number: int = 1,
    ) -> None:
        self._available = available
        self._authenticated = authenticated
        self._create_pr_error = create_pr_error
        self._open_browser_raises = open_browser_raises
        self._next_pr_number = next_pr_number

        self._created_prs: list[CreatedPR] = []
        self._opened_urls: list[str] = []

    def is_available(self) -> bool:
        return self._available

    def check_auth_status(self) -> tuple[bool, str | None]:
        if self._authenticated:
            return (True, None)
        return (False, "You are not logged into any GitHub hosts. Run gh auth login")

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
        if self._create_pr_error is not None:
            return PRCreateError(message=self._create_pr_error)
        self._created_prs.append(
            CreatedPR(head=head, base=base, title=title, body=body, draft=draft)
        )
        pr_number = self._next_pr_number
        self._next_pr_number += 1
        return PRCreated(url=f"https://github.com/owner/repo/pull/{pr_number}")

    def open_pr_in_browser(self, repo_root: Path, pr_url: str) -> None:
        if self._open_browser_raises is not None:
            raise self._open_browser_raises
        self._opened_urls.append(pr_url)

    @property
    def created_prs(self) -> list[CreatedPR]:
        """Read-only access to created PRs for test assertions."""
        return list(self._created_prs)

    @property
    def opened_urls(self) -> list[str]:
        """URLs opened in the browser, in call order."""
        return list(self._opened_urls)
