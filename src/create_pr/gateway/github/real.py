"""Production implementation of GitHub operations using the gh CLI."""

import os
import shutil
import subprocess
import tempfile
from pathlib import Path

from create_pr.gateway.github.abc import GitHub
from create_pr.gateway.github.types import PRCreated, PRCreateError
from create_pr.subprocess_utils import execute_gh_command, run_subprocess_with_context


class RealGitHub(GitHub):
    """Production implementation using gh CLI.

    All GitHub operations execute actual gh commands via subprocess.
    """

    def is_available(self) -> bool:
        return shutil.which("gh") is not None

    def check_auth_status(self) -> tuple[bool, str | None]:
        result = subprocess.run(
            ["gh", "auth", "status"],
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode == 0:
            return (True, None)
        return (False, (result.stderr or result.stdout).strip() or None)

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
        """Create a pull request using gh CLI.

        The body goes through a scratch file (--body-file) so arbitrary markdown
        never has to survive argument quoting.
        """
        fd, body_path = tempfile.mkstemp(prefix="create-pr-body-", suffix=".md")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as body_file:
                body_file.write(body)

            cmd = [
                "gh",
                "pr",
                "create",
                "--head",
                head,
                "--base",
                base,
                "--title",
                title,
                "--body-file",
                body_path,
            ]
            if draft:
                cmd.append("--draft")

            try:
                result = run_subprocess_with_context(
                    cmd=cmd,
                    operation_context=f"create pull request for branch '{head}'",
                    cwd=repo_root,
                )
            except RuntimeError as e:
                return PRCreateError(message=str(e))
        finally:
            Path(body_path).unlink(missing_ok=True)

        # gh prints progress lines first; the URL is the last line
        lines = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        if not lines:
            return PRCreateError(message="gh pr create succeeded but printed no PR URL")
        return PRCreated(url=lines[-1])

    def open_pr_in_browser(self, repo_root: Path, pr_url: str) -> None:
        execute_gh_command(["gh", "pr", "view", pr_url, "--web"], repo_root)
