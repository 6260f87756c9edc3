"""Production implementation of Git operations using subprocess."""

import shutil
import subprocess
from pathlib import Path

from create_pr.gateway.git.abc import Git
from create_pr.gateway.git.types import GitCommandError, GitCommandResult
from create_pr.subprocess_utils import copied_env_for_git_subprocess, run_subprocess_with_context


class RealGit(Git):
    """Production implementation using subprocess.

    All git operations execute actual git commands via subprocess.
    """

    def is_available(self) -> bool:
        return shutil.which("git") is not None

    def get_repository_root(self, cwd: Path) -> Path | None:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None
        return Path(result.stdout.strip())

    # ============================================================================
    # Query Operations
    # ============================================================================

    def get_current_branch(self, cwd: Path) -> str | None:
        result = subprocess.run(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None

        branch = result.stdout.strip()
        if branch == "HEAD":
            return None

        return branch

    def get_head_commit(self, cwd: Path) -> str | None:
        result = subprocess.run(
            ["git", "rev-parse", "--verify", "--quiet", "HEAD"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None
        return result.stdout.strip()

    def local_branch_exists(self, repo_root: Path, branch: str) -> bool:
        return self._ref_exists(repo_root, f"refs/heads/{branch}")

    def remote_branch_exists(self, repo_root: Path, remote: str, branch: str) -> bool:
        return self._ref_exists(repo_root, f"refs/remotes/{remote}/{branch}")

    def _ref_exists(self, repo_root: Path, ref: str) -> bool:
        result = subprocess.run(
            ["git", "show-ref", "--verify", "--quiet", ref],
            cwd=repo_root,
            capture_output=True,
            check=False,
        )
        return result.returncode == 0

    def detect_trunk_branch(self, repo_root: Path, remote: str) -> str:
        # 1. Remote HEAD, e.g. "refs/remotes/origin/master" -> "master"
        prefix = f"refs/remotes/{remote}/"
        result = subprocess.run(
            ["git", "symbolic-ref", f"refs/remotes/{remote}/HEAD"],
            cwd=repo_root,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode == 0:
            ref = result.stdout.strip()
            if ref.startswith(prefix):
                return ref[len(prefix) :]

        # 2. First of main/master that exists locally
        for candidate in ["main", "master"]:
            if self.local_branch_exists(repo_root, candidate):
                return candidate

        return "main"

    def get_commit_subjects_since(self, cwd: Path, base_ref: str) -> list[str]:
        result = subprocess.run(
            ["git", "log", "--reverse", "--format=%s", f"{base_ref}..HEAD"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return []
        return [line for line in result.stdout.splitlines() if line.strip()]

    def is_ancestor(self, cwd: Path, ancestor: str, descendant: str) -> bool:
        result = subprocess.run(
            ["git", "merge-base", "--is-ancestor", ancestor, descendant],
            cwd=cwd,
            capture_output=True,
            check=False,
        )
        return result.returncode == 0

    def count_commits_between(self, cwd: Path, base: str, head: str) -> int:
        result = subprocess.run(
            ["git", "rev-list", "--count", f"{base}..{head}"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return 0
        return int(result.stdout.strip() or "0")

    # ============================================================================
    # Branch Mutations
    # ============================================================================

    def create_branch(self, cwd: Path, branch: str, *, start_point: str | None = None) -> None:
        cmd = ["git", "checkout", "-b", branch]
        if start_point is not None:
            cmd.append(start_point)
        run_subprocess_with_context(
            cmd=cmd,
            operation_context=f"create branch '{branch}'",
            cwd=cwd,
        )

    def checkout_branch(self, cwd: Path, branch: str) -> None:
        run_subprocess_with_context(
            cmd=["git", "checkout", branch],
            operation_context=f"checkout branch '{branch}'",
            cwd=cwd,
        )

    # ============================================================================
    # Remote and History Mutations
    # ============================================================================

    def push_branch(
        self, cwd: Path, remote: str, branch: str, *, force: bool
    ) -> GitCommandResult | GitCommandError:
        cmd = ["git", "push", "-u"]
        if force:
            cmd.append("--force")
        cmd.extend([remote, branch])
        return self._run_mutation(
            cmd,
            operation="push",
            operation_context=f"push branch '{branch}' to remote '{remote}'",
            cwd=cwd,
        )

    def fetch_branch(
        self, cwd: Path, remote: str, branch: str
    ) -> GitCommandResult | GitCommandError:
        return self._run_mutation(
            ["git", "fetch", remote, branch],
            operation="fetch",
            operation_context=f"fetch branch '{branch}' from remote '{remote}'",
            cwd=cwd,
        )

    def reset_hard(self, cwd: Path, ref: str) -> GitCommandResult | GitCommandError:
        return self._run_mutation(
            ["git", "reset", "--hard", ref],
            operation="reset",
            operation_context=f"reset to '{ref}'",
            cwd=cwd,
        )

    def cherry_pick(self, cwd: Path, commit_sha: str) -> GitCommandResult | GitCommandError:
        result = self._run_mutation(
            ["git", "cherry-pick", commit_sha],
            operation="cherry-pick",
            operation_context=f"cherry-pick commit {commit_sha[:7]}",
            cwd=cwd,
        )
        if isinstance(result, GitCommandError):
            # Leave the tree clean rather than mid-cherry-pick
            subprocess.run(
                ["git", "cherry-pick", "--abort"],
                cwd=cwd,
                capture_output=True,
                check=False,
            )
        return result

    def _run_mutation(
        self, cmd: list[str], *, operation: str, operation_context: str, cwd: Path
    ) -> GitCommandResult | GitCommandError:
        try:
            run_subprocess_with_context(
                cmd=cmd,
                operation_context=operation_context,
                cwd=cwd,
                env=copied_env_for_git_subprocess(),
            )
        except RuntimeError as e:
            return GitCommandError(operation=operation, message=str(e))
        return GitCommandResult()
