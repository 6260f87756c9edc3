"""Fake implementation of Git operations for testing."""

from pathlib import Path

from create_pr.gateway.git.abc import Git
from create_pr.gateway.git.types import GitCommandError, GitCommandResult, PushedBranch


class FakeGit(Git):
    """In-memory fake implementation of Git operations.

    This class has NO public setup methods. All state is provided via the
    constructor using keyword arguments with sensible defaults.

    Constructor Injection:
    ---------------------
    - available: Whether `is_available()` reports git as installed
    - repository_roots: Mapping of cwd -> repository root
    - current_branches: Mapping of cwd -> checked-out branch (missing = detached)
    - head_commit: SHA reported for HEAD (None = empty repository)
    - local_branches: Names that exist under refs/heads
    - remote_branches: Mapping of remote -> branch names under refs/remotes/<remote>
    - trunk_branch: Value returned by detect_trunk_branch()
    - commit_subjects: Mapping of base_ref -> subjects ahead of it (oldest first)
    - ancestors: Set of (ancestor, descendant) pairs for is_ancestor()
    - commits_between: Mapping of (base, head) -> count for count_commits_between()
    - push_error / force_push_error / fetch_error / reset_error / cherry_pick_error:
      Error message to return from that operation (None = succeed)
    - create_branch_raises / checkout_raises: Exception to raise from that operation

    Mutation Tracking:
    -----------------
    Read-only properties expose recorded calls for assertions; `operations`
    lists every mutation in call order (e.g. "push origin feature").
    """

    def __init__(
        self,
        *,
        available: bool = True,
        repository_roots: dict[Path, Path] | None = None,
        current_branches: dict[Path, str] | None = None,
        head_commit: str | None = "abc1234def5678",
        local_branches: list[str] | None = None,
        remote_branches: dict[str, list[str]] | None = None,
        trunk_branch: str = "main",
        commit_subjects: dict[str, list[str]] | None = None,
        ancestors: set[tuple[str, str]] | None = None,
        commits_between: dict[tuple[str, str], int] | None = None,
        push_error: str | None = None,
        force_push_error: str | None = None,
        fetch_error: str | None = None,
        reset_error: str | None = None,
        cherry_pick_error: str | None = None,
        create_branch_raises: Exception | None = None,
        checkout_raises: Exception | None = None,
    ) -> None:
        self._available = available
        self._repository_roots = repository_roots or {}
        self._current_branches = dict(current_branches or {})
        self._head_commit = head_commit
        self._local_branches = list(local_branches or [])
        self._remote_branches = remote_branches or {}
        self._trunk_branch = trunk_branch
        self._commit_subjects = commit_subjects or {}
        self._ancestors = ancestors or set()
        self._commits_between = commits_between or {}
        self._push_error = push_error
        self._force_push_error = force_push_error
        self._fetch_error = fetch_error
        self._reset_error = reset_error
        self._cherry_pick_error = cherry_pick_error
        self._create_branch_raises = create_branch_raises
        self._checkout_raises = checkout_raises

        # Mutation tracking
        self._created_branches: list[str] = []
        self._checked_out_branches: list[str] = []
        self._pushed_branches: list[PushedBranch] = []
        self._fetched_branches: list[tuple[str, str]] = []
        self._resets: list[str] = []
        self._cherry_picks: list[str] = []
        self._operations: list[str] = []

    def is_available(self) -> bool:
        return self._available

    def get_repository_root(self, cwd: Path) -> Path | None:
        return self._repository_roots.get(cwd)

    # ============================================================================
    # Query Operations
    # ============================================================================

    def get_current_branch(self, cwd: Path) -> str | None:
        return self._current_branches.get(cwd)

    def get_head_commit(self, cwd: Path) -> str | None:
        return self._head_commit

    def local_branch_exists(self, repo_root: Path, branch: str) -> bool:
        return branch in self._local_branches

    def remote_branch_exists(self, repo_root: Path, remote: str, branch: str) -> bool:
        return branch in self._remote_branches.get(remote, [])

    def detect_trunk_branch(self, repo_root: Path, remote: str) -> str:
        return self._trunk_branch

    def get_commit_subjects_since(self, cwd: Path, base_ref: str) -> list[str]:
        return list(self._commit_subjects.get(base_ref, []))

    def is_ancestor(self, cwd: Path, ancestor: str, descendant: str) -> bool:
        return (ancestor, descendant) in self._ancestors

    def count_commits_between(self, cwd: Path, base: str, head: str) -> int:
        return self._commits_between.get((base, head), 0)

    # ============================================================================
    # Branch Mutations
    # ============================================================================

    def create_branch(self, cwd: Path, branch: str, *, start_point: str | None = None) -> None:
        if start_point is None:
            self._operations.append(f"create-branch {branch}")
        else:
            self._operations.append(f"create-branch {branch} from {start_point}")
        if self._create_branch_raises is not None:
            raise self._create_branch_raises
        self._created_branches.append(branch)
        self._local_branches.append(branch)
        self._current_branches[cwd] = branch

    def checkout_branch(self, cwd: Path, branch: str) -> None:
        self._operations.append(f"checkout {branch}")
        if self._checkout_raises is not None:
            raise self._checkout_raises
        self._checked_out_branches.append(branch)
        self._current_branches[cwd] = branch

    # ============================================================================
    # Remote and History Mutations
    # ============================================================================

    def push_branch(
        self, cwd: Path, remote: str, branch: str, *, force: bool
    ) -> GitCommandResult | GitCommandError:
        self._operations.append(f"push{' --force' if force else ''} {remote} {branch}")
        error = self._force_push_error if force else self._push_error
        if error is not None:
            return GitCommandError(operation="push", message=error)
        self._pushed_branches.append(PushedBranch(remote=remote, branch=branch, force=force))
        return GitCommandResult()

    def fetch_branch(
        self, cwd: Path, remote: str, branch: str
    ) -> GitCommandResult | GitCommandError:
        self._operations.append(f"fetch {remote} {branch}")
        if self._fetch_error is not None:
            return GitCommandError(operation="fetch", message=self._fetch_error)
        self._fetched_branches.append((remote, branch))
        return GitCommandResult()

    def reset_hard(self, cwd: Path, ref: str) -> GitCommandResult | GitCommandError:
        self._operations.append(f"reset --hard {ref}")
        if self._reset_error is not None:
            return GitCommandError(operation="reset", message=self._reset_error)
        self._resets.append(ref)
        return GitCommandResult()

    def cherry_pick(self, cwd: Path, commit_sha: str) -> GitCommandResult | GitCommandError:
        self._operations.append(f"cherry-pick {commit_sha}")
        if self._cherry_pick_error is not None:
            return GitCommandError(operation="cherry-pick", message=self._cherry_pick_error)
        self._cherry_picks.append(commit_sha)
        return GitCommandResult()

    # ============================================================================
    # Mutation Tracking Properties
    # ============================================================================

    @property
    def created_branches(self) -> list[str]:
        return list(self._created_branches)

    @property
    def checked_out_branches(self) -> list[str]:
        return list(self._checked_out_branches)

    @property
    def pushed_branches(self) -> list[PushedBranch]:
        """Successful pushes, as PushedBranch records."""
        return list(self._pushed_branches)

    @property
    def fetched_branches(self) -> list[tuple[str, str]]:
        """Successful fetches, as (remote, branch) tuples."""
        return list(self._fetched_branches)

    @property
    def resets(self) -> list[str]:
        return list(self._resets)

    @property
    def cherry_picks(self) -> list[str]:
        return list(self._cherry_picks)

    @property
    def operations(self) -> list[str]:
        """Every attempted mutation in call order, including failed ones."""
        return list(self._operations)
