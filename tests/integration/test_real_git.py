"""Integration tests for RealGit against throwaway repositories.

Each test builds a bare "remote" plus one or two clones under tmp_path, so
push, fetch, reset and cherry-pick run against real git.

Tests are skipped if git is not installed on the system.
"""

import shutil
import subprocess
from pathlib import Path

import pytest

from create_pr.core.push import PushOutcome, PushStage, push_with_fallback
from create_pr.gateway.git.real import RealGit
from create_pr.gateway.git.types import GitCommandError

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


@pytest.fixture(autouse=True)
def git_identity(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")


def _git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True
    )
    return result.stdout.strip()


def _commit(repo: Path, filename: str, message: str) -> str:
    (repo / filename).write_text(f"{message}\n", encoding="utf-8")
    _git(repo, "add", filename)
    _git(repo, "commit", "-m", message)
    return _git(repo, "rev-parse", "HEAD")


def _clone_with_remote(tmp_path: Path) -> tuple[Path, Path]:
    """Create a bare remote with one commit on main and a clone of it."""
    remote = tmp_path / "remote.git"
    _git(tmp_path, "init", "--bare", "-b", "main", str(remote))

    seed = tmp_path / "seed"
    _git(tmp_path, "clone", str(remote), str(seed))
    _git(seed, "symbolic-ref", "HEAD", "refs/heads/main")
    _commit(seed, "README.md", "Initial commit")
    _git(seed, "push", "origin", "main")

    work = tmp_path / "work"
    _git(tmp_path, "clone", str(remote), str(work))
    return remote, work


def test_queries_on_fresh_clone(tmp_path: Path) -> None:
    _, work = _clone_with_remote(tmp_path)
    git = RealGit()

    assert git.get_repository_root(work) == work.resolve()
    assert git.get_current_branch(work) == "main"
    assert git.get_head_commit(work) is not None
    assert git.local_branch_exists(work, "main")
    assert git.remote_branch_exists(work, "origin", "main")
    assert not git.remote_branch_exists(work, "origin", "nope")
    assert git.detect_trunk_branch(work, "origin") == "main"


def test_repository_root_outside_repo_is_none(tmp_path: Path) -> None:
    outside = tmp_path / "plain"
    outside.mkdir()

    assert RealGit().get_repository_root(outside) is None


def test_commit_subjects_are_oldest_first(tmp_path: Path) -> None:
    _, work = _clone_with_remote(tmp_path)
    _commit(work, "a.txt", "First change")
    _commit(work, "b.txt", "Second change")

    subjects = RealGit().get_commit_subjects_since(work, "origin/main")

    assert subjects == ["First change", "Second change"]


def test_create_and_checkout_branch(tmp_path: Path) -> None:
    _, work = _clone_with_remote(tmp_path)
    git = RealGit()

    git.create_branch(work, "feature")
    assert git.get_current_branch(work) == "feature"

    git.checkout_branch(work, "main")
    assert git.get_current_branch(work) == "main"

    with pytest.raises(RuntimeError, match="Failed to create branch 'feature'"):
        git.create_branch(work, "feature")


def test_create_branch_from_remote_tracking_ref(tmp_path: Path) -> None:
    remote, work = _clone_with_remote(tmp_path)

    other = tmp_path / "other"
    _git(tmp_path, "clone", str(remote), str(other))
    _git(other, "checkout", "-b", "feature")
    theirs = _commit(other, "theirs.txt", "Their change")
    _git(other, "push", "origin", "feature")

    _git(work, "fetch", "origin")
    _commit(work, "local.txt", "Unrelated local work")

    git = RealGit()
    git.create_branch(work, "feature", start_point="origin/feature")

    assert git.get_current_branch(work) == "feature"
    assert git.get_head_commit(work) == theirs
    assert not (work / "local.txt").exists()


def test_fetch_missing_branch_returns_error(tmp_path: Path) -> None:
    _, work = _clone_with_remote(tmp_path)

    result = RealGit().fetch_branch(work, "origin", "does-not-exist")

    assert isinstance(result, GitCommandError)
    assert result.error_type == "fetch-failed"


def test_push_new_branch_directly(tmp_path: Path) -> None:
    remote, work = _clone_with_remote(tmp_path)
    _git(work, "checkout", "-b", "feature")
    sha = _commit(work, "feature.txt", "Add feature")

    result = push_with_fallback(
        RealGit(), cwd=work, remote="origin", branch="feature", original_commit=sha
    )

    assert isinstance(result, PushOutcome)
    assert result.stages == (PushStage.PUSH_DIRECT,)
    assert _git(remote, "rev-parse", "feature") == sha


def test_rejected_push_reapplies_commit_on_remote_tip(tmp_path: Path) -> None:
    remote, work = _clone_with_remote(tmp_path)

    # Someone else publishes "feature" first
    other = tmp_path / "other"
    _git(tmp_path, "clone", str(remote), str(other))
    _git(other, "checkout", "-b", "feature")
    theirs = _commit(other, "theirs.txt", "Their change")
    _git(other, "push", "origin", "feature")

    _git(work, "checkout", "-b", "feature")
    ours = _commit(work, "ours.txt", "Our change")

    git = RealGit()
    result = push_with_fallback(
        git, cwd=work, remote="origin", branch="feature", original_commit=ours
    )

    assert isinstance(result, PushOutcome)
    assert result.stages == (
        PushStage.PUSH_DIRECT,
        PushStage.FETCH_REMOTE,
        PushStage.RESET_AND_CHERRY_PICK,
        PushStage.FORCE_PUSH,
    )
    remote_tip = _git(remote, "rev-parse", "feature")
    assert _git(remote, "log", "-1", "--format=%s", remote_tip) == "Our change"
    assert git.is_ancestor(work, theirs, "HEAD")
    assert (work / "theirs.txt").exists()
    assert (work / "ours.txt").exists()


def test_conflicting_cherry_pick_fails_and_aborts(tmp_path: Path) -> None:
    remote, work = _clone_with_remote(tmp_path)

    other = tmp_path / "other"
    _git(tmp_path, "clone", str(remote), str(other))
    _git(other, "checkout", "-b", "feature")
    (other / "README.md").write_text("theirs\n", encoding="utf-8")
    _git(other, "commit", "-am", "Their README")
    _git(other, "push", "origin", "feature")

    _git(work, "checkout", "-b", "feature")
    (work / "README.md").write_text("ours\n", encoding="utf-8")
    _git(work, "commit", "-am", "Our README")
    ours = _git(work, "rev-parse", "HEAD")

    result = push_with_fallback(
        RealGit(), cwd=work, remote="origin", branch="feature", original_commit=ours
    )

    assert not isinstance(result, PushOutcome)
    assert result.stage is PushStage.RESET_AND_CHERRY_PICK
    assert _git(work, "status", "--porcelain") == ""
