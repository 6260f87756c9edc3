"""Push coordination with a fixed conflict fallback chain.

The chain is an explicit state machine:

    PUSH_DIRECT ──ok──> DONE
        │ fail
        v
    FETCH_REMOTE ──fail──> FORCE_PUSH          (branch presumed absent remotely)
        │ ok
        v
    RESET_AND_CHERRY_PICK ──fail──> FAILED
        │ ok
        v
    FORCE_PUSH ──ok──> DONE
        │ fail
        v
      FAILED

Each stage runs at most once. Nothing is retried beyond this chain.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import click

from create_pr.gateway.git.abc import Git
from create_pr.gateway.git.types import GitCommandError
from create_pr.output import user_output, warning_output

logger = logging.getLogger(__name__)


class PushStage(Enum):
    PUSH_DIRECT = "push"
    FETCH_REMOTE = "fetch"
    RESET_AND_CHERRY_PICK = "reset-and-cherry-pick"
    FORCE_PUSH = "force-push"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class PushOutcome:
    """Success result: the branch exists on the remote.

    Attributes:
        stages: Stages visited, in order (excluding DONE)
        forced: True if the branch was force-pushed
    """

    stages: tuple[PushStage, ...]
    forced: bool


@dataclass(frozen=True)
class PushFailed:
    """Error result: the chain ended in FAILED. Implements NonIdealState.

    Attributes:
        stage: The stage whose command failed
        stages: Stages visited, in order (excluding FAILED)
        message: Error text from git
    """

    stage: PushStage
    stages: tuple[PushStage, ...]
    message: str

    @property
    def error_type(self) -> str:
        return "push-failed"


class PushCoordinator:
    """Runs the push fallback chain for one branch.

    Args:
        git: Git gateway
        cwd: Working directory (inside the repository)
        remote: Remote name, e.g. "origin"
        branch: Branch to publish
        original_commit: HEAD commit captured before create-pr touched any
            branch; re-applied after a hard reset if the remote tip lacks it
    """

    def __init__(
        self, git: Git, *, cwd: Path, remote: str, branch: str, original_commit: str
    ) -> None:
        self._git = git
        self._cwd = cwd
        self._remote = remote
        self._branch = branch
        self._original_commit = original_commit
        self._remote_ref = f"{remote}/{branch}"

    def run(self) -> PushOutcome | PushFailed:
        stage = PushStage.PUSH_DIRECT
        visited: list[PushStage] = []
        forced = False

        while True:
            visited.append(stage)
            if stage is PushStage.FORCE_PUSH:
                forced = True

            next_stage, error = self._step(stage)
            logger.debug("Push stage %s -> %s", stage.value, next_stage.value)

            if next_stage is PushStage.DONE:
                return PushOutcome(stages=tuple(visited), forced=forced)
            if next_stage is PushStage.FAILED:
                return PushFailed(
                    stage=stage,
                    stages=tuple(visited),
                    message=error.message if error is not None else "",
                )
            stage = next_stage

    def _step(self, stage: PushStage) -> tuple[PushStage, GitCommandError | None]:
        if stage is PushStage.PUSH_DIRECT:
            return self._push_direct()
        if stage is PushStage.FETCH_REMOTE:
            return self._fetch_remote()
        if stage is PushStage.RESET_AND_CHERRY_PICK:
            return self._reset_and_cherry_pick()
        if stage is PushStage.FORCE_PUSH:
            return self._force_push()
        raise ValueError(f"No transition out of terminal stage {stage.value}")

    def _push_direct(self) -> tuple[PushStage, GitCommandError | None]:
        user_output(click.style(f"   Pushing {self._branch} to {self._remote}...", dim=True))
        result = self._git.push_branch(self._cwd, self._remote, self._branch, force=False)
        if isinstance(result, GitCommandError):
            logger.debug("Direct push rejected: %s", result.message)
            return (PushStage.FETCH_REMOTE, None)
        return (PushStage.DONE, None)

    def _fetch_remote(self) -> tuple[PushStage, GitCommandError | None]:
        user_output(
            click.style(f"   Push rejected, fetching {self._remote_ref}...", dim=True)
        )
        result = self._git.fetch_branch(self._cwd, self._remote, self._branch)
        if isinstance(result, GitCommandError):
            logger.debug("Fetch failed, assuming branch is absent remotely: %s", result.message)
            return (PushStage.FORCE_PUSH, None)
        return (PushStage.RESET_AND_CHERRY_PICK, None)

    def _reset_and_cherry_pick(self) -> tuple[PushStage, GitCommandError | None]:
        unpublished = self._git.count_commits_between(
            self._cwd, self._remote_ref, self._original_commit
        )
        if unpublished > 1:
            warning_output(
                f"{unpublished} local commits are missing from {self._remote_ref}; "
                f"only {self._original_commit[:7]} will be re-applied."
            )

        user_output(click.style(f"   Resetting {self._branch} to {self._remote_ref}...", dim=True))
        result = self._git.reset_hard(self._cwd, self._remote_ref)
        if isinstance(result, GitCommandError):
            return (PushStage.FAILED, result)

        if self._git.is_ancestor(self._cwd, self._original_commit, "HEAD"):
            logger.debug("Commit %s already on %s", self._original_commit, self._remote_ref)
            return (PushStage.FORCE_PUSH, None)

        user_output(
            click.style(f"   Cherry-picking {self._original_commit[:7]}...", dim=True)
        )
        result = self._git.cherry_pick(self._cwd, self._original_commit)
        if isinstance(result, GitCommandError):
            return (PushStage.FAILED, result)
        return (PushStage.FORCE_PUSH, None)

    def _force_push(self) -> tuple[PushStage, GitCommandError | None]:
        user_output(click.style(f"   Force-pushing {self._branch}...", dim=True))
        result = self._git.push_branch(self._cwd, self._remote, self._branch, force=True)
        if isinstance(result, GitCommandError):
            return (PushStage.FAILED, result)
        return (PushStage.DONE, None)


def push_with_fallback(
    git: Git, *, cwd: Path, remote: str, branch: str, original_commit: str
) -> PushOutcome | PushFailed:
    """Publish branch to remote, falling back to fetch/reset/cherry-pick/force-push."""
    coordinator = PushCoordinator(
        git, cwd=cwd, remote=remote, branch=branch, original_commit=original_commit
    )
    return coordinator.run()
