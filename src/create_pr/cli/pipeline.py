"""Linear pipelines for PR creation.

Two pipelines bracket the dry-run boundary:
- Planning pipeline: resolves title and branch without touching the repository
- Execution pipeline: switches branch, pushes, renders the body, creates the PR

Each step: (PrContext, PrState) -> PrState | PrError
"""

import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import cache
from pathlib import Path

import click

from create_pr.cli.arguments import PrConfig
from create_pr.core.context import PrContext
from create_pr.core.push import PushFailed, push_with_fallback
from create_pr.gateway.git.types import CommitReference
from create_pr.gateway.github.types import PRCreateError
from create_pr.naming import encode_branch_name
from create_pr.output import user_output, warning_output
from create_pr.template import load_pr_body

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Data Types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PrState:
    """Immutable state threaded through both pipelines."""

    # Inputs
    cwd: Path
    repo_root: Path
    remote: str
    config: PrConfig

    # Resolved by the planning pipeline
    title: str
    title_source: str
    branch: str

    # Populated by the execution pipeline
    original: CommitReference | None
    created_branch: bool
    switched_branch: bool
    push_forced: bool
    body: str | None
    pr_url: str | None


@dataclass(frozen=True)
class PrError:
    """Error result from a pipeline step."""

    phase: str
    error_type: str
    message: str
    details: dict[str, str]


PrStep = Callable[[PrContext, PrState], PrState | PrError]


# ---------------------------------------------------------------------------
# Planning Pipeline Steps
# ---------------------------------------------------------------------------


def resolve_title(ctx: PrContext, state: PrState) -> PrState | PrError:
    """Use the explicit title, or the subject of the oldest commit ahead of base."""
    if state.config.title:
        return dataclasses.replace(state, title=state.config.title, title_source="argument")

    base_ref = f"{state.remote}/{state.config.base_branch}"
    subjects = ctx.git.get_commit_subjects_since(state.cwd, base_ref)
    if not subjects:
        return PrError(
            phase="resolve_title",
            error_type="no_commits",
            message=(
                f"No commits found ahead of {base_ref}, so no title can be inferred.\n"
                'Provide one explicitly: create-pr "Your PR title"'
            ),
            details={"base_ref": base_ref},
        )

    logger.debug("Title taken from oldest of %d commit(s) ahead of %s", len(subjects), base_ref)
    return dataclasses.replace(state, title=subjects[0], title_source="commit")


def resolve_branch(ctx: PrContext, state: PrState) -> PrState | PrError:
    """Pick the head branch.

    Explicit branch, else a branch encoded from an explicit title, else the
    current branch, else (on base or detached) a branch encoded from the
    inferred title.
    """
    base = state.config.base_branch
    current = ctx.git.get_current_branch(state.cwd)

    if state.config.branch:
        branch = state.config.branch
    elif state.config.title is None and current is not None and current != base:
        branch = current
    else:
        branch = encode_branch_name(state.title)
        if not branch:
            return PrError(
                phase="resolve_branch",
                error_type="invalid_branch_name",
                message=(
                    f"Cannot derive a branch name from title {state.title!r}.\n"
                    'Pass a branch name explicitly: create-pr my-branch "Your PR title"'
                ),
                details={"title": state.title},
            )

    if branch == base:
        return PrError(
            phase="resolve_branch",
            error_type="branch_is_base",
            message=(
                f"Head branch '{branch}' is the base branch.\n"
                "Give a title or branch name so a new branch can be created."
            ),
            details={"branch": branch},
        )

    return dataclasses.replace(state, branch=branch)


# ---------------------------------------------------------------------------
# Execution Pipeline Steps
# ---------------------------------------------------------------------------


def check_github_cli(ctx: PrContext, state: PrState) -> PrState | PrError:
    """Verify gh is installed and authenticated."""
    if not ctx.github.is_available():
        return PrError(
            phase="check_github_cli",
            error_type="gh_not_installed",
            message="GitHub CLI (gh) not found.\n\nInstall from: https://cli.github.com",
            details={},
        )
    is_authed, detail = ctx.github.check_auth_status()
    if not is_authed:
        message = "GitHub CLI is not authenticated. Run 'gh auth login'."
        if detail:
            message = f"{message}\n\n{detail}"
        return PrError(
            phase="check_github_cli",
            error_type="gh_not_authenticated",
            message=message,
            details={},
        )
    return state


def ensure_branch(ctx: PrContext, state: PrState) -> PrState | PrError:
    """Record where we started, then check out (creating if needed) the head branch.

    A branch that only exists on the remote is created from its remote-tracking
    ref rather than from HEAD.
    """
    head = ctx.git.get_head_commit(state.cwd)
    if head is None:
        return PrError(
            phase="ensure_branch",
            error_type="no_head_commit",
            message="Repository has no commits yet.",
            details={},
        )

    current = ctx.git.get_current_branch(state.cwd)
    original = CommitReference(branch=current, commit_sha=head)

    if current == state.branch:
        return dataclasses.replace(state, original=original)

    if ctx.git.local_branch_exists(state.repo_root, state.branch):
        user_output(click.style(f"   Switching to existing branch {state.branch}", dim=True))
        try:
            ctx.git.checkout_branch(state.cwd, state.branch)
        except RuntimeError as e:
            return PrError(
                phase="ensure_branch",
                error_type="checkout_failed",
                message=str(e),
                details={"branch": state.branch},
            )
        return dataclasses.replace(state, original=original, switched_branch=True)

    start_point = None
    if ctx.git.remote_branch_exists(state.repo_root, state.remote, state.branch):
        start_point = f"{state.remote}/{state.branch}"
        user_output(click.style(f"   Creating branch {state.branch} from {start_point}", dim=True))
    else:
        user_output(click.style(f"   Creating branch {state.branch}", dim=True))
    try:
        ctx.git.create_branch(state.cwd, state.branch, start_point=start_point)
    except RuntimeError as e:
        return PrError(
            phase="ensure_branch",
            error_type="create_branch_failed",
            message=str(e),
            details={"branch": state.branch},
        )
    return dataclasses.replace(state, original=original, created_branch=True, switched_branch=True)


def push_branch(ctx: PrContext, state: PrState) -> PrState | PrError:
    """Publish the head branch, using the fetch/reset/cherry-pick fallback on rejection."""
    assert state.original is not None

    result = push_with_fallback(
        ctx.git,
        cwd=state.cwd,
        remote=state.remote,
        branch=state.branch,
        original_commit=state.original.commit_sha,
    )
    if isinstance(result, PushFailed):
        return PrError(
            phase="push_branch",
            error_type="push_failed",
            message=(
                f"Could not push '{state.branch}' to '{state.remote}' "
                f"(failed at {result.stage.value}).\n{result.message}"
            ),
            details={
                "branch": state.branch,
                "stage": result.stage.value,
                "stages": ",".join(s.value for s in result.stages),
            },
        )

    user_output(click.style(f"   Branch {state.branch} is on {state.remote}", fg="green"))
    return dataclasses.replace(state, push_forced=result.forced)


def render_body(ctx: PrContext, state: PrState) -> PrState | PrError:
    """Render the PR body from the template, or leave it empty when disabled."""
    if not state.config.template:
        return dataclasses.replace(state, body="")

    cfg = ctx.local_config
    try:
        body = load_pr_body(
            state.repo_root,
            template_path=cfg.template_path,
            lyrics_path=cfg.lyrics_path,
            marker=cfg.lyrics_marker,
        )
    except (OSError, UnicodeDecodeError) as e:
        return PrError(
            phase="render_body",
            error_type="template_unreadable",
            message=f"Could not read PR template: {e}",
            details={"template_path": cfg.template_path},
        )
    return dataclasses.replace(state, body=body)


def submit_pr(ctx: PrContext, state: PrState) -> PrState | PrError:
    """Create the pull request via gh."""
    kind = "draft PR" if state.config.draft else "PR"
    user_output(click.style(f"   Creating {kind}: {state.title}", dim=True))

    result = ctx.github.create_pr(
        state.repo_root,
        head=state.branch,
        base=state.config.base_branch,
        title=state.title,
        body=state.body or "",
        draft=state.config.draft,
    )
    if isinstance(result, PRCreateError):
        return PrError(
            phase="submit_pr",
            error_type="pr_create_failed",
            message=result.message,
            details={"branch": state.branch, "base": state.config.base_branch},
        )

    label = f"PR #{result.number}" if result.number is not None else "PR"
    user_output(click.style(f"   {label} created", fg="green"))
    return dataclasses.replace(state, pr_url=result.url)


def open_in_browser(ctx: PrContext, state: PrState) -> PrState | PrError:
    """Open the new PR's web page when requested; failures only warn."""
    if not state.config.open_browser or state.pr_url is None:
        return state
    try:
        ctx.github.open_pr_in_browser(state.repo_root, state.pr_url)
    except RuntimeError as e:
        warning_output(f"Could not open the PR in a browser: {e}")
    return state


def restore_original_branch(ctx: PrContext, state: PrState) -> PrState | PrError:
    """Return to the base branch if the head branch was created from it."""
    original = state.original
    if not state.created_branch or original is None:
        return state
    if original.branch != state.config.base_branch:
        return state

    try:
        ctx.git.checkout_branch(state.cwd, original.branch)
    except RuntimeError as e:
        warning_output(f"Could not switch back to '{original.branch}': {e}")
        return state
    user_output(click.style(f"   Switched back to {original.branch}", dim=True))
    return state


# ---------------------------------------------------------------------------
# Pipeline Definitions
# ---------------------------------------------------------------------------


@cache
def _planning_pipeline() -> tuple[PrStep, ...]:
    return (
        resolve_title,
        resolve_branch,
    )


@cache
def _execution_pipeline() -> tuple[PrStep, ...]:
    return (
        check_github_cli,
        ensure_branch,
        push_branch,
        render_body,
        submit_pr,
        open_in_browser,
        restore_original_branch,
    )


# ---------------------------------------------------------------------------
# Pipeline Runners
# ---------------------------------------------------------------------------


def _run(steps: tuple[PrStep, ...], ctx: PrContext, state: PrState) -> PrState | PrError:
    for step in steps:
        result = step(ctx, state)
        if isinstance(result, PrError):
            logger.debug("Step %s failed: %s", step.__name__, result.error_type)
            return result
        state = result
    return state


def run_planning_pipeline(ctx: PrContext, state: PrState) -> PrState | PrError:
    """Run the planning pipeline, returning final state or first error."""
    return _run(_planning_pipeline(), ctx, state)


def run_execution_pipeline(ctx: PrContext, state: PrState) -> PrState | PrError:
    """Run the execution pipeline, returning final state or first error."""
    return _run(_execution_pipeline(), ctx, state)


# ---------------------------------------------------------------------------
# State Factory
# ---------------------------------------------------------------------------


def make_initial_state(
    *,
    cwd: Path,
    repo_root: Path,
    remote: str,
    config: PrConfig,
) -> PrState:
    """Create initial PrState with CLI-provided values.

    Resolved fields start empty and are populated by the pipeline steps.
    """
    return PrState(
        cwd=cwd,
        repo_root=repo_root,
        remote=remote,
        config=config,
        title="",
        title_source="",
        branch="",
        original=None,
        created_branch=False,
        switched_branch=False,
        push_forced=False,
        body=None,
        pr_url=None,
    )
