"""Argument resolution: positionals and flags into an immutable PrConfig."""

from dataclasses import dataclass
from pathlib import Path

import click

from create_pr.gateway.git.abc import Git
from create_pr.naming import looks_like_branch_name


@dataclass(frozen=True)
class PrConfig:
    """Resolved configuration for a single invocation."""

    template: bool
    draft: bool
    open_browser: bool
    dry_run: bool
    base_branch: str
    branch: str | None
    title: str | None


@dataclass(frozen=True)
class Positionals:
    branch: str | None
    title: str | None


def is_existing_branch(git: Git, repo_root: Path, remote: str, name: str) -> bool:
    """Check for a local branch or a remote-tracking branch with this name."""
    return git.local_branch_exists(repo_root, name) or git.remote_branch_exists(
        repo_root, remote, name
    )


def classify_positionals(
    git: Git,
    repo_root: Path,
    remote: str,
    args: tuple[str, ...],
    *,
    existing_refs_only: bool = False,
) -> Positionals:
    """Split positional arguments into branch and title.

    - No args: neither
    - One arg: branch if it names an existing ref or is branch-shaped, else title.
      With existing_refs_only, only an existing ref counts as a branch.
    - Two args: (branch, title), regardless of shape

    An empty string counts as not given, so `create-pr "" "Some title"` asks
    for a branch generated from the title.

    Raises:
        click.UsageError: If more than two arguments are given
    """
    if len(args) > 2:
        raise click.UsageError(
            f"Expected at most 2 arguments ([branch] [title]), got {len(args)}."
        )

    if len(args) == 2:
        return Positionals(branch=args[0] or None, title=args[1] or None)

    if len(args) == 1 and args[0]:
        arg = args[0]
        if is_existing_branch(git, repo_root, remote, arg):
            return Positionals(branch=arg, title=None)
        if not existing_refs_only and looks_like_branch_name(arg):
            return Positionals(branch=arg, title=None)
        return Positionals(branch=None, title=arg)

    return Positionals(branch=None, title=None)
