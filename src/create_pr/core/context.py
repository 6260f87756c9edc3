"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from create_pr.cli.config import LoadedConfig, load_config
from create_pr.gateway.git.abc import Git
from create_pr.gateway.git.real import RealGit
from create_pr.gateway.github.abc import GitHub
from create_pr.gateway.github.real import RealGitHub


@dataclass(frozen=True)
class PrContext:
    """Immutable context holding all dependencies for create-pr operations.

    Created at CLI entry point and threaded through the pipeline. Frozen to
    prevent accidental modification at runtime.

    repo_root is None when the command runs outside a git repository; the
    command reports that before any pipeline step runs.
    """

    git: Git
    github: GitHub
    cwd: Path
    repo_root: Path | None
    local_config: LoadedConfig


def create_context(cwd: Path | None = None) -> PrContext:
    """Create production context with real implementations.

    Raises:
        ValueError: If .create-pr.toml exists but cannot be parsed
    """
    resolved_cwd = cwd if cwd is not None else Path.cwd()
    git: Git = RealGit()

    repo_root = git.get_repository_root(resolved_cwd) if git.is_available() else None
    if repo_root is None:
        local_config = LoadedConfig.defaults()
    else:
        local_config = load_config(repo_root)

    return PrContext(
        git=git,
        github=RealGitHub(),
        cwd=resolved_cwd,
        repo_root=repo_root,
        local_config=local_config,
    )


def context_for_test(
    *,
    git: Git | None = None,
    github: GitHub | None = None,
    cwd: Path | None = None,
    repo_root: Path | None = None,
    local_config: LoadedConfig | None = None,
) -> PrContext:
    """Create test context with optional pre-configured implementations.

    Uses fakes by default to avoid subprocess calls. When git is not given, a
    FakeGit is created whose repository root for cwd is repo_root.

    Args:
        git: Optional Git implementation. If None, creates FakeGit.
        github: Optional GitHub implementation. If None, creates FakeGitHub.
        cwd: Current working directory (defaults to Path("/fake/repo"))
        repo_root: Repository root (defaults to cwd)
        local_config: Repository config (defaults to LoadedConfig.defaults())

    Example:
        >>> from create_pr.gateway.git.fake import FakeGit
        >>> git = FakeGit(current_branches={Path("/repo"): "feature"})
        >>> ctx = context_for_test(git=git, cwd=Path("/repo"))
    """
    from create_pr.gateway.git.fake import FakeGit
    from create_pr.gateway.github.fake import FakeGitHub

    resolved_cwd = cwd if cwd is not None else Path("/fake/repo")
    resolved_root = repo_root if repo_root is not None else resolved_cwd

    return PrContext(
        git=git if git is not None else FakeGit(repository_roots={resolved_cwd: resolved_root}),
        github=github if github is not None else FakeGitHub(),
        cwd=resolved_cwd,
        repo_root=resolved_root,
        local_config=local_config if local_config is not None else LoadedConfig.defaults(),
    )
