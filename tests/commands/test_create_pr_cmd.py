"""Tests for the create-pr command.

Tests use fake implementations instead of mocks for testability.
"""

import dataclasses
from pathlib import Path

from click.testing import CliRunner

from create_pr.cli.cli import create_pr_cmd
from create_pr.cli.config import LoadedConfig
from create_pr.core.context import PrContext, context_for_test
from create_pr.gateway.git.fake import FakeGit
from create_pr.gateway.github.fake import FakeGitHub

CWD = Path("/fake/repo")


def _ctx(
    git: FakeGit,
    *,
    github: FakeGitHub | None = None,
    local_config: LoadedConfig | None = None,
) -> PrContext:
    return context_for_test(git=git, github=github, cwd=CWD, local_config=local_config)


def test_dry_run_prints_plan_without_mutations() -> None:
    runner = CliRunner()
    git = FakeGit(
        current_branches={CWD: "main"},
        commit_subjects={"origin/main": ["Fix User Login Bug!!", "Follow-up"]},
    )
    github = FakeGitHub()

    result = runner.invoke(create_pr_cmd, ["--dry-run"], obj=_ctx(git, github=github))

    assert result.exit_code == 0, result.output
    assert "Dry run" in result.output
    assert "fix-user-login-bug" in result.output
    assert "Fix User Login Bug!!" in result.output
    assert git.operations == []
    assert github.created_prs == []


def test_dry_run_works_without_gh() -> None:
    runner = CliRunner()
    git = FakeGit(current_branches={CWD: "feature"})

    result = runner.invoke(
        create_pr_cmd,
        ["-n", "feature", "Some title"],
        obj=_ctx(git, github=FakeGitHub(available=False)),
    )

    assert result.exit_code == 0, result.output
    assert "Some title" in result.output


def test_creates_pr_from_title_and_returns_to_base() -> None:
    runner = CliRunner()
    git = FakeGit(current_branches={CWD: "main"}, local_branches=["main"])
    github = FakeGitHub(next_pr_number=12)

    result = runner.invoke(create_pr_cmd, ["Add caching layer"], obj=_ctx(git, github=github))

    assert result.exit_code == 0, result.output
    assert "https://github.com/owner/repo/pull/12" in result.output
    assert git.created_branches == ["add-caching-layer"]
    assert git.operations[-1] == "checkout main"
    created = github.created_prs[0]
    assert created.head == "add-caching-layer"
    assert created.base == "main"
    assert created.title == "Add caching layer"
    assert created.draft is True
    assert github.opened_urls == ["https://github.com/owner/repo/pull/12"]


def test_no_args_on_feature_branch_uses_current_branch() -> None:
    runner = CliRunner()
    git = FakeGit(
        current_branches={CWD: "feature/login"},
        local_branches=["main", "feature/login"],
        commit_subjects={"origin/main": ["Rework login form"]},
    )
    github = FakeGitHub()

    result = runner.invoke(create_pr_cmd, ["--no-open"], obj=_ctx(git, github=github))

    assert result.exit_code == 0, result.output
    assert github.created_prs[0].head == "feature/login"
    assert github.created_prs[0].title == "Rework login form"
    assert git.created_branches == []
    assert github.opened_urls == []


def test_no_commits_fails_with_guidance() -> None:
    runner = CliRunner()
    git = FakeGit(current_branches={CWD: "main"})

    result = runner.invoke(create_pr_cmd, [], obj=_ctx(git))

    assert result.exit_code == 1
    assert "Error: " in result.output
    assert "No commits found ahead of origin/main" in result.output


def test_too_many_arguments_exits_with_one() -> None:
    runner = CliRunner()
    git = FakeGit(current_branches={CWD: "main"})

    result = runner.invoke(create_pr_cmd, ["a", "b", "c"], obj=_ctx(git))

    assert result.exit_code == 1
    assert "at most 2 arguments" in result.output


def test_unknown_option_exits_with_one() -> None:
    runner = CliRunner()

    result = runner.invoke(create_pr_cmd, ["--bogus"], obj=_ctx(FakeGit()))

    assert result.exit_code == 1


def test_not_in_repository() -> None:
    runner = CliRunner()
    ctx = dataclasses.replace(_ctx(FakeGit()), repo_root=None)

    result = runner.invoke(create_pr_cmd, [], obj=ctx)

    assert result.exit_code == 1
    assert "Not in a git repository" in result.output


def test_git_not_installed() -> None:
    runner = CliRunner()

    result = runner.invoke(create_pr_cmd, [], obj=_ctx(FakeGit(available=False)))

    assert result.exit_code == 1
    assert "git not found" in result.output


def test_gh_not_authenticated_fails_before_branching() -> None:
    runner = CliRunner()
    git = FakeGit(current_branches={CWD: "main"})

    result = runner.invoke(
        create_pr_cmd, ["Add thing"], obj=_ctx(git, github=FakeGitHub(authenticated=False))
    )

    assert result.exit_code == 1
    assert "not authenticated" in result.output
    assert git.operations == []


def test_base_option_overrides_config_and_trunk() -> None:
    runner = CliRunner()
    git = FakeGit(current_branches={CWD: "feature"}, trunk_branch="master")
    local_config = dataclasses.replace(LoadedConfig.defaults(), base_branch="develop")
    github = FakeGitHub()

    result = runner.invoke(
        create_pr_cmd,
        ["-b", "release", "feature", "Ship it"],
        obj=_ctx(git, github=github, local_config=local_config),
    )

    assert result.exit_code == 0, result.output
    assert github.created_prs[0].base == "release"


def test_config_base_used_over_detected_trunk() -> None:
    runner = CliRunner()
    git = FakeGit(current_branches={CWD: "feature"}, trunk_branch="master")
    local_config = dataclasses.replace(LoadedConfig.defaults(), base_branch="develop")
    github = FakeGitHub()

    result = runner.invoke(
        create_pr_cmd,
        ["feature", "Ship it"],
        obj=_ctx(git, github=github, local_config=local_config),
    )

    assert result.exit_code == 0, result.output
    assert github.created_prs[0].base == "develop"


def test_detected_trunk_used_without_config() -> None:
    runner = CliRunner()
    git = FakeGit(current_branches={CWD: "feature"}, trunk_branch="master")
    github = FakeGitHub()

    result = runner.invoke(create_pr_cmd, ["feature", "Ship it"], obj=_ctx(git, github=github))

    assert result.exit_code == 0, result.output
    assert github.created_prs[0].base == "master"


def test_config_draft_false_is_overridden_by_flag() -> None:
    runner = CliRunner()
    git = FakeGit(current_branches={CWD: "feature"})
    local_config = dataclasses.replace(LoadedConfig.defaults(), draft=False)
    github = FakeGitHub()

    result = runner.invoke(
        create_pr_cmd,
        ["--draft", "feature", "Ship it"],
        obj=_ctx(git, github=github, local_config=local_config),
    )

    assert result.exit_code == 0, result.output
    assert github.created_prs[0].draft is True


def test_config_draft_false_applies_without_flag() -> None:
    runner = CliRunner()
    git = FakeGit(current_branches={CWD: "feature"})
    local_config = dataclasses.replace(LoadedConfig.defaults(), draft=False)
    github = FakeGitHub()

    result = runner.invoke(
        create_pr_cmd,
        ["feature", "Ship it"],
        obj=_ctx(git, github=github, local_config=local_config),
    )

    assert result.exit_code == 0, result.output
    assert github.created_prs[0].draft is False


def test_browser_failure_is_warning_only() -> None:
    runner = CliRunner()
    git = FakeGit(current_branches={CWD: "feature"})
    github = FakeGitHub(open_browser_raises=RuntimeError("no display"))

    result = runner.invoke(create_pr_cmd, ["feature", "Ship it"], obj=_ctx(git, github=github))

    assert result.exit_code == 0, result.output
    assert "Warning: " in result.output
    assert "https://github.com/owner/repo/pull/1" in result.output


def test_pr_create_failure_exits_with_one() -> None:
    runner = CliRunner()
    git = FakeGit(current_branches={CWD: "feature"})
    github = FakeGitHub(create_pr_error="a pull request for branch feature already exists")

    result = runner.invoke(create_pr_cmd, ["feature", "Ship it"], obj=_ctx(git, github=github))

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_help_lists_examples() -> None:
    runner = CliRunner()

    result = runner.invoke(create_pr_cmd, ["-h"])

    assert result.exit_code == 0
    assert "Examples:" in result.output
    assert "--no-template" in result.output
