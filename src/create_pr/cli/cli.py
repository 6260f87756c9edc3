import logging
from typing import Any, NoReturn

import click
from click.core import ParameterSource

from create_pr.cli.arguments import PrConfig, classify_positionals
from create_pr.cli.pipeline import (
    PrError,
    PrState,
    make_initial_state,
    run_execution_pipeline,
    run_planning_pipeline,
)
from create_pr.core.context import PrContext, create_context
from create_pr.output import error_output, machine_output, user_output

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

HELP_EPILOG = """\b
Examples:
  create-pr                          # PR from current branch, title from first commit
  create-pr "Fix user login bug"     # new branch fix-user-login-bug from the title
  create-pr feature/login            # PR from an existing branch
  create-pr feature/login "Fix bug"  # explicit branch and title
  create-pr -n -b develop            # preview against develop
"""


class CreatePrCommand(click.Command):
    """Command that reports usage errors with exit status 1 instead of click's 2."""

    def make_context(
        self,
        info_name: str | None,
        args: list[str],
        parent: click.Context | None = None,
        **extra: Any,
    ) -> click.Context:
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as e:
            e.exit_code = 1
            raise

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except click.UsageError as e:
            e.exit_code = 1
            raise


def _flag(click_ctx: click.Context, name: str, value: bool, fallback: bool) -> bool:
    """Explicit command-line value wins; otherwise use the fallback."""
    if click_ctx.get_parameter_source(name) is ParameterSource.COMMANDLINE:
        return value
    return fallback


def _fail(error: PrError) -> NoReturn:
    error_output(error.message)
    raise SystemExit(1)


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def _print_dry_run(state: PrState) -> None:
    config = state.config
    title_origin = "from first commit" if state.title_source == "commit" else "from argument"
    user_output(click.style("Dry run: no branch, push or PR will be created", bold=True))
    user_output(f"  Title:     {state.title} ({title_origin})")
    user_output(f"  Branch:    {state.branch}")
    user_output(f"  Base:      {config.base_branch}")
    user_output(f"  Remote:    {state.remote}")
    user_output(f"  Draft:     {_yes_no(config.draft)}")
    user_output(f"  Template:  {_yes_no(config.template)}")
    user_output(f"  Open:      {_yes_no(config.open_browser)}")


def build_command(
    name: str,
    *,
    preset: dict[str, bool],
    help_text: str,
    existing_refs_only: bool = False,
) -> click.Command:
    """Build a create-pr command whose unset flags default to preset values.

    Flag precedence: command line > preset > .create-pr.toml > built-in default.
    With existing_refs_only, a single argument is a branch only when that branch
    already exists locally or on the remote; anything else is a title.
    """

    @click.command(
        name,
        cls=CreatePrCommand,
        context_settings=CONTEXT_SETTINGS,
        help=help_text,
        epilog=HELP_EPILOG,
    )
    @click.version_option(package_name="create-pr")
    @click.argument("args", nargs=-1, metavar="[BRANCH] [TITLE]")
    @click.option(
        "-t",
        "-T",
        "--template/--no-template",
        default=True,
        help="Fill the body from the PR template",
    )
    @click.option("-d", "-D", "--draft/--no-draft", default=True, help="Create the PR as a draft")
    @click.option(
        "-o",
        "-O",
        "--open/--no-open",
        "open_browser",
        default=True,
        help="Open the PR in a browser afterwards",
    )
    @click.option(
        "-n", "-N", "--dry-run", is_flag=True, help="Show what would happen without doing it"
    )
    @click.option(
        "-b", "-B", "--base", "base_branch", metavar="BRANCH", help="Base branch for the PR"
    )
    @click.option("--debug", is_flag=True, help="Enable debug logging")
    @click.pass_context
    def command(
        click_ctx: click.Context,
        args: tuple[str, ...],
        template: bool,
        draft: bool,
        open_browser: bool,
        dry_run: bool,
        base_branch: str | None,
        debug: bool,
    ) -> None:
        if debug:
            logging.basicConfig(
                level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s"
            )

        # Only create context if not already provided (e.g., by tests)
        if click_ctx.obj is None:
            try:
                click_ctx.obj = create_context()
            except ValueError as e:
                error_output(str(e))
                raise SystemExit(1) from e
        ctx: PrContext = click_ctx.obj

        if not ctx.git.is_available():
            error_output("git not found. Install git and try again.")
            raise SystemExit(1)
        if ctx.repo_root is None:
            error_output(
                "Not in a git repository. "
                "Please run this command from within a git repository."
            )
            raise SystemExit(1)

        cfg = ctx.local_config
        positionals = classify_positionals(
            ctx.git, ctx.repo_root, cfg.remote, args, existing_refs_only=existing_refs_only
        )

        resolved_base = (
            base_branch
            or cfg.base_branch
            or ctx.git.detect_trunk_branch(ctx.repo_root, cfg.remote)
        )
        config = PrConfig(
            template=_flag(click_ctx, "template", template, preset.get("template", cfg.template)),
            draft=_flag(click_ctx, "draft", draft, preset.get("draft", cfg.draft)),
            open_browser=_flag(
                click_ctx,
                "open_browser",
                open_browser,
                preset.get("open_browser", cfg.open_browser),
            ),
            dry_run=_flag(click_ctx, "dry_run", dry_run, preset.get("dry_run", False)),
            base_branch=resolved_base,
            branch=positionals.branch,
            title=positionals.title,
        )

        state = make_initial_state(
            cwd=ctx.cwd, repo_root=ctx.repo_root, remote=cfg.remote, config=config
        )
        planned = run_planning_pipeline(ctx, state)
        if isinstance(planned, PrError):
            _fail(planned)

        if config.dry_run:
            _print_dry_run(planned)
            return

        user_output(click.style(f"🚀 Creating PR from {planned.branch}...", bold=True))
        result = run_execution_pipeline(ctx, planned)
        if isinstance(result, PrError):
            _fail(result)

        if result.pr_url is not None:
            machine_output(result.pr_url)

    return command


create_pr_cmd = build_command(
    "create-pr",
    preset={},
    help_text="Create a GitHub pull request from the current git branch.",
)
