"""Preset variants of create-pr, installed as their own console scripts.

Presets change flag defaults, and explicit flags still win. quick-pr also
reads a single argument as a title unless it names an existing branch.
"""

from create_pr.cli.cli import build_command

quick_pr = build_command(
    "quick-pr",
    preset={},
    help_text=(
        "Create a PR with smart defaults.\n\n"
        "No args: use the current branch and auto-detect the title. One arg: the "
        "name of an existing local or remote branch is used as the branch, "
        "anything else as the title. Two args: branch and title."
    ),
    existing_refs_only=True,
)

draft_pr = build_command(
    "draft-pr",
    preset={"draft": True},
    help_text="Create a draft PR.",
)

ready_pr = build_command(
    "ready-pr",
    preset={"draft": False, "template": False},
    help_text="Create a ready-for-review PR without the template body.",
)

preview_pr = build_command(
    "preview-pr",
    preset={"dry_run": True},
    help_text="Show what create-pr would do without changing anything.",
)
