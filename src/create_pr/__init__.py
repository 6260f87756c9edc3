"""create-pr CLI entry point.

This package provides a Click-based CLI that turns the current git branch
into a GitHub pull request by driving `git` and `gh`. See `create-pr --help`
for details.
"""

from create_pr.cli.cli import create_pr_cmd


def main() -> None:
    """CLI entry point used by the `create-pr` console script."""
    create_pr_cmd()
