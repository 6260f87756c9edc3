"""PR body rendering from the repository's pull-request template.

The template may contain a lyrics marker. When the lyrics side-file exists, each
marker occurrence is replaced by the file's contents; otherwise the template is
used as-is.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_PATH = ".github/PULL_REQUEST_TEMPLATE.md"
DEFAULT_LYRICS_PATH = ".github/pr-lyrics.md"
DEFAULT_LYRICS_MARKER = "<!-- 🎵 lyrics 🎵 -->"


def substitute_lyrics(template: str, lyrics: str, marker: str) -> str:
    """Replace every occurrence of marker in template with lyrics.

    Substitution is a single literal pass: slashes, backslashes and
    backreference-like sequences in the lyrics are inserted verbatim, and a
    marker appearing inside the lyrics is not expanded again.
    """
    return template.replace(marker, lyrics)


def render_template(template: str, *, lyrics_path: Path, marker: str) -> str:
    """Render template text, filling the lyrics marker from lyrics_path.

    Args:
        template: Raw template text
        lyrics_path: Side-file holding the text to substitute
        marker: Placeholder string to replace

    Returns:
        The template unchanged if lyrics_path does not exist, otherwise the
        template with every marker replaced by the file's contents
    """
    if not lyrics_path.exists():
        logger.debug("No lyrics file at %s, template left unchanged", lyrics_path)
        return template

    lyrics = lyrics_path.read_text(encoding="utf-8").rstrip("\n")
    return substitute_lyrics(template, lyrics, marker)


def load_pr_body(repo_root: Path, *, template_path: str, lyrics_path: str, marker: str) -> str:
    """Build the PR body from the template file under repo_root.

    Returns an empty string when the template file does not exist.
    """
    template_file = repo_root / template_path
    if not template_file.exists():
        logger.debug("No PR template at %s", template_file)
        return ""

    template = template_file.read_text(encoding="utf-8")
    return render_template(template, lyrics_path=repo_root / lyrics_path, marker=marker)
