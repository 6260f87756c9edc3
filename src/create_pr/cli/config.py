import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from create_pr.template import DEFAULT_LYRICS_MARKER, DEFAULT_LYRICS_PATH, DEFAULT_TEMPLATE_PATH

CONFIG_FILE_NAME = ".create-pr.toml"


@dataclass(frozen=True)
class LoadedConfig:
    """In-memory representation of `.create-pr.toml`.

    `base_branch` is None when the repository does not pin one; the trunk
    branch is then detected from git.
    """

    base_branch: str | None
    remote: str
    template: bool
    draft: bool
    open_browser: bool
    template_path: str
    lyrics_path: str
    lyrics_marker: str

    @staticmethod
    def defaults() -> "LoadedConfig":
        return LoadedConfig(
            base_branch=None,
            remote="origin",
            template=True,
            draft=True,
            open_browser=True,
            template_path=DEFAULT_TEMPLATE_PATH,
            lyrics_path=DEFAULT_LYRICS_PATH,
            lyrics_marker=DEFAULT_LYRICS_MARKER,
        )


def _get_typed(data: dict[str, Any], key: str, expected: type, default: Any, cfg_path: Path) -> Any:
    value = data.get(key, default)
    if value is not None and not isinstance(value, expected):
        raise ValueError(
            f"Invalid value for '{key}' in {cfg_path}: "
            f"expected {expected.__name__}, got {type(value).__name__}"
        )
    return value


def load_config(repo_root: Path) -> LoadedConfig:
    """Load .create-pr.toml from the repository root if present; otherwise return defaults.

    Example config:
      base = "develop"
      remote = "origin"
      draft = false

      template_path = ".github/PULL_REQUEST_TEMPLATE.md"
      lyrics_path = ".github/pr-lyrics.md"

    Raises:
        ValueError: If the file is not valid TOML or a value has the wrong type
    """
    cfg_path = repo_root / CONFIG_FILE_NAME
    if not cfg_path.exists():
        return LoadedConfig.defaults()

    try:
        data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Could not parse {cfg_path}: {e}") from e

    defaults = LoadedConfig.defaults()
    return LoadedConfig(
        base_branch=_get_typed(data, "base", str, None, cfg_path),
        remote=_get_typed(data, "remote", str, defaults.remote, cfg_path),
        template=_get_typed(data, "template", bool, defaults.template, cfg_path),
        draft=_get_typed(data, "draft", bool, defaults.draft, cfg_path),
        open_browser=_get_typed(data, "open", bool, defaults.open_browser, cfg_path),
        template_path=_get_typed(data, "template_path", str, defaults.template_path, cfg_path),
        lyrics_path=_get_typed(data, "lyrics_path", str, defaults.lyrics_path, cfg_path),
        lyrics_marker=_get_typed(data, "lyrics_marker", str, defaults.lyrics_marker, cfg_path),
    )
