"""Configuration loading from environment variables and memoir.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

_APP_NAME = "memoir"
_CONFIG_FILENAME = "memoir.toml"


def _config_home(platform: str = sys.platform) -> Path:
    """Per-user configuration area for this platform."""
    home = Path.home()
    if platform == "win32":
        return home / "AppData" / "Roaming" / _APP_NAME
    # macOS and Linux share the XDG-style location
    return home / ".config" / _APP_NAME


def resolve_base_directory(platform: str = sys.platform) -> Path:
    """Root directory holding the memory documents."""
    return _config_home(platform) / "memory"


def resolve_path(value: str | Path) -> Path:
    """Expand a leading ``~``, keep absolute paths, resolve relative ones."""
    path = Path(value).expanduser()
    if path.is_absolute():
        return path
    return path.resolve()


@dataclass
class MemoirConfig:
    """Top-level memoir configuration."""

    memory_dir: Path = resolve_base_directory()
    log_level: str = "INFO"
    search_max_results: int = 20
    daily_list_limit: int = 10
    context_warn_chars: int = 6000


def load_config(config_path: Path | None = None) -> MemoirConfig:
    """Load configuration from environment variables and optional memoir.toml.

    Priority: environment variables > memoir.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    else:
        # Search current dir and the per-user config dir
        for candidate in [Path.cwd() / _CONFIG_FILENAME, _config_home() / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text(encoding="utf-8"))
                break

    memory_data = file_data.get("memory", {})
    default_dir = memory_data.get("dir") or resolve_base_directory()

    return MemoirConfig(
        memory_dir=resolve_path(os.getenv("MEMOIR_MEMORY_DIR") or default_dir),
        log_level=os.getenv("MEMOIR_LOG_LEVEL", file_data.get("log_level", "INFO")),
        search_max_results=int(
            os.getenv("MEMOIR_MAX_RESULTS", memory_data.get("search_max_results", 20))
        ),
        daily_list_limit=int(
            os.getenv("MEMOIR_DAILY_LIST_LIMIT", memory_data.get("daily_list_limit", 10))
        ),
        context_warn_chars=int(
            os.getenv("MEMOIR_CONTEXT_WARN_CHARS", memory_data.get("context_warn_chars", 6000))
        ),
    )
