"""Canonical paths for the memory documents."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path

DAILY_DIR = "daily"
DAILY_TARGET = "daily"
DATE_FORMAT = "%Y-%m-%d"
EXTENSION = ".md"


def is_valid_date(value: str) -> bool:
    """True for a real calendar date written as zero-padded YYYY-MM-DD."""
    try:
        return datetime.strptime(value, DATE_FORMAT).strftime(DATE_FORMAT) == value
    except ValueError:
        return False


class Role(str, Enum):
    """Fixed documents, keyed by the name the command surface uses."""

    MEMORY = "memory"
    IDENTITY = "identity"
    USER = "user"
    BOOTSTRAP = "bootstrap"

    @property
    def filename(self) -> str:
        return f"{self.value.upper()}{EXTENSION}"


BOOTSTRAP_FILENAME = Role.BOOTSTRAP.filename

# Roles whose content is surfaced as context, in injection order
CONTEXT_ROLES = (Role.MEMORY, Role.IDENTITY, Role.USER)


class MemoryPaths:
    """Pure mapping from role or date to a path under ``root``."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.daily_dir = root / DAILY_DIR

    def path_for(self, role: Role) -> Path:
        return self.root / role.filename

    def daily_path_for(self, date: str) -> Path:
        return self.daily_dir / f"{date}{EXTENSION}"

    def daily_label(self, date: str) -> str:
        """Display name of a daily log, relative to the root."""
        return f"{DAILY_DIR}/{date}{EXTENSION}"

    def ensure_directories(self) -> None:
        """Create the root and daily/ directories. Idempotent."""
        for d in (self.root, self.daily_dir):
            d.mkdir(parents=True, exist_ok=True)
