"""Memory store: markdown documents on disk, read and written whole.

Markdown files are the source of truth. There is no index and no cache:
every read, search and context build goes to the filesystem, so edits made
by hand or by another process are picked up on the next call.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from memoir.memory.base import ContextFile, ListResult, SearchResult, WriteMode
from memoir.memory.context import assemble_context
from memoir.memory.paths import (
    BOOTSTRAP_FILENAME,
    CONTEXT_ROLES,
    DAILY_DIR,
    DAILY_TARGET,
    DATE_FORMAT,
    EXTENSION,
    MemoryPaths,
    Role,
    is_valid_date,
)

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_RESULTS = 20
CONTEXT_WARN_THRESHOLD = 6000

Clock = Callable[[], datetime]


class MemoryStore:
    """Read/write access to the memory documents under ``root``."""

    def __init__(
        self,
        root: Path,
        clock: Clock = datetime.now,
        context_warn_chars: int = CONTEXT_WARN_THRESHOLD,
    ) -> None:
        self.root = root
        self.paths = MemoryPaths(root)
        self.context_warn_chars = context_warn_chars
        self._clock = clock
        self._last_stamp: datetime | None = None

    # ── 1. Layout ─────────────────────────────────────────────

    def ensure_directories(self) -> None:
        self.paths.ensure_directories()

    def locate(self, target: str, date: str | None = None) -> tuple[Path, str]:
        """Map a target name to (path, display name). Raises ValueError."""
        if target == DAILY_TARGET:
            day = date or self.today()
            if not is_valid_date(day):
                raise ValueError(f"Invalid date: {day!r} (expected YYYY-MM-DD)")
            return self.paths.daily_path_for(day), self.paths.daily_label(day)
        try:
            role = Role(target)
        except ValueError:
            role = None
        # BOOTSTRAP.md is removed by the agent, never written through the store
        if role is None or role is Role.BOOTSTRAP:
            raise ValueError(f"Unknown target: {target}")
        return self.paths.path_for(role), role.filename

    @property
    def bootstrap_path(self) -> Path:
        return self.paths.path_for(Role.BOOTSTRAP)

    def is_initialized(self) -> bool:
        return self.paths.path_for(Role.MEMORY).exists()

    def needs_bootstrap(self) -> bool:
        """BOOTSTRAP.md on disk is the only record of first-run state."""
        return self.bootstrap_path.exists()

    # ── 2. Clock ──────────────────────────────────────────────

    def today(self) -> str:
        return self._clock().strftime(DATE_FORMAT)

    def _timestamp(self) -> str:
        """Second-granularity wall-clock stamp, never earlier than the last one."""
        now = self._clock()
        if self._last_stamp and now < self._last_stamp:
            now = self._last_stamp
        self._last_stamp = now
        return now.strftime(TIMESTAMP_FORMAT)

    # ── 3. Raw file I/O ───────────────────────────────────────

    def _read_text(self, path: Path) -> str | None:
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return None

    def write_file(self, path: Path, content: str) -> None:
        """Replace ``path`` atomically: temp file in the same dir, then rename."""
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except OSError:
            logger.exception("Failed to write %s", path)
            Path(tmp).unlink(missing_ok=True)
            raise

    # ── 4. Operations ─────────────────────────────────────────

    def read(self, target: str, date: str | None = None) -> str | None:
        """Return the document text, or None if it is missing or blank."""
        path, _ = self.locate(target, date)
        content = self._read_text(path)
        if content is None or not content.strip():
            return None
        return content

    def write(
        self,
        target: str,
        content: str,
        mode: WriteMode = "append",
        date: str | None = None,
    ) -> None:
        """Overwrite with a fresh header, or append a stamped entry."""
        path, name = self.locate(target, date)
        if mode == "overwrite":
            self.write_file(path, f"<!-- last updated: {self._timestamp()} -->\n{content}")
            logger.info("Overwrote %s (%d chars)", name, len(content))
            return
        if mode != "append":
            raise ValueError(f"Unknown write mode: {mode}")

        existing = self._read_text(path) or ""
        separator = "\n\n" if existing.strip() else ""
        stamped = f"<!-- {self._timestamp()} -->\n{content}"
        self.write_file(path, existing + separator + stamped)
        logger.info("Appended to %s (%d chars)", name, len(content))

    def search(self, query: str, max_results: int = DEFAULT_MAX_RESULTS) -> list[SearchResult]:
        """Case-insensitive substring match, line by line, root docs then daily logs."""
        results: list[SearchResult] = []
        needle = query.lower()

        for directory, prefix in ((self.root, ""), (self.paths.daily_dir, DAILY_DIR)):
            for md_file in self._markdown_files(directory):
                if len(results) >= max_results:
                    return results
                if not prefix and md_file.name == BOOTSTRAP_FILENAME:
                    continue
                try:
                    content = md_file.read_text(encoding="utf-8", errors="replace")
                except OSError as e:
                    logger.debug("Skipping unreadable %s: %s", md_file, e)
                    continue

                label = f"{prefix}/{md_file.name}" if prefix else md_file.name
                for lineno, line in enumerate(content.split("\n"), start=1):
                    if len(results) >= max_results:
                        break
                    if needle in line.lower():
                        results.append(SearchResult(file=label, line=lineno, text=line.rstrip()))
        return results

    def list_files(self) -> ListResult:
        """Root documents alphabetically, daily logs newest first."""
        root = [p.name for p in self._markdown_files(self.root) if p.name != BOOTSTRAP_FILENAME]
        daily = [p.name for p in self._markdown_files(self.paths.daily_dir)]
        daily.reverse()
        return ListResult(root=root, daily=daily)

    def _markdown_files(self, directory: Path) -> list[Path]:
        """Sorted *.md files; a missing or unlistable directory yields none."""
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            logger.debug("Cannot list %s: %s", directory, e)
            return []
        return sorted(p for p in entries if p.suffix == EXTENSION and p.is_file())

    # ── 5. Context assembly ───────────────────────────────────

    def get_context_files(self) -> list[ContextFile]:
        """MEMORY.md, IDENTITY.md, USER.md, in that order, skipping blank ones."""
        files: list[ContextFile] = []
        for role in CONTEXT_ROLES:
            content = self._read_text(self.paths.path_for(role))
            if content and content.strip():
                files.append(ContextFile(name=role.filename, content=content.strip()))
        return files

    def build_context(self) -> str:
        """Bootstrap instructions on first run, else the persistent documents."""
        if self.needs_bootstrap():
            content = self._read_text(self.bootstrap_path) or ""
            files = []
            if content.strip():
                files.append(
                    ContextFile(name=f"{BOOTSTRAP_FILENAME} (First Run Setup)", content=content.strip())
                )
            context = assemble_context(files, bootstrap=True)
        else:
            context = assemble_context(self.get_context_files(), bootstrap=False)

        if len(context) > self.context_warn_chars:
            logger.warning(
                "Memory context is %d chars (threshold: %d)", len(context), self.context_warn_chars
            )
        return context
