"""Memory backend protocol and shared types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Protocol, runtime_checkable

WriteMode = Literal["append", "overwrite"]


@dataclass
class ContextFile:
    """A non-empty fixed document, trimmed for injection."""

    name: str
    content: str


@dataclass
class SearchResult:
    """One matching line."""

    file: str
    line: int
    text: str


@dataclass
class ListResult:
    """Root document names and daily log filenames."""

    root: list[str] = field(default_factory=list)
    daily: list[str] = field(default_factory=list)


@runtime_checkable
class MemoryBackend(Protocol):
    """Capabilities a host adapter can drive, independent of any host SDK.

    ``target`` is a role name (``memory``, ``identity``, ``user``) or
    ``daily``, in which case ``date`` selects the log (default: today).
    """

    def read(self, target: str, date: str | None = None) -> str | None:
        """Return document content, or None when absent or blank."""
        ...

    def write(
        self,
        target: str,
        content: str,
        mode: WriteMode = "append",
        date: str | None = None,
    ) -> None:
        """Append to or overwrite a document. Raises OSError on failure."""
        ...

    def search(self, query: str, max_results: int = 20) -> list[SearchResult]:
        """Case-insensitive line search across all documents except BOOTSTRAP.md."""
        ...

    def list_files(self) -> ListResult: ...

    def build_context(self) -> str:
        """Assemble the per-turn context, or "" when there is nothing to inject."""
        ...
