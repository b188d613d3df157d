"""The `memory` tool: one command surface over the memory store.

Argument errors come back as text, never as exceptions, because hosts have
no structured error channel. Failed writes are the exception: the OSError
propagates so the caller never believes a write succeeded when it did not.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from memoir.memory.paths import DAILY_TARGET, is_valid_date
from memoir.tools.base import ToolDefinition

if TYPE_CHECKING:
    from memoir.memory.store import MemoryStore

ACTIONS = ("read", "write", "search", "list")
TARGETS = ("memory", "identity", "user", DAILY_TARGET)
MODES = ("append", "overwrite")

TOOL_DESCRIPTION = "\n".join(
    [
        "Manage memory files for persistent context across sessions.",
        "",
        "**Actions:**",
        "- `read`: Read a memory file (memory, identity, user, daily), or list all without a target",
        "- `write`: Write to a memory file (memory, identity, user, daily), append or overwrite",
        "- `search`: Search across all memory files",
        "- `list`: List all memory files",
        "",
        "**Targets:**",
        "- `memory`: MEMORY.md - Long-term memory (crucial facts, decisions, preferences)",
        "- `identity`: IDENTITY.md - AI identity (name, persona, behavioral rules)",
        "- `user`: USER.md - User profile (name, preferences, context)",
        "- `daily`: daily/YYYY-MM-DD.md - Daily logs (day-to-day activities)",
    ]
)

TOOL_PARAMETERS: dict[str, Any] = {
    "type": "object",
    "properties": {
        "action": {"type": "string", "enum": list(ACTIONS), "description": "Action to perform"},
        "target": {
            "type": "string",
            "enum": list(TARGETS),
            "description": "Target file: memory, identity, user, or daily",
        },
        "content": {"type": "string", "description": "Content to write (for write action)"},
        "mode": {
            "type": "string",
            "enum": list(MODES),
            "description": "Write mode (default: append)",
        },
        "date": {
            "type": "string",
            "description": "Date for daily log (YYYY-MM-DD), defaults to today",
        },
        "query": {"type": "string", "description": "Search query (for search action)"},
        "max_results": {"type": "integer", "description": "Max search results (default: 20)"},
    },
    "required": ["action"],
}


class MemoryTool:
    """Dispatches `memory` tool calls to a MemoryStore and renders plain text."""

    def __init__(
        self,
        store: MemoryStore,
        *,
        default_max_results: int = 20,
        daily_list_limit: int = 10,
    ) -> None:
        self.store = store
        self.default_max_results = default_max_results
        self.daily_list_limit = daily_list_limit

    def __call__(
        self,
        action: str,
        target: str | None = None,
        content: str | None = None,
        mode: str | None = None,
        date: str | None = None,
        query: str | None = None,
        max_results: int | None = None,
    ) -> str:
        if action == "read":
            return self.read(target, date)
        if action == "write":
            return self.write(target, content, mode, date)
        if action == "search":
            return self.search(query, max_results)
        if action == "list":
            return self.list_files()
        return f"Unknown action: {action}"

    # ── Validation ───────────────────────────────────────────

    def _check_target(self, target: str, date: str | None) -> str | None:
        if target not in TARGETS:
            return f"Unknown target: {target}. Use 'memory', 'identity', 'user', or 'daily'."
        if target == DAILY_TARGET and date is not None and not is_valid_date(date):
            return f"Error: invalid date '{date}'. Use YYYY-MM-DD."
        return None

    # ── Actions ──────────────────────────────────────────────

    def read(self, target: str | None, date: str | None = None) -> str:
        if not target:
            return self.list_files()
        error = self._check_target(target, date)
        if error:
            return error
        _, name = self.store.locate(target, date)
        content = self.store.read(target, date)
        if content is None:
            return f"{name} not found or empty."
        return content

    def write(
        self,
        target: str | None,
        content: str | None,
        mode: str | None = None,
        date: str | None = None,
    ) -> str:
        if not content:
            return "Error: content is required for write action."
        if not target:
            return "Error: target is required for write action."
        error = self._check_target(target, date)
        if error:
            return error
        mode = mode or "append"
        if mode not in MODES:
            return f"Unknown mode: {mode}. Use 'append' or 'overwrite'."

        _, name = self.store.locate(target, date)
        self.store.write(target, content, mode, date)
        return f"{'Wrote to' if mode == 'overwrite' else 'Appended to'} {name}"

    def search(self, query: str | None, max_results: int | None = None) -> str:
        if not query:
            return "Error: query is required for search action."
        limit = self.default_max_results if max_results is None else max_results
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            return "Error: max_results must be a positive integer."

        results = self.store.search(query, limit)
        if not results:
            return f'No results for "{query}".'
        lines = "\n".join(f"{r.file}:{r.line}: {r.text}" for r in results)
        return f"Found {len(results)} results:\n\n{lines}"

    def list_files(self) -> str:
        files = self.store.list_files()
        parts: list[str] = []

        if files.root:
            parts.append("Root files:\n" + "\n".join(f"- {f}" for f in files.root))

        if files.daily:
            shown = files.daily[: self.daily_list_limit]
            hidden = len(files.daily) - len(shown)
            more = f"\n  ... and {hidden} more" if hidden > 0 else ""
            parts.append(
                f"Daily logs ({len(files.daily)}):\n"
                + "\n".join(f"- daily/{f}" for f in shown)
                + more
            )

        if not parts:
            return "No memory files found."
        return "\n\n".join(parts)


def get_memory_tools(
    store: MemoryStore,
    *,
    default_max_results: int = 20,
    daily_list_limit: int = 10,
) -> dict[str, ToolDefinition]:
    """Return tool_name -> ToolDefinition for registration with a host."""
    tool = MemoryTool(
        store,
        default_max_results=default_max_results,
        daily_list_limit=daily_list_limit,
    )
    return {
        "memory": ToolDefinition(
            name="memory",
            description=TOOL_DESCRIPTION,
            parameters=TOOL_PARAMETERS,
            handler=tool,
        )
    }
