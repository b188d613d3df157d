"""Host adapter: wires the memory store into an agent runtime.

Responsibilities:
1. Startup: ensure directories, seed first-run documents
2. Context injection: append assembled memory to the system prompt each turn
3. Tool dispatch: run `memory` tool calls against the store
"""

from __future__ import annotations

import logging
from typing import Any

from memoir.config import MemoirConfig
from memoir.memory.bootstrap import Bootstrapper
from memoir.memory.store import MemoryStore
from memoir.tools.base import ToolDefinition
from memoir.tools.memory_tools import get_memory_tools

logger = logging.getLogger(__name__)


class MemoryPlugin:
    """Exposes the memory store to a host through hooks and one tool."""

    def __init__(self, config: MemoirConfig, store: MemoryStore | None = None) -> None:
        self.config = config
        self.memory = store or MemoryStore(
            config.memory_dir, context_warn_chars=config.context_warn_chars
        )
        self.bootstrap = Bootstrapper(self.memory)
        if self.bootstrap.initialize():
            logger.info("First run: bootstrap interview pending at %s", self.memory.bootstrap_path)
        self.tools: dict[str, ToolDefinition] = get_memory_tools(
            self.memory,
            default_max_results=config.search_max_results,
            daily_list_limit=config.daily_list_limit,
        )

    # ── Hooks ─────────────────────────────────────────────────

    async def transform_system(self, system: list[str]) -> None:
        """Per-turn hook: append memory context to the system prompt parts."""
        context = self.memory.build_context()
        if not context:
            return
        system.append(context)

    async def execute(self, args: dict[str, Any]) -> str:
        """Run a `memory` tool call from a raw arguments record."""
        self.memory.ensure_directories()
        tool = self.tools["memory"]
        known = tool.parameters["properties"]
        kwargs = {k: v for k, v in args.items() if k in known and v is not None}
        kwargs.setdefault("action", "")
        return tool.handler(**kwargs)
