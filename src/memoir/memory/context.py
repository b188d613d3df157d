"""Per-turn context text: document sections plus tool instructions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from memoir.memory.base import ContextFile

CONTEXT_HEADING = "# Memory Context"
SECTION_SEPARATOR = "\n\n---\n\n"

SETUP_INSTRUCTIONS = "\n".join(
    [
        "",
        "",
        "## Memory Setup",
        "This is your first run. Read BOOTSTRAP.md above and follow the setup instructions.",
        "Ask the user questions interactively, then write to MEMORY.md, IDENTITY.md, and USER.md.",
        "After setup is complete, delete BOOTSTRAP.md using the filesystem.",
    ]
)

MEMORY_INSTRUCTIONS = "\n".join(
    [
        "",
        "",
        "## Memory",
        "Memory files have been loaded above. Use the memory tool to manage them:",
        "- `memory --action write --target memory|identity|user|daily` - write to a memory file",
        "- `memory --action read --target memory|identity|user|daily` - read a memory file",
        "- `memory --action search --query <text>` - search across all memory files",
        "- `memory --action list` - list all memory files",
    ]
)


def render_section(file: ContextFile) -> str:
    return f"## {file.name}\n\n{file.content}"


def assemble_context(files: list[ContextFile], *, bootstrap: bool) -> str:
    """Join sections under one heading and append the matching instructions.

    Returns "" when there are no sections, so nothing is injected.
    """
    if not files:
        return ""
    body = SECTION_SEPARATOR.join(render_section(f) for f in files)
    instructions = SETUP_INSTRUCTIONS if bootstrap else MEMORY_INSTRUCTIONS
    return f"{CONTEXT_HEADING}\n\n{body}{instructions}"
