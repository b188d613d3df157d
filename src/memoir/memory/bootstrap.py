"""First-run setup: seed the memory documents and the bootstrap interview.

The interview lives in BOOTSTRAP.md. The agent deletes that file once it has
filled in the other documents; until then every context build surfaces the
interview instead of the documents.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from memoir.memory.paths import Role

if TYPE_CHECKING:
    from memoir.memory.store import MemoryStore

logger = logging.getLogger(__name__)


def render_bootstrap(bootstrap_path: Path) -> str:
    return f"""\
# BOOTSTRAP.md - First Time Setup

**Bootstrap file location:** `{bootstrap_path}`

This is your first run. Set up the memory system with the user before anything else.
Writing files must be allowed in the current session, otherwise setup cannot finish.

## Instructions

Interview the user and fill in the memory files.

### For IDENTITY.md
1. What name should the assistant go by?
2. What personality or tone should it have? (e.g. formal, casual, blunt, encouraging)
3. Which languages should it reply in?
4. Are there behavioral rules it must always follow?

### For USER.md
1. What is your name, and how should you be addressed?
2. What is your role or profession?
3. Which languages, frameworks and tools do you use?
4. Where are you located? (for time zones)
5. How do you prefer to communicate?
6. Any other preferences or constraints?

### For MEMORY.md
1. Is there technical knowledge that must not be forgotten?
2. Are there system configurations or paths worth recording?
3. How do you like code to be written?

## After Setup

When you have the answers:
1. Write IDENTITY.md, USER.md and MEMORY.md with the memory tool
2. Delete this file: `rm {bootstrap_path}`
3. Tell the user that setup is complete

Keep it conversational. Ask a few questions at a time, not all at once.
"""


MEMORY_TEMPLATE = """\
# MEMORY.md - Long-Term Memory

Crucial facts, decisions and preferences that should survive across sessions.

## Technical Knowledge

## Preferences

## Important Facts
"""

IDENTITY_TEMPLATE = """\
# IDENTITY.md - Agent Identity

- **Name**:
- **Vibe**:
- **Languages**:
- **Behavioral Rules**:
"""

USER_TEMPLATE = """\
# USER.md - User Profile

- **Name**:
- **Role**:
- **Technical Stack**:
- **Location**:
- **Communication Style**:
"""

# MEMORY.md last: its presence marks a completed seed
TEMPLATES = {
    Role.IDENTITY: IDENTITY_TEMPLATE,
    Role.USER: USER_TEMPLATE,
    Role.MEMORY: MEMORY_TEMPLATE,
}


class Bootstrapper:
    """Materializes the first-run documents when MEMORY.md is absent."""

    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    def initialize(self) -> bool:
        """Ensure directories; seed documents on a fresh root. Returns True if seeded."""
        self.store.ensure_directories()
        if self.store.is_initialized():
            return False

        bootstrap_path = self.store.bootstrap_path
        self.store.write_file(bootstrap_path, render_bootstrap(bootstrap_path))
        for role, template in TEMPLATES.items():
            self.store.write_file(self.store.paths.path_for(role), template)
        logger.info("Seeded memory documents in %s", self.store.root)
        return True

    def is_bootstrap_needed(self) -> bool:
        return self.store.needs_bootstrap()
