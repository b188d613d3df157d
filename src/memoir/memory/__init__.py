"""Markdown memory documents + per-turn context assembly.

Layout:
    ~/.config/memoir/memory/
    ├── MEMORY.md                      # Long-term: crucial facts, decisions, preferences
    ├── IDENTITY.md                    # Agent name, persona, behavioral rules
    ├── USER.md                        # User profile
    ├── BOOTSTRAP.md                   # First-run interview; present until setup is done
    └── daily/
        └── 2026-02-18.md             # Daily logs (append-only by convention)

Initialization state is the presence of BOOTSTRAP.md; nothing else records it.
"""
