"""Tool definition shared by host adapters."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass
class ToolDefinition:
    """Custom tool that the agent can call, handled within memoir."""

    name: str
    description: str
    parameters: dict[str, Any]
    handler: Callable[..., str]
