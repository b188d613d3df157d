"""Entry point: python -m memoir --action ACTION [options]

- read / write / search / list: run the `memory` tool and print its result
- context:                      print the context injected on each turn
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from memoir.config import load_config
from memoir.tools.memory_tools import ACTIONS, MODES, TARGETS


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="memoir",
        description="Persistent markdown memory for conversational agents",
    )
    parser.add_argument("--action", "-a", required=True, choices=[*ACTIONS, "context"])
    parser.add_argument("--target", "-t", choices=TARGETS)
    parser.add_argument("--content", "-c", help="Text to write; '-' reads stdin")
    parser.add_argument("--mode", "-m", choices=MODES)
    parser.add_argument("--date", "-d", help="Daily log date (YYYY-MM-DD), default today")
    parser.add_argument("--query", "-q")
    parser.add_argument("--max-results", "-n", dest="max_results", type=int)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config()
    _setup_logging(config.log_level)

    from memoir.core import MemoryPlugin

    plugin = MemoryPlugin(config)

    if args.action == "context":
        system: list[str] = []
        asyncio.run(plugin.transform_system(system))
        if system:
            print(system[0])
        return 0

    content = args.content
    if content == "-":
        content = sys.stdin.read()

    result = asyncio.run(
        plugin.execute(
            {
                "action": args.action,
                "target": args.target,
                "content": content,
                "mode": args.mode,
                "date": args.date,
                "query": args.query,
                "max_results": args.max_results,
            }
        )
    )
    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
