#!/usr/bin/env python3
"""
Parley Console

Interactive terminal chat on top of the parley engine:
  quit / exit   → goodbye and stop
  empty input   → "please say something"
  anything else → rule-matched reply

Usage:
  python -m bot.console [path/to/config.yml]
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional, TextIO

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from parley.config import ParleyConfig, load_config, load_engine
from parley.errors import ParleyError
from parley.session import ChatSession

logger = logging.getLogger(__name__)

BANNER = (
    "=====================================\n"
    "      Parley Rule-Based Chatbot\n"
    "====================================="
)


def run_console(
    session: ChatSession,
    stdin: TextIO = sys.stdin,
    stdout: TextIO = sys.stdout,
) -> int:
    """Read lines until an exit command or end of input. Returns turns answered."""
    print(BANNER, file=stdout)
    print(f"Bot: {session.greeting()}", file=stdout)

    while True:
        print("You: ", end="", file=stdout, flush=True)
        line = stdin.readline()
        if not line:
            print("", file=stdout)
            break

        result = session.handle(line.rstrip("\n"))
        print(f"Bot: {result.reply}", file=stdout)
        if result.is_exit:
            break

    return session.turns


def build_session(config_path: Optional[str] = None) -> ChatSession:
    config_path = config_path or os.environ.get("PARLEY_CONFIG", "config/parley.defaults.yml")
    config = load_config(config_path)
    _configure_logging(config)
    return ChatSession(load_engine(config), config)


def _configure_logging(config: ParleyConfig) -> None:
    # stdout belongs to the conversation
    logging.basicConfig(
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        level=config.log_level,
        stream=sys.stderr,
    )


def main(argv=None):
    """Start the console chat."""
    argv = sys.argv[1:] if argv is None else argv
    try:
        session = build_session(argv[0] if argv else None)
    except (FileNotFoundError, ParleyError) as e:
        print(f"parley: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        run_console(session)
    except KeyboardInterrupt:
        print("", file=sys.stdout)
    logger.info("session %s closed after %d turns", session.session_id, session.turns)


if __name__ == "__main__":
    main()
