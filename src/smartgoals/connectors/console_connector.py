# src/smartgoals/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.bootstrap import AppSession
from ..cli.commands import registry as command_registry

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(session: AppSession, line: str) -> str | None:
    """
    Run one input line through the command registry.

    Returns the text to show, or None for blank input. Handler crashes are
    logged and turned into a short message so the loop keeps running.
    """
    line = line.strip()
    if not line:
        return None

    try:
        reply = command_registry.handle(session, line)
    except Exception:
        logger.exception("Command handler crashed: %r", line)
        return "Internal error while handling a command."

    if reply is None:
        return "Commands start with '/'. Use /help to list available commands."
    return reply


def run_console_loop(session: AppSession) -> None:
    app_name = session.settings.app_name
    logger.info("Console connector started (goals=%d).", len(session.planner.goals))
    _print_ts(f"[{app_name}] Use /help for commands. Use /exit to quit.\n")

    while True:
        try:
            user_input = input(f"{app_name}> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        reply = handle_line(session, user_input)
        if reply is not None:
            print(reply)

    logger.info("Console connector finished.")
