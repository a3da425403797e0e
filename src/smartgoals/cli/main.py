# src/smartgoals/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the AppSession from the persisted store,
then runs the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from .bootstrap import create_session, save_snapshot

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    # The REPL prints its own output; keep INFO chatter in the log file only.
    setup_logging(log_dir=settings.data_dir, console_level=max(console_level, logging.WARNING))

    logger.info("Starting %s (store=%s)...", settings.app_name, settings.store_path)

    session = create_session(settings=settings)
    try:
        run_console_loop(session)
    finally:
        # Stats may have rolled over to a new day since the last mutation.
        save_snapshot(session)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
