# src/tasklist_sync/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (store + synchronizer), then runs the
console presentation loop until /exit, EOF or Ctrl+C.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.ports import StoreError
from ..logging_setup import setup_logging
from ..tasks.rest_store import friendly_store_error_message

logger = logging.getLogger(__name__)


async def _run(settings) -> int:
    try:
        state = create_initial_state(settings=settings)
    except StoreError as e:
        print(friendly_store_error_message(e))
        return 2

    try:
        await run_console_loop(state)
    finally:
        try:
            await state.store.close()
        except Exception:
            logger.debug("Store close failed.", exc_info=True)
    return 0


def main() -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/tasklist")
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s (store=%s)...", settings.app_name, settings.store_backend)

    try:
        code = asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
        code = 130

    logger.info("Bye.")
    return code


if __name__ == "__main__":
    raise SystemExit(main())
