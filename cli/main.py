"""CLI entry point."""

import sys

from common.logging_config import setup_logging
from cli.commands import DEFAULT_CONFIG_PATH
from cli.client import StorageClient
from cli.config import Config
from cli.repl import repl_loop
from service.container import build_services


def main() -> None:
    """Entry point for CLI."""
    config = Config(DEFAULT_CONFIG_PATH)
    debug = '--debug' in sys.argv
    log_level = 'DEBUG' if debug else config.get_log_level()

    logger = setup_logging('cli', log_level=log_level)

    if debug:
        logger.info("Debug logging enabled")
        sys.argv.remove('--debug')

    logger.info("CLI starting...")
    try:
        client = StorageClient(build_services(config.get_settings()))
        repl_loop(client)
    except Exception as e:
        logger.error(f"CLI error: {e}", exc_info=True)
        raise
    finally:
        logger.info("CLI exiting")


if __name__ == "__main__":
    main()
