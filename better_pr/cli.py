"""Console entry point for BetterPR."""

import os
import sys
import logging
from dotenv import load_dotenv

from .app import run
from .config import Settings


def configure_logging():
    """Configure logging (can be overridden by LOG_LEVEL environment variable).

    Stdout is the user interface, so only warnings and errors are logged by default.
    """
    log_level = os.environ.get('LOG_LEVEL', 'WARNING').upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%m/%d/%Y %I:%M:%S %p'
    )


def main():
    """Main entry point for the script."""
    # Load environment variables from .env file if it exists
    load_dotenv()
    configure_logging()

    settings = Settings.from_env()
    sys.exit(run(settings))


if __name__ == "__main__":
    main()
