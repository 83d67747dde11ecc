"""
Logging bootstrap.

Configures the root logger once (format and level). The level comes from the
explicit ``level`` argument or the ``LOG_LEVEL`` environment variable,
defaulting to INFO. ``create_app`` calls this on startup.
"""

import logging
import os


def setup_logging(level: str = None) -> None:
    log_level = (level or os.environ.get('LOG_LEVEL', 'INFO')).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )
