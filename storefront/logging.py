"""Logging setup."""

import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(app):
    """Send storefront and Flask logs to stdout at ``LOG_LEVEL``."""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    for name in ('storefront', app.logger.name):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Avoid duplicate handlers when the factory runs more than once
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.propagate = False

    # Set third-party loggers to warning to reduce noise
    logging.getLogger('botocore').setLevel(logging.WARNING)
    logging.getLogger('boto3').setLevel(logging.WARNING)
