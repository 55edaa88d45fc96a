"""Structured logger for the Catalogue domain.

Handlers and processors are installed by ``ordering.utils.logging`` when the
application starts; catalogue code only needs a bound logger.
"""

import logging

import structlog

logger = structlog.get_logger(__name__)

# Suppress noisy library loggers
logging.getLogger("protean").setLevel(logging.WARNING)
