"""Logging setup for the exchange ledger service."""

import logging
import sys
from typing import Optional

from exchange_ledger.config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LEDGER_LOGGER = "exchange_ledger"


def _level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return level


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure logging for the service.

    The root logger follows log_level. The exchange_ledger logger, which
    carries per-entry skip and over-sell warnings, follows ledger_log_level
    when set, so a busy ledger can be quieted without touching uvicorn.
    """
    settings = settings or get_settings()

    logging.basicConfig(
        level=_level(settings.log_level),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logging.getLogger(LEDGER_LOGGER).setLevel(
        _level(settings.ledger_log_level or settings.log_level)
    )
    # No SQL echo
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(_level(settings.log_level))
