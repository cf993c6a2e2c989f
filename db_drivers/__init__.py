"""Factory for the native drivers, with conditional imports.

Each driver is registered only when its library is installed.
SQLite is always available (Python stdlib).
"""
import logging

from .base import DatabaseDriver, DriverError, Statement

logger = logging.getLogger(__name__)

DRIVERS = {}
DRIVER_LABELS = {}

# SQLite, always available (stdlib)
from .sqlite import SQLiteDriver
DRIVERS['sqlite'] = SQLiteDriver
DRIVER_LABELS['sqlite'] = 'SQLite'

# Oracle (oracledb)
try:
    from .oracle import OracleDriver
    DRIVERS['oracle'] = OracleDriver
    DRIVER_LABELS['oracle'] = 'Oracle'
except ImportError:
    logger.debug("Oracle driver not available (pip install oracledb)")


def get_driver(db_type: str, **options) -> DatabaseDriver:
    """Returns an instance of the requested driver."""
    driver_class = DRIVERS.get(db_type.lower())
    if not driver_class:
        available = ', '.join(DRIVERS.keys())
        raise ValueError(
            f"Unsupported or not installed driver: {db_type}. "
            f"Available: {available}"
        )
    return driver_class(**options)


def get_available_drivers() -> dict:
    """Returns only the drivers that are actually available."""
    return DRIVER_LABELS.copy()
