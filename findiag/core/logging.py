"""
logging.py — Application-Wide Logging Configuration

Purpose:
- Configure a standardized logging format for the entire service.
- Keep API requests, diagnosis runs and import scripts on the same format.
- Align the uvicorn and SQLAlchemy loggers with the service's level.

Format: timestamp | level | module | message
"""

import logging
from typing import Dict

# -----------------------------------------------------------------------------
# Log Format
# -----------------------------------------------------------------------------

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)

# Server loggers follow the configured level
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# SQL statement logging is only useful while debugging queries
SQL_LOGGER = "sqlalchemy.engine"


def resolve_level(level: str) -> int:
    """Map a level name ("debug", "INFO", ...) to its logging constant; unknown names → INFO."""
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def library_levels(level: str) -> Dict[str, int]:
    """
    Levels applied to third-party loggers for a given service level.

    At DEBUG the SQLAlchemy engine logs every statement (INFO); otherwise it
    only reports warnings.
    """
    resolved = resolve_level(level)
    levels = {name: resolved for name in SERVER_LOGGERS}
    levels[SQL_LOGGER] = logging.INFO if resolved <= logging.DEBUG else logging.WARNING
    return levels

# -----------------------------------------------------------------------------
# Root Logger Initialization
# -----------------------------------------------------------------------------

def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging settings.

    Parameters:
        level (str): "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"

    Behavior:
    - Sets logging format globally.
    - Streams to stderr, which uvicorn and the import scripts both surface.
    - Applies library_levels() to the uvicorn and SQLAlchemy loggers.
    - Should be called ONCE, at app startup or at the top of a script's main().
    """

    logging.basicConfig(
        level=resolve_level(level),
        format=LOG_FORMAT
    )

    for name, library_level in library_levels(level).items():
        logging.getLogger(name).setLevel(library_level)

    logging.getLogger(__name__).info("Logging initialized with level %s", level)

# -----------------------------------------------------------------------------
# Logger Access Helper
# -----------------------------------------------------------------------------

def get_logger(name: str) -> logging.Logger:
    """
    Return a logger instance to be used in any module.

    In any module:
        from findiag.core.logging import get_logger
        logger = get_logger(__name__)
    """
    return logging.getLogger(name)
