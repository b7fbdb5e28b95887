"""
Logging Utilities

structlog configuration for the submission client. Call initialize_logging()
once at startup, then use structlog.get_logger() everywhere else.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import structlog

DEBUG_LOG_FILE = Path.home() / "mobile_analytics_debug.log"


def configure_structlog():
    """Render log records as JSON through the standard logging handlers"""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def setup_standard_logging(log_file: Optional[str] = None, level: int = logging.INFO):
    """Set up console and optional file handlers on the root logger"""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    root_logger.addHandler(logging.StreamHandler(sys.stdout))

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        root_logger.addHandler(logging.FileHandler(log_file))


def initialize_logging(level_name: str = 'INFO', log_file: Optional[str] = None):
    """Configure structlog and the standard logging handlers"""
    level = getattr(logging, level_name.upper(), logging.INFO)
    configure_structlog()
    setup_standard_logging(log_file=log_file, level=level)
    structlog.get_logger(__name__).info("Logging initialized", log_level=level_name, log_file=log_file or 'console')


def is_debug_enabled() -> bool:
    """Check TELEMETRY_DEBUG in analytics_config (False when the module is missing)"""
    try:
        import analytics_config as config
    except ImportError:
        return False
    return bool(getattr(config, 'TELEMETRY_DEBUG', False))


def apply_debug_setting() -> bool:
    """
    Switch to DEBUG logging with the debug log file when TELEMETRY_DEBUG is set

    Returns:
        True if debug logging was enabled, False if logging was left untouched
    """
    if not is_debug_enabled():
        return False
    initialize_logging('DEBUG', str(DEBUG_LOG_FILE))
    return True


def initialize_logging_from_config():
    """Initialize logging, switching to DEBUG with a debug log file when TELEMETRY_DEBUG is set"""
    if not apply_debug_setting():
        initialize_logging('INFO')
