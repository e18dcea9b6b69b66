"""
Logging setup for snapboard.

Records go to stdout and, when ``LOG_FILE`` is set, to a file as well.
HTTP client libraries are held at WARNING so request logs stay readable.
"""

import logging
import sys
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from ...config.settings import get_settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

QUIET_LOGGERS = ('urllib3', 'requests', 'httpx', 'anthropic', 'google')


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path))
    return handlers


@lru_cache()
def setup_logging(log_level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure the root logger.

    Called with no arguments, the level and file come from settings. Calling
    again with different arguments replaces the previous handlers.

    Args:
        log_level: Level name such as INFO or DEBUG
        log_file: Optional path of a file to log to
    """
    if log_level is None and log_file is None:
        config = get_settings().logging_config
        log_level, log_file = config['level'], config['file']

    level = getattr(logging, (log_level or 'INFO').upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=_build_handlers(log_file),
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@lru_cache()
def get_logger(name: str) -> logging.Logger:
    """Return a module logger, configuring logging on first use."""
    setup_logging()
    return logging.getLogger(name)
