"""
Bounded retry for rate-limited board API calls.
"""

import time
from typing import Callable, Optional, TypeVar

from ...shared import RateLimitError, get_logger

T = TypeVar("T")

logger = get_logger(__name__)


def with_retry(fn: Callable[[], T],
               max_attempts: int = 3,
               fallback_delay: float = 2.0,
               max_delay: float = 60.0,
               sleep: Callable[[float], None] = time.sleep,
               description: Optional[str] = None) -> T:
    """
    Call ``fn``, retrying only when it is rate limited.
    
    Waits for the delay the service advertised (or ``fallback_delay``)
    between attempts, never longer than ``max_delay``. Any other error
    propagates immediately.
    
    Raises:
        RateLimitError: If every attempt was rate limited
    """
    attempt = 1
    while True:
        try:
            return fn()
        except RateLimitError as e:
            if attempt >= max_attempts:
                raise RateLimitError(
                    f"{description or 'Request'} still rate limited after {attempt} attempts",
                    retry_after=e.retry_after
                )
            delay = e.retry_after if e.retry_after is not None else fallback_delay
            delay = min(delay, max_delay)
            logger.info(f"Rate limited, waiting {delay}s before retry ({attempt}/{max_attempts})")
            sleep(delay)
            attempt += 1
