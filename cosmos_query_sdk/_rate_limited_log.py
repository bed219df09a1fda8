"""
Thread-safe rate-limited logging utilities.

Used for warnings that would otherwise repeat on every query, such as
node-trusted query results or backend height-filter mistakes.
"""
import logging
import threading
import time
from typing import Optional

from cachetools import TTLCache

logger = logging.getLogger(__name__)

# Global rate limiting cache with thread safety: maximum of 100 entries, 1 hour TTL
_log_cache = TTLCache(maxsize=100, ttl=3600)
_log_cache_lock = threading.RLock()


def rate_limited_log(
    message: str,
    level: str = "warning",
    interval: int = 60,
    logger_instance: Optional[logging.Logger] = None
) -> bool:
    """
    Log a message at most once per interval, in a thread-safe manner.

    Args:
        message: Message to log
        level: Log level (debug, info, warning, error, critical)
        interval: Minimum interval between identical logs in seconds
        logger_instance: Logger to use (defaults to module logger)

    Returns:
        True if the message was emitted, False if it was suppressed
    """
    log_instance = logger_instance or logger
    log_method = getattr(log_instance, level.lower(), log_instance.warning)

    key = f"{level}:{message}"

    with _log_cache_lock:
        now = time.monotonic()
        last_time = _log_cache.get(key)
        if last_time is not None and now - last_time < interval:
            return False

        log_method(message)
        _log_cache[key] = now
        return True
