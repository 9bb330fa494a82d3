"""
Thread-safe rate-limited logging utilities.

Advisory warnings (for example an ambiguous default organization) would
otherwise repeat on every call; this keeps one line per message per window.
"""
import logging
import threading
from typing import Optional

from cachetools import TTLCache

# Configure logger
logger = logging.getLogger(__name__)

# At most 100 distinct messages tracked, each suppressed for up to 1 hour
_log_cache: TTLCache = TTLCache(maxsize=100, ttl=3600)
_log_cache_lock = threading.RLock()


def rate_limited_log(
    message: str,
    level: str = "warning",
    interval: int = 3600,
    logger_instance: Optional[logging.Logger] = None
) -> bool:
    """
    Log a message at most once per ``interval`` seconds, in a thread-safe manner.

    Args:
        message: Message to log
        level: Log level (debug, info, warning, error, critical)
        interval: Suppression window in seconds, capped by the cache TTL
        logger_instance: Logger to use (defaults to module logger)

    Returns:
        True if the message was emitted, False if it was suppressed
    """
    log_instance = logger_instance or logger
    log_method = getattr(log_instance, level.lower(), log_instance.warning)

    key = f"{level}:{message}"

    with _log_cache_lock:
        emitted_at = _log_cache.get(key)
        now = _log_cache.timer()
        if emitted_at is not None and now - emitted_at < interval:
            return False

        log_method(message)
        _log_cache[key] = now
        return True


def reset_rate_limited_log() -> None:
    """Forget every suppressed message."""
    with _log_cache_lock:
        _log_cache.clear()
