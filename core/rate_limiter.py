# core/rate_limiter.py

from typing import Dict, Tuple, Optional
from fastapi import Request
from threading import Lock
import time


# Simple in-memory sliding-window rate limiter, per process.
# Behind several workers each worker counts on its own.
_rate_limit_store: Dict[str, list] = {}
_lock = Lock()
_last_sweep = 0.0


def _evict_idle(now: float, window_seconds: int) -> None:
    """Drop identifiers with no request inside the window. Caller holds _lock."""
    global _last_sweep

    # At most one sweep per window
    if now - _last_sweep < window_seconds:
        return
    _last_sweep = now

    window_start = now - window_seconds
    idle = [key for key, stamps in _rate_limit_store.items() if not stamps or stamps[-1] <= window_start]
    for key in idle:
        del _rate_limit_store[key]


def check_rate_limit(
    identifier: str,
    max_requests: int = 10,
    window_seconds: int = 60,
) -> Tuple[bool, int]:
    """
    Check if a request should be rate limited.

    Args:
        identifier: Unique identifier (route + IP address, user ID, etc.)
        max_requests: Maximum number of requests allowed
        window_seconds: Time window in seconds

    Returns:
        Tuple of (allowed: bool, remaining: int)
    """
    now = time.time()
    window_start = now - window_seconds

    with _lock:
        _evict_idle(now, window_seconds)

        requests = [ts for ts in _rate_limit_store.get(identifier, []) if ts > window_start]

        if len(requests) >= max_requests:
            _rate_limit_store[identifier] = requests
            return False, 0

        requests.append(now)
        _rate_limit_store[identifier] = requests

    return True, max_requests - len(requests)


def get_rate_limit_identifier(request: Request, scope: str, user_id: Optional[str] = None) -> str:
    """
    Unique identifier for rate limiting within a scope (usually the route).
    Prefers user_id if available, otherwise uses IP address.
    """
    if user_id:
        return f"{scope}:user:{user_id}"

    client_ip = request.client.host if request.client else "unknown"

    # Forwarded IP (behind Supabase / Render proxies)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()

    return f"{scope}:ip:{client_ip}"


def reset_rate_limits() -> None:
    global _last_sweep

    with _lock:
        _rate_limit_store.clear()
        _last_sweep = 0.0
