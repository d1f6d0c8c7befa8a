"""
Fixed-window, per-IP request limiting for public endpoints.

Counters live in process memory, so each worker enforces its own limit.
"""
import time
from functools import wraps
from typing import Dict

from flask import jsonify, request

from core.logger import logger

RATE_LIMIT_MESSAGE = 'Too many requests from this IP, please try again later.'


def get_client_ip() -> str:
    """
    Get client IP address for rate limiting.

    Uses the socket address only. Behind a reverse proxy, TRUSTED_PROXY_HOPS
    makes ProxyFix rewrite remote_addr from the proxy's X-Forwarded-For.
    """
    return request.remote_addr or 'unknown'


class RateLimiter:
    """Counts requests per client IP inside a fixed time window."""

    def __init__(self, max_requests: int, window_seconds: float):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._attempts: Dict[str, Dict[str, float]] = {}  # {ip: {count, reset_time}}

    def _prune(self, now: float):
        """Drop entries whose window has ended."""
        expired = [ip for ip, data in self._attempts.items() if now > data['reset_time']]
        for ip in expired:
            del self._attempts[ip]

    def hit(self, ip: str) -> bool:
        """Record a request from ip. Returns False once the limit is exceeded."""
        now = time.time()
        self._prune(now)

        attempt_data = self._attempts.get(ip)
        if attempt_data is None:
            attempt_data = {'count': 0, 'reset_time': now + self.window_seconds}
            self._attempts[ip] = attempt_data

        attempt_data['count'] += 1
        return attempt_data['count'] <= self.max_requests

    def tracked_clients(self) -> int:
        return len(self._attempts)

    def retry_after(self, ip: str) -> int:
        """Seconds until the window for ip resets."""
        attempt_data = self._attempts.get(ip)
        if not attempt_data:
            return 0
        return max(0, int(attempt_data['reset_time'] - time.time()) + 1)

    def reset(self):
        self._attempts.clear()


def rate_limited(limiter: RateLimiter):
    """Decorator rejecting requests with 429 once the client's window is used up"""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            ip = get_client_ip()
            if not limiter.hit(ip):
                logger.warning(f"Rate limit exceeded for {ip} on {request.path}")
                response = jsonify({'success': False, 'message': RATE_LIMIT_MESSAGE})
                response.status_code = 429
                response.headers['Retry-After'] = str(limiter.retry_after(ip))
                return response
            return f(*args, **kwargs)
        return decorated_function
    return decorator
