from typing import Optional

from flask import Blueprint

from api.routes_register import register_registration_routes
from core.config import Config
from core.rate_limit import RateLimiter


def create_api_blueprint(config: Config, sheets_manager: Optional[object]) -> Blueprint:
    """Build the /api blueprint around one sheets manager and rate limiter."""
    api = Blueprint("api", __name__)

    limiter = RateLimiter(
        max_requests=config.rate_limit_max,
        window_seconds=config.rate_limit_window_ms / 1000,
    )
    api.rate_limiter = limiter

    register_registration_routes(api, sheets_manager, limiter)
    return api
