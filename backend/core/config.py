"""
Environment-backed configuration for the registration API.

Values are read with os.getenv when a Config is created, so the .env file
must already be loaded (see app.py).
"""
import os
from pathlib import Path
from typing import List, Optional

DEV_CORS_ORIGINS = 'http://localhost:5173,http://localhost:3000,http://127.0.0.1:5173'


def _get_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _get_flag(name: str) -> bool:
    return os.getenv(name, '').strip().lower() == 'true'


class Config:
    """Application settings for one app instance."""

    def __init__(self):
        self.env = os.getenv('FLASK_ENV', 'development').strip().lower()
        self.port = _get_int('PORT', '4000')

        origins = os.getenv('FRONTEND_ORIGIN', '')
        if not origins:
            if self.env == 'production':
                raise ValueError("FRONTEND_ORIGIN environment variable must be set in production")
            origins = DEV_CORS_ORIGINS
        self.frontend_origins: List[str] = [o.strip() for o in origins.split(',') if o.strip()]

        self.google_sheets_id = os.getenv('GOOGLE_SHEETS_ID', '')
        self.service_account_key_base64 = os.getenv('GOOGLE_SERVICE_ACCOUNT_KEY_BASE64', '')
        self.service_account_key_path: Optional[str] = os.getenv('GOOGLE_SERVICE_ACCOUNT_KEY_PATH') or None

        # Named ranges (worksheet!columns) for each kind of data
        self.projects_range = os.getenv('GOOGLE_SHEETS_PROJECTS_RANGE', 'Projects!A:X')
        self.students_range = os.getenv('GOOGLE_SHEETS_STUDENTS_RANGE', 'Students!A:H')
        self.teachers_range = os.getenv('GOOGLE_SHEETS_TEACHERS_RANGE', 'Teachers!A:B')
        self.info_range = os.getenv('GOOGLE_SHEETS_INFO_RANGE', 'Info!A:B')
        self.cache_ttl = _get_int('SHEETS_CACHE_TTL', '300')

        self.rate_limit_window_ms = _get_int('RATE_LIMIT_WINDOW', '3600000')
        self.rate_limit_max = _get_int('RATE_LIMIT_MAX', '10')
        # Number of reverse proxies whose X-Forwarded-For is trusted; 0 uses the socket address
        self.trusted_proxy_hops = _get_int('TRUSTED_PROXY_HOPS', '0')

        self.use_mock_sheets = _get_flag('USE_MOCK_SHEETS') or _get_flag('CI')

        default_dist = Path(__file__).parent.parent / 'public'
        self.frontend_dist_dir = Path(os.getenv('FRONTEND_DIST_DIR', default_dist))

        if not self.use_mock_sheets:
            if not self.google_sheets_id:
                raise ValueError("GOOGLE_SHEETS_ID environment variable is required")
            if not self.service_account_key_base64 and not self.service_account_key_path:
                raise ValueError(
                    "Either GOOGLE_SERVICE_ACCOUNT_KEY_BASE64 or "
                    "GOOGLE_SERVICE_ACCOUNT_KEY_PATH must be provided"
                )

    @property
    def is_development(self) -> bool:
        return self.env == 'development'

    @property
    def is_production(self) -> bool:
        return self.env == 'production'
