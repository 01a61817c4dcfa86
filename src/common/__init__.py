# Common utilities and shared modules
"""
Shared components used by the auth and posts packages:
- Data models (Pydantic schemas)
- Authenticated HTTP client
- Logging configuration
- Project configuration
"""

from .config import settings, PROJECT_ROOT, DATA_DIR
from .http_client import ApiClient, ApiError
from .logging import setup_logging

__all__ = [
    "settings",
    "PROJECT_ROOT",
    "DATA_DIR",
    "ApiClient",
    "ApiError",
    "setup_logging",
]
