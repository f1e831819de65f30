"""CORS headers for the public form endpoint.

The browser forms live on a fixed set of origins. Unknown origins are not
rejected; they get the canonical site origin in production and a wildcard
everywhere else, so local tooling keeps working.
"""
from typing import Dict, Optional

from app.core.config import settings

ALLOWED_ORIGINS = (
    "http://localhost:3000",
    "https://caduae.com",
    "https://www.caduae.com",
)
PRODUCTION_ORIGIN = "https://caduae.com"

ALLOWED_METHODS = "POST, OPTIONS"
ALLOWED_HEADERS = "Content-Type"
MAX_AGE_SECONDS = 86400  # 24 hours


def resolve_allowed_origin(origin: Optional[str], production: bool) -> str:
    if origin and origin in ALLOWED_ORIGINS:
        return origin
    if production:
        return PRODUCTION_ORIGIN
    return "*"


def compute_cors_headers(
    origin: Optional[str], production: Optional[bool] = None
) -> Dict[str, str]:
    """Return the CORS response headers for a request from ``origin``.

    ``production`` defaults to the configured deployment mode.
    """
    if production is None:
        production = settings.is_production

    return {
        "Access-Control-Allow-Origin": resolve_allowed_origin(origin, production),
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        "Access-Control-Max-Age": str(MAX_AGE_SECONDS),
    }
