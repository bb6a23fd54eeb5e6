"""
Runtime configuration.

All settings come from environment variables, read once at import.
"""

import os

# Shop API (stock + product catalog)
SHOP_API_URL = os.environ.get("SHOP_API_URL", "http://localhost:3333")
API_TIMEOUT_SECONDS = float(os.environ.get("API_TIMEOUT_SECONDS", "10"))
API_RETRY_ATTEMPTS = int(os.environ.get("API_RETRY_ATTEMPTS", "3"))

# Cart persistence (Upstash Redis REST)
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "@RocketShoes:cart")

# Notification language (pt | en)
CART_LANGUAGE = os.environ.get("CART_LANGUAGE", "pt")


def validate_config() -> None:
    """Raise ValueError if settings required for persistence are missing."""
    missing = [
        name
        for name, value in (
            ("UPSTASH_REDIS_REST_URL", UPSTASH_REDIS_REST_URL),
            ("UPSTASH_REDIS_REST_TOKEN", UPSTASH_REDIS_REST_TOKEN),
        )
        if not value
    ]
    if missing:
        raise ValueError(f"{' and '.join(missing)} must be set")
    if API_RETRY_ATTEMPTS < 1:
        raise ValueError("API_RETRY_ATTEMPTS must be at least 1")
