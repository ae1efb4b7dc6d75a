"""
Configuration Module for Pizza Service
======================================

Every setting the service reads from the environment is defined here, once,
with its default. Values are parsed at import time; modules that need a
setting at call time read it as ``config.NAME`` so overrides take effect.

Configuration Categories:
-------------------------
- **Database**: SQLAlchemy URL of the credential/data store.

- **Tokens**: Secret used to sign the bearer tokens handed out at login.

- **Factory**: Location and API key of the external pizza factory that
  fulfills orders.

- **Rate Limiting**: Throttling of the login and registration endpoints.

- **CORS**: Origins allowed to call the API from a browser (the JWT Pizza
  frontend). All origins are allowed unless CORS_ORIGINS is set.

- **Default Admin**: Optional bootstrap administrator created when the
  database is initialized.

Environment Variables:
----------------------
- DATABASE_URL: SQLAlchemy URL (default: "sqlite:///./pizza.db")
- JWT_SECRET: Token signing secret (default: "dev-secret", change in production)
- FACTORY_URL: Base URL of the pizza factory (default: "https://pizza-factory.cs329.click")
- FACTORY_API_KEY: API key sent to the factory as a bearer token
- FACTORY_TIMEOUT_SECONDS: Timeout for the factory call (default: 10)
- RATE_LIMIT_AUTH: Login/registration rate limit (default: "20 per minute")
- RATE_LIMIT_ENABLED: Enable/disable rate limiting (default: "true")
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")
- DEFAULT_ADMIN_NAME / DEFAULT_ADMIN_EMAIL / DEFAULT_ADMIN_PASSWORD:
  bootstrap admin account (created only when the password is set)

Usage:
------
    from pizza_service.config import FACTORY_URL, JWT_SECRET
"""

import os
from typing import List


VERSION: str = os.getenv("PIZZA_SERVICE_VERSION", "20240518.154317")


# =============================================================================
# Database Configuration
# =============================================================================

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./pizza.db")


# =============================================================================
# Token Configuration
# =============================================================================
# Tokens are HS256-signed. A token is only honoured while its session row
# exists, so logout revokes it.

JWT_SECRET: str = os.getenv("JWT_SECRET", "dev-secret")
JWT_ALGORITHM: str = "HS256"


# =============================================================================
# Factory Configuration
# =============================================================================
# The factory is the external service that actually makes the pizzas. Every
# order placed here is forwarded to it exactly once.

FACTORY_URL: str = os.getenv("FACTORY_URL", "https://pizza-factory.cs329.click").rstrip("/")
FACTORY_API_KEY: str = os.getenv("FACTORY_API_KEY", "")
FACTORY_TIMEOUT_SECONDS: float = float(os.getenv("FACTORY_TIMEOUT_SECONDS", "10"))


# =============================================================================
# Rate Limiting Configuration
# =============================================================================
# Uses slowapi with in-memory storage (use Redis for multi-worker prod).
# Rate limit format: "X per Y" where Y is second, minute, hour, or day

RATE_LIMIT_AUTH: str = os.getenv("RATE_LIMIT_AUTH", "20 per minute")
RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"


def get_rate_limit_auth() -> str:
    """Login/registration rate limit, read when each request is checked."""
    return RATE_LIMIT_AUTH


# =============================================================================
# Pagination
# =============================================================================

ORDERS_PAGE_SIZE: int = 10
DEFAULT_LIST_LIMIT: int = 10


# =============================================================================
# CORS Configuration
# =============================================================================
# Format: comma-separated list of origins, e.g., "https://pizza.example.com"
# Unset means "*"

_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]


# =============================================================================
# Default Admin Configuration
# =============================================================================
# Seeded by init_db when DEFAULT_ADMIN_PASSWORD is set. Without a password no
# admin is created, so a fresh deployment never ships a known credential.

DEFAULT_ADMIN_NAME: str = os.getenv("DEFAULT_ADMIN_NAME", "Pizza Admin")
DEFAULT_ADMIN_EMAIL: str = os.getenv("DEFAULT_ADMIN_EMAIL", "a@jwt.com")
DEFAULT_ADMIN_PASSWORD: str = os.getenv("DEFAULT_ADMIN_PASSWORD", "")
