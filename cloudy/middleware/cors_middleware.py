# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""CORS configuration for the inventory server.

CORS itself is enforced by Starlette's CORSMiddleware; this module turns
the configured origin string into its keyword arguments.
"""

import logging

logger = logging.getLogger(__name__)

# Headers browsers may send to the API when origins are restricted
ALLOWED_HEADERS = [
    "Accept",
    "Content-Type",
    "Content-Length",
    "Accept-Encoding",
    "Authorization",
    "X-CSRF-Token",
    "X-Correlation-ID",
]


def parse_cors_origins(origins_str: str) -> list[str]:
    """
    Parse a comma-separated string of CORS origins.

    Args:
        origins_str: Comma-separated list of origins or "*"

    Returns:
        List of origins (empty list if none configured)
    """
    if not origins_str:
        return []

    if origins_str.strip() == "*":
        return ["*"]

    return [o.strip() for o in origins_str.split(",") if o.strip()]


def get_cors_config(allowed_origins: list[str]) -> dict:
    """
    Build CORSMiddleware keyword arguments from allowed origins.

    Args:
        allowed_origins: List of allowed origins

    Returns:
        Dictionary of CORS configuration
    """
    is_wildcard = "*" in allowed_origins

    if not allowed_origins:
        logger.info("CORS: no origins configured, cross-origin requests are blocked")

    return {
        "allow_origins": ["*"] if is_wildcard else allowed_origins,
        "allow_credentials": False,
        "allow_methods": (
            ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
            if is_wildcard
            else ["GET", "POST", "OPTIONS"]
        ),
        "allow_headers": ["*"] if is_wildcard else ALLOWED_HEADERS,
        "expose_headers": ["X-Correlation-ID"],
    }
