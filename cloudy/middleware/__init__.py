# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""HTTP middleware configuration for the inventory server."""

from .cors_middleware import get_cors_config, parse_cors_origins

__all__ = ["get_cors_config", "parse_cors_origins"]
