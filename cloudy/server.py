# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""
Server entry point for the Cloudy inventory API.

Loads settings, configures logging, and starts uvicorn on the configured
host and port (default: 0.0.0.0:8080).

Usage:
    python -m cloudy

Or with uvicorn directly:
    uvicorn cloudy.main:app --host 0.0.0.0 --port 8080
"""

import logging
import sys

import uvicorn

from . import __version__
from .config import Settings, settings
from .utils.logging_config import configure_logging


def print_startup_banner(config: Settings) -> None:
    """
    Print startup banner with configuration information.

    Args:
        config: Application settings
    """
    timeout = f"{config.request_timeout}s" if config.request_timeout else "disabled"
    endpoint = config.aws_endpoint_url or "default"

    banner = f"""
==================================================================
  Cloudy AWS Resource Lister v{__version__}
------------------------------------------------------------------
  Configuration:
    Host:            {config.host}
    Port:            {config.port}
    Environment:     {config.environment}
    Log Level:       {config.log_level}
    Anchor Region:   {config.anchor_region}
    AWS Endpoint:    {endpoint}
    Request Timeout: {timeout}
------------------------------------------------------------------
  Endpoints:
    Health:     http://{config.host}:{config.port}/health
    Resources:  POST http://{config.host}:{config.port}/api/v1/resources
==================================================================
"""
    print(banner)


def main() -> None:
    """
    Main entry point for the inventory server.

    Loads configuration, configures logging, and starts the server.
    """
    config = settings()

    configure_logging(config.log_level)

    logger = logging.getLogger(__name__)

    print_startup_banner(config)

    logger.info("Starting Cloudy AWS Resource Lister...")
    logger.info(f"Server will listen on {config.host}:{config.port}")

    try:
        uvicorn.run(
            "cloudy.main:app",
            host=config.host,
            port=config.port,
            log_level=config.log_level.lower(),
            log_config=None,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.error(f"Server failed to start: {e}")
        sys.exit(1)
