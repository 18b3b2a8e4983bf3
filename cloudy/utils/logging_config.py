# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Logging configuration shared by the server and the command line."""

import logging
import sys

from .correlation import CorrelationIDFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"


def configure_logging(log_level: str, stream=None) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        stream: Output stream, stdout by default
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.addFilter(CorrelationIDFilter())

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        handlers=[handler],
        force=True,
    )

    # Set uvicorn loggers to the same level
    logging.getLogger("uvicorn").setLevel(numeric_level)
    logging.getLogger("uvicorn.access").setLevel(numeric_level)
    logging.getLogger("uvicorn.error").setLevel(numeric_level)
    # botocore is very chatty at DEBUG
    logging.getLogger("botocore").setLevel(max(numeric_level, logging.INFO))
