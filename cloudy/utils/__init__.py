# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Utility modules for the Cloudy inventory server."""

from .correlation import (
    CorrelationIDFilter,
    CorrelationIDMiddleware,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from .error_sanitization import redact_sensitive_info, sanitize_error_message
from .input_validation import InputValidator, ValidationError
from .logging_config import configure_logging
from .parallel import TaskOutcome, gather_all

__all__ = [
    "CorrelationIDFilter",
    "CorrelationIDMiddleware",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
    "redact_sensitive_info",
    "sanitize_error_message",
    "InputValidator",
    "ValidationError",
    "configure_logging",
    "TaskOutcome",
    "gather_all",
]
