# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Error message sanitization for responses.

Error text returned to clients (client-initialization failures, unexpected
server errors) passes through here so internal paths and credentials never
leave the process. Full messages are still logged.
"""

import logging
import re

logger = logging.getLogger(__name__)

# Patterns for detecting sensitive information in error messages
SENSITIVE_PATTERNS = {
    "file_path": [
        r"[/\\](?:home|root|var|etc|opt|srv|usr|tmp)[/\\][\w\-./\\]+",
        r"[A-Za-z]:\\[\w\-./\\]+",  # Windows paths
        r"/[\w\-./]+\.py",
    ],
    "credentials": [
        r"AKIA[0-9A-Z]{16}",  # AWS Access Key ID
        r"ASIA[0-9A-Z]{16}",  # AWS temporary Access Key ID
        r"(?i)aws_secret_access_key['\"]?\s*[:=]\s*['\"]?[A-Za-z0-9/+=]{40}",
        r"(?i)aws_session_token['\"]?\s*[:=]\s*['\"]?[^\s'\"]+",
        r"(?i)password['\"]?\s*[:=]\s*['\"]?[^\s'\"]+",
        r"(?i)secret['\"]?\s*[:=]\s*['\"]?[^\s'\"]+",
    ],
    "stack_trace": [
        r"(?i)traceback|File \"[^\"]+\", line \d+",
    ],
}

COMPILED_PATTERNS = {
    category: [re.compile(pattern) for pattern in patterns]
    for category, patterns in SENSITIVE_PATTERNS.items()
}


def detect_sensitive_info(text: str) -> list[str]:
    """
    Detect sensitive information in text.

    Args:
        text: Text to scan

    Returns:
        Categories of sensitive information found
    """
    if not text:
        return []

    return [
        category
        for category, patterns in COMPILED_PATTERNS.items()
        if any(pattern.search(text) for pattern in patterns)
    ]


def redact_sensitive_info(text: str, replacement: str = "[REDACTED]") -> str:
    """
    Redact sensitive information from text.

    Args:
        text: Text to redact
        replacement: String to use for redacted content

    Returns:
        Text with sensitive information redacted
    """
    if not text:
        return text

    result = text
    for patterns in COMPILED_PATTERNS.values():
        for pattern in patterns:
            result = pattern.sub(replacement, result)
    return result


def sanitize_error_message(error: BaseException | str) -> str:
    """
    Turn an exception or message into text that is safe to return.

    Args:
        error: Exception or raw message

    Returns:
        Message with sensitive information redacted
    """
    message = str(error)
    categories = detect_sensitive_info(message)
    if categories:
        logger.warning(f"Sensitive information redacted from error message: {categories}")
    return redact_sensitive_info(message)
