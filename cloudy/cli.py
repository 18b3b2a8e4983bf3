# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""
Run one inventory from the command line and print the report as JSON.

Logs go to stderr so stdout carries only the report.

Examples:
  python -m cloudy.cli us-east-1 eu-west-1
  python -m cloudy.cli us-east-1 --timeout 30 --indent 0
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from .clients.regional_client_factory import ClientInitError
from .config import settings
from .services.inventory_service import InventoryService
from .utils.input_validation import InputValidator, ValidationError
from .utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cloudy",
        description="List AWS resources across regions and print the report as JSON.",
    )
    parser.add_argument("regions", nargs="+", help="AWS region codes, e.g. us-east-1")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request deadline in seconds (default: REQUEST_TIMEOUT_SECONDS, 0 disables)",
    )
    parser.add_argument(
        "--indent", type=int, default=2, help="JSON indentation, 0 for compact output"
    )
    parser.add_argument(
        "--log-level", dest="log_level", default=None, help="Override LOG_LEVEL"
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Command line entry point.

    Returns:
        Process exit code: 0 on success (including partial failures),
        2 on invalid input, 1 if the AWS client cannot be initialized
    """
    args = _parse_args(argv)
    if args.timeout is not None and args.timeout < 0:
        print("error: --timeout must be zero or positive", file=sys.stderr)
        return 2

    config = settings()
    if args.timeout is not None:
        config = config.model_copy(update={"request_timeout_seconds": args.timeout})

    configure_logging(args.log_level or config.log_level, stream=sys.stderr)

    try:
        regions = InputValidator.validate_regions(args.regions, max_regions=config.max_regions)
    except ValidationError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 2

    service = InventoryService(config)
    try:
        report = asyncio.run(service.list_resources(regions))
    except ClientInitError as e:
        logger.error(f"Failed to initialize AWS client: {e}")
        print(f"error: failed to initialize AWS client: {e}", file=sys.stderr)
        return 1

    print(report.model_dump_json(indent=args.indent or None))
    return 0


if __name__ == "__main__":
    sys.exit(main())
