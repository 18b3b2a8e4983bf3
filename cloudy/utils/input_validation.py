# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Input validation for inventory requests.

Validation happens at the request boundary, before any AWS client is
built, so a rejected request never reaches the provider.
"""

import logging
import re
from typing import Any

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, field: str, message: str, value: Any = None):
        """
        Initialize validation error.

        Args:
            field: The field that failed validation
            message: Human-readable error message
            value: The invalid value (optional, for logging)
        """
        self.field = field
        self.message = message
        self.value = value
        super().__init__(f"Validation error for '{field}': {message}")


class InputValidator:
    """Validator for inventory request parameters."""

    # Commercial, GovCloud and ISO partitions: us-east-1, us-gov-west-1, us-isob-east-1
    REGION_PATTERN = re.compile(r"^[a-z]{2}(-(gov|iso[a-z]?))?-[a-z]+-\d{1,2}$")

    DEFAULT_MAX_REGIONS = 50
    MAX_REGION_LENGTH = 32

    @classmethod
    def validate_regions(
        cls,
        regions: Any,
        field_name: str = "regions",
        max_regions: int = DEFAULT_MAX_REGIONS,
    ) -> list[str]:
        """
        Validate and normalize the requested regions.

        Region codes are stripped and lower-cased. Duplicates are dropped,
        keeping first-seen order.

        Args:
            regions: The value to validate
            field_name: Name of the field (for error messages)
            max_regions: Maximum number of distinct regions allowed

        Returns:
            Non-empty list of distinct region codes

        Raises:
            ValidationError: If validation fails
        """
        if regions is None:
            raise ValidationError(field_name, "Field is required")

        if not isinstance(regions, (list, tuple, set, frozenset)):
            raise ValidationError(
                field_name,
                f"Must be an array, got {type(regions).__name__}",
            )

        if len(regions) == 0:
            raise ValidationError(field_name, "at least one region must be specified")

        normalized: list[str] = []
        invalid_regions: list[str] = []
        for region in regions:
            if not isinstance(region, str):
                raise ValidationError(
                    field_name,
                    f"All regions must be strings, got {type(region).__name__}",
                )

            code = region.strip().lower()
            if len(code) > cls.MAX_REGION_LENGTH or not cls.REGION_PATTERN.match(code):
                invalid_regions.append(region)
            elif code not in normalized:
                normalized.append(code)

        if invalid_regions:
            logger.info(f"Rejected invalid region codes: {invalid_regions}")
            raise ValidationError(
                field_name,
                f"Invalid AWS regions: {invalid_regions}",
                invalid_regions,
            )

        if len(normalized) > max_regions:
            raise ValidationError(
                field_name,
                f"Too many regions (max: {max_regions})",
                len(normalized),
            )

        return normalized
