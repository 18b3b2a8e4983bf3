# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Enumeration of the AWS service kinds covered by the inventory."""

from enum import Enum


class ServiceKind(str, Enum):
    """Kinds of AWS resources the inventory collects.

    The value is the display string used as ``Resource.type``.
    """

    EC2_INSTANCE = "EC2 Instance"
    S3_BUCKET = "S3 Bucket"
    RDS_INSTANCE = "RDS Instance"
    LAMBDA_FUNCTION = "Lambda Function"
    ECS_CLUSTER = "ECS Cluster"
    IAM_USER = "IAM User"

    @property
    def is_global(self) -> bool:
        """True if resources of this kind are not bound to a region."""
        return self in GLOBAL_SERVICE_KINDS


# Kinds that exist at the account level and are only queried in the anchor region
GLOBAL_SERVICE_KINDS: frozenset[ServiceKind] = frozenset([
    ServiceKind.S3_BUCKET,
    ServiceKind.IAM_USER,
])

# Kinds queried once per requested region
REGIONAL_SERVICE_KINDS: tuple[ServiceKind, ...] = (
    ServiceKind.EC2_INSTANCE,
    ServiceKind.RDS_INSTANCE,
    ServiceKind.LAMBDA_FUNCTION,
    ServiceKind.ECS_CLUSTER,
)
