# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Data models for the Cloudy inventory server."""

from .enums import GLOBAL_SERVICE_KINDS, REGIONAL_SERVICE_KINDS, ServiceKind
from .resource import GLOBAL_REGION, GLOBAL_REGION_NAME, Region, Resource
from .inventory import InventoryReport, ListResourcesRequest, RegionResources
from .health import HealthStatus

__all__ = [
    "ServiceKind",
    "GLOBAL_SERVICE_KINDS",
    "REGIONAL_SERVICE_KINDS",
    "Region",
    "GLOBAL_REGION",
    "GLOBAL_REGION_NAME",
    "Resource",
    "RegionResources",
    "InventoryReport",
    "ListResourcesRequest",
    "HealthStatus",
]
