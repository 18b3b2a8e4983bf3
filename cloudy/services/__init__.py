# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Inventory collection and aggregation services."""

from .normalizer import normalize
from .service_collector import CollectorError, ServiceCollector, ServiceOutcome
from .region_aggregator import RegionAggregator, RegionError, RegionOutcome
from .inventory_aggregator import InventoryAggregator
from .inventory_service import InventoryService

__all__ = [
    "normalize",
    "ServiceCollector",
    "ServiceOutcome",
    "CollectorError",
    "RegionAggregator",
    "RegionOutcome",
    "RegionError",
    "InventoryAggregator",
    "InventoryService",
]
