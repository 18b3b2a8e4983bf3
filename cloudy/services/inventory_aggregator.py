# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Inventory aggregator for orchestrating parallel region aggregation.

This module provides the InventoryAggregator class that runs one region
aggregation per requested region in parallel, absorbs every provider
failure into the per-region ``error`` field, and assembles the final
InventoryReport. It never fails the operation as a whole.
"""

import asyncio
import logging
import time
from typing import Iterable

from ..models.inventory import InventoryReport, RegionResources
from ..utils.parallel import TaskOutcome, gather_all
from .region_aggregator import RegionAggregator, RegionOutcome

logger = logging.getLogger(__name__)


class InventoryAggregator:
    """
    Orchestrates multi-region inventory collection.

    Every call builds fresh accumulators; nothing is carried over between
    invocations. One region's failure never cancels or blocks another.
    """

    def __init__(
        self,
        region_aggregator: RegionAggregator,
        max_concurrent_regions: int | None = None,
    ):
        """
        Initialize with a region aggregator.

        Args:
            region_aggregator: Aggregator run once per requested region
            max_concurrent_regions: Optional cap on regions aggregated at once
        """
        self.region_aggregator = region_aggregator
        self.max_concurrent_regions = max_concurrent_regions

    async def run(
        self,
        regions: Iterable[str],
        timeout_seconds: float | None = None,
    ) -> InventoryReport:
        """
        Collect resources across all requested regions.

        Duplicate region codes are collapsed, so each region (and the
        anchor region's global services) is queried once.

        Args:
            regions: AWS region codes to inventory
            timeout_seconds: Optional deadline for the whole run; collectors
                             still running when it passes report a
                             cancellation error for their region

        Returns:
            InventoryReport with one RegionResources entry per region
        """
        unique_regions = list(dict.fromkeys(regions))
        start_time = time.time()

        deadline = None
        if timeout_seconds:
            deadline = asyncio.get_running_loop().time() + timeout_seconds

        logger.info(
            f"Starting inventory: regions={unique_regions}, "
            f"timeout={timeout_seconds}s, max_concurrent={self.max_concurrent_regions}"
        )

        async def aggregate(region: str) -> RegionOutcome:
            return await self.region_aggregator.aggregate(region, deadline)

        outcomes = await gather_all(
            unique_regions, aggregate, max_concurrency=self.max_concurrent_regions
        )
        region_data = [self._to_region_resources(outcome) for outcome in outcomes]
        report = InventoryReport.from_region_data(region_data)

        duration_ms = int((time.time() - start_time) * 1000)
        if report.failed_regions:
            logger.warning(
                f"Inventory complete with errors: {report.total_count} resources, "
                f"failed_regions={report.failed_regions}, duration={duration_ms}ms"
            )
        else:
            logger.info(
                f"Inventory complete: {report.total_count} resources in "
                f"{len(region_data)} regions, duration={duration_ms}ms"
            )
        return report

    def _to_region_resources(self, outcome: TaskOutcome[str, RegionOutcome]) -> RegionResources:
        region = outcome.key

        if not outcome.succeeded:
            # Region aggregation does not raise for provider errors, so this
            # only covers unexpected failures of the aggregation itself
            logger.error(f"Region {region} aggregation failed with exception: {outcome.error}")
            return RegionResources(region=region, error=str(outcome.error) or "region aggregation failed")

        region_outcome = outcome.value
        return RegionResources(
            region=region,
            resources=region_outcome.resources,
            error=str(region_outcome.error) if region_outcome.error else "",
        )
