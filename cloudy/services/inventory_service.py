# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Inventory service wiring one request's collectors and aggregators.

The service is protocol-agnostic: the HTTP endpoint and the command line
both call ``list_resources``. Each call builds its own client factory and
aggregators, so no mutable state survives between requests.
"""

import logging
from typing import Callable

from ..clients.regional_client_factory import RegionalClientFactory
from ..config import Settings
from ..models.inventory import InventoryReport
from .inventory_aggregator import InventoryAggregator
from .region_aggregator import RegionAggregator
from .service_collector import ServiceCollector

logger = logging.getLogger(__name__)


class InventoryService:
    """
    Lists resources across regions for one request.

    Usage::

        service = InventoryService(settings())
        report = await service.list_resources(["us-east-1", "eu-west-1"])
    """

    def __init__(
        self,
        settings: Settings,
        client_factory_builder: Callable[[Settings], RegionalClientFactory] | None = None,
    ):
        """
        Create an InventoryService.

        Args:
            settings: Application settings
            client_factory_builder: Builds the per-request client factory;
                                    defaults to ``RegionalClientFactory.from_settings``
        """
        self.settings = settings
        self._client_factory_builder = (
            client_factory_builder or RegionalClientFactory.from_settings
        )

    def build_aggregator(self) -> InventoryAggregator:
        """
        Build the aggregation pipeline for one request.

        Returns:
            InventoryAggregator wired to a fresh client factory

        Raises:
            ClientInitError: If the AWS credential context cannot be built
        """
        client_factory = self._client_factory_builder(self.settings)
        anchor_region = self.settings.anchor_region
        collector = ServiceCollector(client_factory, anchor_region=anchor_region)
        region_aggregator = RegionAggregator(collector, anchor_region=anchor_region)
        return InventoryAggregator(
            region_aggregator,
            max_concurrent_regions=self.settings.max_concurrent_regions,
        )

    async def list_resources(self, regions: list[str]) -> InventoryReport:
        """
        Inventory the given regions.

        Args:
            regions: Validated, non-empty list of AWS region codes

        Returns:
            InventoryReport; provider failures appear as per-region errors

        Raises:
            ClientInitError: Before any region is queried, if the AWS
                             credential context cannot be built
        """
        aggregator = self.build_aggregator()
        return await aggregator.run(regions, timeout_seconds=self.settings.request_timeout)
