# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Region aggregator: all applicable service collectors of one region.

Collectors of a region run concurrently behind an all-complete barrier.
Each collector task returns its own result, and the merge happens in one
pass after the join, so no lock guards the accumulators. Resources from
succeeding collectors are always kept, even when others failed.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from ..models.enums import GLOBAL_SERVICE_KINDS, REGIONAL_SERVICE_KINDS, ServiceKind
from ..models.resource import Resource
from ..utils.parallel import gather_all
from .service_collector import CollectorError, ServiceCollector, ServiceOutcome

logger = logging.getLogger(__name__)


class RegionError(Exception):
    """One or more service collectors failed in a region.

    Accompanies, never replaces, the resources that were collected.
    """

    def __init__(self, region: str, errors: list[CollectorError]):
        failed_kinds = ", ".join(error.kind.value for error in errors)
        super().__init__(
            f"encountered {len(errors)} errors while listing resources "
            f"in {region} ({failed_kinds})"
        )
        self.region = region
        self.errors = errors

    @property
    def count(self) -> int:
        return len(self.errors)


@dataclass
class RegionOutcome:
    """Merged resources of one region plus the reduced error, if any."""

    resources: list[Resource] = field(default_factory=list)
    error: RegionError | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class RegionAggregator:
    """
    Runs every applicable service collector of a region in parallel.

    Regional kinds (EC2, RDS, Lambda, ECS) apply to every region. Global
    kinds (S3, IAM) apply only to the anchor region, so account-level
    resources are reported once per inventory instead of once per region.
    """

    def __init__(self, collector: ServiceCollector, anchor_region: str = "us-east-1"):
        """
        Initialize with a service collector.

        Args:
            collector: Collector used for every (region, kind) pair
            anchor_region: The only region where global kinds are collected
        """
        self.collector = collector
        self.anchor_region = anchor_region

    def applicable_kinds(self, region: str) -> list[ServiceKind]:
        """
        Get the service kinds to collect in a region.

        Args:
            region: AWS region code

        Returns:
            Regional kinds, plus the global kinds when region is the anchor
        """
        kinds = list(REGIONAL_SERVICE_KINDS)
        if region == self.anchor_region:
            kinds.extend(kind for kind in ServiceKind if kind in GLOBAL_SERVICE_KINDS)
        return kinds

    async def aggregate(self, region: str, deadline: float | None = None) -> RegionOutcome:
        """
        Collect all applicable service kinds of a region concurrently.

        Args:
            region: AWS region code
            deadline: Optional absolute event-loop deadline passed to
                      every collector

        Returns:
            RegionOutcome with the merged resources and, if any collector
            failed, a RegionError counting the failures
        """
        kinds = self.applicable_kinds(region)
        logger.debug(f"Aggregating {len(kinds)} service kinds in {region}")

        async def collect(kind: ServiceKind) -> list[Resource]:
            return await self.collector.collect(region, kind, deadline)

        outcomes: list[ServiceOutcome] = await gather_all(kinds, collect)
        return self._merge(region, outcomes)

    def _merge(self, region: str, outcomes: list[ServiceOutcome]) -> RegionOutcome:
        resources: list[Resource] = []
        errors: list[CollectorError] = []
        seen_keys: set[tuple[str, str, str]] = set()

        for outcome in outcomes:
            if not outcome.succeeded:
                error = self._as_collector_error(region, outcome)
                logger.warning(f"Collector failed: {error}")
                errors.append(error)
                continue

            for resource in outcome.value:
                if resource.key in seen_keys:
                    continue
                seen_keys.add(resource.key)
                resources.append(resource)

        if errors:
            region_error = RegionError(region, errors)
            logger.warning(
                f"Region {region}: {region_error.count} of {len(outcomes)} collectors "
                f"failed, keeping {len(resources)} collected resources"
            )
            return RegionOutcome(resources=resources, error=region_error)

        logger.debug(f"Region {region}: collected {len(resources)} resources")
        return RegionOutcome(resources=resources)

    def _as_collector_error(self, region: str, outcome: ServiceOutcome) -> CollectorError:
        if isinstance(outcome.error, CollectorError):
            return outcome.error
        cancelled = isinstance(outcome.error, asyncio.CancelledError)
        error = CollectorError(
            outcome.key,
            region,
            "cancelled" if cancelled else f"unexpected error: {outcome.error}",
            cancelled=cancelled,
        )
        error.__cause__ = outcome.error
        return error
