# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Service collector: one provider listing for one (region, service kind).

A collector call either returns every normalized resource of the kind in
the region, or raises ``CollectorError``. It never returns resources
together with an error. Collectors share nothing mutable, so a failure
in one cannot disturb another call in flight.
"""

import asyncio
import logging
from typing import Any

from ..clients.aws_client import AWSAPIError, AWSClient
from ..clients.regional_client_factory import RegionalClientFactory
from ..models.enums import ServiceKind
from ..models.resource import Region, Resource
from ..utils.parallel import TaskOutcome
from .normalizer import normalize

logger = logging.getLogger(__name__)

# Result of one collector task after the all-complete join
ServiceOutcome = TaskOutcome[ServiceKind, list[Resource]]


class CollectorError(Exception):
    """One service kind's provider call failed in one region.

    Attributes:
        kind: Service kind whose listing failed
        region: Region the listing was requested for
        cancelled: True if the request deadline stopped the call
    """

    def __init__(
        self,
        kind: ServiceKind,
        region: str,
        message: str,
        cancelled: bool = False,
    ):
        super().__init__(f"{kind.value} in {region}: {message}")
        self.kind = kind
        self.region = region
        self.cancelled = cancelled


class ServiceCollector:
    """
    Collects and normalizes resources of one service kind in one region.

    Global kinds (S3, IAM) are listed through the anchor region's client,
    since their listing call has to be issued against some region.
    """

    def __init__(
        self,
        client_factory: RegionalClientFactory,
        anchor_region: str = "us-east-1",
    ):
        """
        Initialize with a client factory.

        Args:
            client_factory: Factory handing out per-region AWS clients
            anchor_region: Region used to issue global listing calls
        """
        self.client_factory = client_factory
        self.anchor_region = anchor_region

    async def collect(
        self,
        region: str,
        kind: ServiceKind,
        deadline: float | None = None,
    ) -> list[Resource]:
        """
        List and normalize all resources of ``kind`` in ``region``.

        Args:
            region: AWS region code to collect in
            kind: Service kind to collect
            deadline: Optional absolute event-loop time after which the
                      call is abandoned

        Returns:
            Normalized resources, possibly empty

        Raises:
            CollectorError: If the provider call fails or the deadline passes
        """
        api_region = self.anchor_region if kind.is_global else region
        logger.debug(f"Collecting {kind.value} in {region} via {api_region} API")

        try:
            client = self.client_factory.get_client(api_region)
            records = await self._with_deadline(self._fetch_records(client, kind), deadline)
            resource_region = Region.regional(region)
            resources = [normalize(record, kind, resource_region) for record in records]

        except asyncio.TimeoutError as e:
            raise CollectorError(
                kind, region, "request deadline exceeded", cancelled=True
            ) from e

        except AWSAPIError as e:
            raise CollectorError(kind, region, str(e)) from e

        except Exception as e:
            raise CollectorError(kind, region, f"unexpected error: {e}") from e

        logger.debug(f"Collected {len(resources)} {kind.value} resources in {region}")
        return resources

    async def _with_deadline(self, awaitable, deadline: float | None) -> Any:
        if deadline is None:
            return await awaitable

        remaining = deadline - asyncio.get_running_loop().time()
        if remaining <= 0:
            # Close the coroutine so it is not reported as never awaited
            awaitable.close()
            raise asyncio.TimeoutError()
        return await asyncio.wait_for(awaitable, timeout=remaining)

    async def _fetch_records(self, client: AWSClient, kind: ServiceKind) -> list[dict[str, Any]]:
        if kind is ServiceKind.EC2_INSTANCE:
            return await client.describe_ec2_instances()
        if kind is ServiceKind.S3_BUCKET:
            return await client.list_s3_buckets()
        if kind is ServiceKind.RDS_INSTANCE:
            return await client.describe_rds_instances()
        if kind is ServiceKind.LAMBDA_FUNCTION:
            return await client.list_lambda_functions()
        if kind is ServiceKind.ECS_CLUSTER:
            return await self._fetch_ecs_clusters(client)
        if kind is ServiceKind.IAM_USER:
            return await client.list_iam_users()
        raise ValueError(f"Unsupported service kind: {kind}")

    async def _fetch_ecs_clusters(self, client: AWSClient) -> list[dict[str, Any]]:
        cluster_arns = await client.list_ecs_cluster_arns()
        if not cluster_arns:
            return []
        return await client.describe_ecs_clusters(cluster_arns)
