# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""AWS client wrapper exposing one listing capability per service kind.

Each method issues the provider call(s) for one service in one region and
returns the raw records as boto3 delivers them. Blocking boto3 calls run
on a worker thread so many regions and services can be queried at once.
"""

import asyncio
import functools
import logging
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class AWSAPIError(Exception):
    """Raised when AWS API calls fail."""

    def __init__(
        self,
        message: str,
        service: str = "",
        operation: str = "",
        error_code: str = "",
    ):
        super().__init__(message)
        self.service = service
        self.operation = operation
        self.error_code = error_code


class AWSClient:
    """
    Wrapper around the boto3 clients of a single region.

    Service clients are created lazily from a shared boto3 session, so a
    region that never queries IAM never builds an IAM client. No retry
    logic is applied beyond what botocore itself does.
    """

    def __init__(
        self,
        region: str = "us-east-1",
        session: boto3.Session | None = None,
        boto_config: Config | None = None,
        endpoint_url: str | None = None,
    ):
        """
        Initialize the regional client.

        Args:
            region: AWS region all service clients are bound to
            session: boto3 session carrying the credentials; a default
                     session is created when omitted
            boto_config: Optional botocore Config merged into every client
            endpoint_url: Optional endpoint override (e.g. LocalStack)
        """
        self.region = region
        self._session = session or boto3.Session()
        config = Config(region_name=region)
        self._config = config.merge(boto_config) if boto_config else config
        self._endpoint_url = endpoint_url
        self._clients: dict[str, Any] = {}

    def _client(self, service_name: str) -> Any:
        client = self._clients.get(service_name)
        if client is None:
            logger.debug(f"Creating {service_name} client for region {self.region}")
            client = self._session.client(
                service_name,
                region_name=self.region,
                config=self._config,
                endpoint_url=self._endpoint_url,
            )
            self._clients[service_name] = client
        return client

    @property
    def ec2(self) -> Any:
        return self._client("ec2")

    @property
    def s3(self) -> Any:
        return self._client("s3")

    @property
    def rds(self) -> Any:
        return self._client("rds")

    @property
    def lambda_client(self) -> Any:
        return self._client("lambda")

    @property
    def ecs(self) -> Any:
        return self._client("ecs")

    @property
    def iam(self) -> Any:
        return self._client("iam")

    async def _call(self, service_name: str, operation: str, **kwargs) -> dict[str, Any]:
        """
        Call one AWS API operation on a worker thread.

        Args:
            service_name: boto3 service name (e.g. "ec2")
            operation: Client method name (e.g. "describe_instances")
            **kwargs: Keyword arguments for the operation

        Returns:
            Response from AWS API

        Raises:
            AWSAPIError: If the client cannot be built or the call fails
        """
        try:
            func = getattr(self._client(service_name), operation)
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(None, functools.partial(func, **kwargs))

        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            raise AWSAPIError(
                f"AWS API error: {error_code} - {str(e)}",
                service=service_name,
                operation=operation,
                error_code=error_code,
            ) from e

        except BotoCoreError as e:
            raise AWSAPIError(
                f"Boto3 error: {str(e)}",
                service=service_name,
                operation=operation,
            ) from e

    async def describe_ec2_instances(self) -> list[dict[str, Any]]:
        """Fetch EC2 instances, flattened out of their reservations."""
        response = await self._call("ec2", "describe_instances")
        return [
            instance
            for reservation in response.get("Reservations", [])
            for instance in reservation.get("Instances", [])
        ]

    async def list_s3_buckets(self) -> list[dict[str, Any]]:
        """Fetch all S3 buckets of the account."""
        response = await self._call("s3", "list_buckets")
        return response.get("Buckets", [])

    async def describe_rds_instances(self) -> list[dict[str, Any]]:
        """Fetch RDS DB instances."""
        response = await self._call("rds", "describe_db_instances")
        return response.get("DBInstances", [])

    async def list_lambda_functions(self) -> list[dict[str, Any]]:
        """Fetch Lambda function configurations."""
        response = await self._call("lambda", "list_functions")
        return response.get("Functions", [])

    async def list_ecs_cluster_arns(self) -> list[str]:
        """Fetch the ARNs of all ECS clusters."""
        response = await self._call("ecs", "list_clusters")
        return response.get("clusterArns", [])

    async def describe_ecs_clusters(self, cluster_arns: list[str]) -> list[dict[str, Any]]:
        """
        Describe ECS clusters in one batched call.

        Args:
            cluster_arns: Cluster ARNs as returned by ``list_ecs_cluster_arns``

        Returns:
            Cluster descriptions; clusters reported under ``failures`` are skipped
        """
        response = await self._call("ecs", "describe_clusters", clusters=cluster_arns)
        failures = response.get("failures", [])
        if failures:
            logger.warning(
                f"ECS describe_clusters in {self.region} reported "
                f"{len(failures)} failures: {failures}"
            )
        return response.get("clusters", [])

    async def list_iam_users(self) -> list[dict[str, Any]]:
        """Fetch IAM users of the account."""
        response = await self._call("iam", "list_users")
        return response.get("Users", [])
