# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Factory for creating and caching regional AWS clients."""

import logging
from typing import TYPE_CHECKING
from urllib.parse import urlparse

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError

from .aws_client import AWSClient

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)


class ClientInitError(Exception):
    """Raised when the AWS credential/configuration context cannot be built.

    This is the only failure that aborts a whole inventory request: every
    region needs the session, so nothing is attempted without it.
    """

    pass


class RegionalClientFactory:
    """
    Factory for creating and caching regional AWS clients.

    Reuses clients within a request to avoid repeated initialization.
    All clients share one boto3 session and the same botocore
    configuration (timeouts, endpoint override).
    """

    def __init__(
        self,
        session: boto3.Session | None = None,
        default_region: str = "us-east-1",
        boto_config: Config | None = None,
        endpoint_url: str | None = None,
    ):
        """
        Initialize with a session, default region and boto3 config.

        Args:
            session: boto3 session holding the credentials. If None, a
                     default session is created.
            default_region: Default AWS region code (e.g., "us-east-1")
            boto_config: Optional botocore Config applied to all clients
            endpoint_url: Optional endpoint override applied to all clients
        """
        self._session = session or boto3.Session(region_name=default_region)
        self._boto_config = boto_config
        self._endpoint_url = endpoint_url
        self._clients: dict[str, AWSClient] = {}

        logger.debug(
            f"RegionalClientFactory initialized with default_region={default_region}"
        )

    @classmethod
    def create(
        cls,
        default_region: str = "us-east-1",
        profile_name: str | None = None,
        boto_config: Config | None = None,
        endpoint_url: str | None = None,
    ) -> "RegionalClientFactory":
        """
        Build the credential context and a factory around it.

        Args:
            default_region: Default AWS region code
            profile_name: Optional named profile from the shared config files
            boto_config: Optional botocore Config applied to all clients
            endpoint_url: Optional endpoint override

        Returns:
            RegionalClientFactory ready to hand out regional clients

        Raises:
            ClientInitError: If the session or endpoint cannot be set up
        """
        if endpoint_url:
            parsed = urlparse(endpoint_url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ClientInitError(f"invalid AWS endpoint URL: {endpoint_url!r}")

        try:
            session = boto3.Session(profile_name=profile_name, region_name=default_region)
        except BotoCoreError as e:
            raise ClientInitError(f"unable to load SDK config: {e}") from e

        return cls(
            session=session,
            default_region=default_region,
            boto_config=boto_config,
            endpoint_url=endpoint_url,
        )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "RegionalClientFactory":
        """Build a factory from application settings."""
        boto_config = Config(
            connect_timeout=settings.aws_connect_timeout_seconds,
            read_timeout=settings.aws_read_timeout_seconds,
        )
        return cls.create(
            default_region=settings.anchor_region,
            profile_name=settings.aws_profile,
            boto_config=boto_config,
            endpoint_url=settings.aws_endpoint_url,
        )

    def get_client(self, region: str) -> AWSClient:
        """
        Get or create an AWS client for the specified region.

        Calling this method multiple times with the same region
        returns the exact same AWSClient instance.

        Args:
            region: AWS region code (e.g., "us-east-1", "eu-west-1")

        Returns:
            AWSClient configured for the specified region
        """
        if region in self._clients:
            return self._clients[region]

        logger.debug(f"Creating new AWS client for region {region}")
        client = AWSClient(
            region=region,
            session=self._session,
            boto_config=self._boto_config,
            endpoint_url=self._endpoint_url,
        )
        self._clients[region] = client
        return client
