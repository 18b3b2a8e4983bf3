# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""AWS client wrapper module."""

from .aws_client import AWSAPIError, AWSClient
from .regional_client_factory import ClientInitError, RegionalClientFactory

__all__ = ["AWSClient", "AWSAPIError", "RegionalClientFactory", "ClientInitError"]
