# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Health check data models."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class HealthStatus(BaseModel):
    """Health status response for the inventory server."""

    status: str = Field(
        ...,
        description="Overall health status",
        examples=["healthy"]
    )
    service: str = Field(
        default="cloudy",
        description="Service name"
    )
    version: str = Field(
        ...,
        description="Version of the inventory server",
        examples=["1.0.0"]
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Timestamp when health check was performed"
    )
