# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Inventory report data models.

This module contains the Pydantic models returned by the inventory
aggregation: one ``RegionResources`` entry per requested region and the
``InventoryReport`` that wraps them with a total resource count.
"""

from typing import Any

from pydantic import BaseModel, Field, model_serializer, model_validator

from .resource import Resource


class ListResourcesRequest(BaseModel):
    """Request body for the resource listing endpoint."""

    regions: list[str] = Field(..., description="AWS region codes to inventory")


class RegionResources(BaseModel):
    """Resources collected for a single region.

    ``error`` is non-empty when at least one service collector failed in
    the region. Resources from the collectors that succeeded are kept.
    Resource order is unspecified.
    """

    region: str = Field(..., description="AWS region code")
    resources: list[Resource] = Field(
        default_factory=list,
        description="Resources collected in this region"
    )
    error: str = Field(
        default="",
        description="Summary of collector failures, empty on full success"
    )

    @model_serializer(mode="wrap")
    def _omit_empty_error(self, handler) -> dict[str, Any]:
        data = handler(self)
        if not data.get("error"):
            data.pop("error", None)
        return data

    @property
    def has_error(self) -> bool:
        return bool(self.error)


class InventoryReport(BaseModel):
    """Consolidated inventory across all requested regions.

    ``total_count`` always equals the number of resources over every
    entry, including entries that also carry an error.
    """

    region_data: list[RegionResources] = Field(
        default_factory=list,
        description="One entry per requested region, order unspecified"
    )
    total_count: int = Field(
        default=0,
        ge=0,
        description="Total resources across all regions"
    )

    @model_validator(mode="after")
    def _check_total_count(self) -> "InventoryReport":
        expected = sum(len(entry.resources) for entry in self.region_data)
        if self.total_count != expected:
            raise ValueError(
                f"total_count {self.total_count} does not match "
                f"{expected} resources in region_data"
            )
        return self

    @classmethod
    def from_region_data(cls, region_data: list[RegionResources]) -> "InventoryReport":
        """Build a report, computing the total from the entries."""
        total = sum(len(entry.resources) for entry in region_data)
        return cls(region_data=region_data, total_count=total)

    @property
    def failed_regions(self) -> list[str]:
        """Regions whose entry carries an error."""
        return [entry.region for entry in self.region_data if entry.has_error]

    def get_region(self, region: str) -> RegionResources | None:
        for entry in self.region_data:
            if entry.region == region:
                return entry
        return None
