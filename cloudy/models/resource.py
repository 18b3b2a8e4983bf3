# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""AWS resource data model.

A ``Resource`` is the uniform shape every provider record is normalized
into. Its ``region`` is a tagged ``Region`` value: either a concrete region
code or the global sentinel used by account-level services. The literal
text ``"global"`` only appears in serialized output.
"""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_serializer,
)

from .enums import ServiceKind

GLOBAL_REGION_NAME = "global"


class Region(BaseModel):
    """Region a resource belongs to.

    ``code`` is ``None`` for global resources. Use ``Region.regional()``
    or ``GLOBAL_REGION`` rather than constructing directly.
    """

    model_config = ConfigDict(frozen=True)

    code: str | None = Field(
        default=None,
        description="AWS region code, or None for region-independent resources"
    )

    @field_validator("code")
    @classmethod
    def _validate_code(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("region code must not be empty")
        if value.lower() == GLOBAL_REGION_NAME:
            raise ValueError("'global' is not a regional code, use GLOBAL_REGION")
        return value

    @classmethod
    def regional(cls, code: str) -> "Region":
        """Build a region bound to a concrete AWS region code."""
        return cls(code=code)

    @classmethod
    def parse(cls, text: str) -> "Region":
        """Parse serialized region text back into a Region."""
        if text.strip().lower() == GLOBAL_REGION_NAME:
            return GLOBAL_REGION
        return cls.regional(text)

    @property
    def is_global(self) -> bool:
        return self.code is None

    def __str__(self) -> str:
        return self.code if self.code is not None else GLOBAL_REGION_NAME


GLOBAL_REGION = Region()


class Resource(BaseModel):
    """Represents one AWS resource in the uniform inventory shape.

    Immutable once constructed. Absent optional values are empty strings.
    Empty ``tags`` and ``attributes`` are omitted when serialized.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Provider-assigned identifier (ARN, instance ID, name)")
    name: str = Field(default="", description="Human label, may be empty")
    type: ServiceKind = Field(..., description="Service kind of the resource")
    state: str = Field(default="", description="Lifecycle status, empty when not applicable")
    region: Region = Field(..., description="Region code or the global sentinel")
    tags: dict[str, str] = Field(
        default_factory=dict,
        description="Tags associated with the resource"
    )
    attributes: dict[str, str] = Field(
        default_factory=dict,
        description="Service-specific metadata, keys fixed per type"
    )

    @field_validator("region", mode="before")
    @classmethod
    def _coerce_region(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Region.parse(value)
        return value

    @field_serializer("region")
    def _serialize_region(self, region: Region) -> str:
        return str(region)

    @model_serializer(mode="wrap")
    def _omit_empty_maps(self, handler) -> dict[str, Any]:
        data = handler(self)
        for key in ("tags", "attributes"):
            if not data.get(key):
                data.pop(key, None)
        return data

    @property
    def key(self) -> tuple[str, str, str]:
        """Identity of the resource within one collection pass."""
        return (self.id, self.type.value, str(self.region))
