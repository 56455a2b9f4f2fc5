"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Database connectivity status when check is performed",
    )
    cached_members: int = Field(default=0, ge=0, description="Entries in the member read cache")
