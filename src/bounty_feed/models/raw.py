"""Raw upstream item representation before normalization."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RawRecord(BaseModel):
    """
    Flexible raw item from a source connector.
    Connectors populate this from API JSON items, synthesized leads, etc.
    """

    model_config = ConfigDict(extra="allow")

    data: dict[str, Any] = Field(default_factory=dict)
