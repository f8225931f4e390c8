"""Request schema for the filtered export endpoint."""

from pydantic import BaseModel, Field


class ExportRequest(BaseModel):
    """Filters (same keys as search) and an output format: pdf or excel."""

    filters: dict[str, str] = Field(default_factory=dict, description="Field name -> value")
    format: str = Field(..., min_length=1, description="Output format: pdf or excel")
