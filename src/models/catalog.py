"""Catalog projection models."""

from typing import List

from pydantic import BaseModel, Field

from models.ticket import Ticket


class CatalogStats(BaseModel):
    """Aggregates derived from the current catalog snapshot."""

    total: int = Field(ge=0)
    used: int = Field(ge=0)
    revenue: float


class CatalogResponse(BaseModel):
    """Response for GET /tickets."""

    tickets: List[Ticket] = Field(default_factory=list)
    stats: CatalogStats
