"""Acknowledgement envelope for handlers without a richer response model."""

from typing import Any, Optional
from pydantic import BaseModel


class ApiResponse(BaseModel):
    """Message plus optional data, tagged with the request's correlation id."""

    message: str
    data: Optional[Any] = None
    correlation_id: Optional[str] = None
