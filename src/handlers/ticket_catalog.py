"""Handler for GET /tickets: newest-first catalog plus check-in stats."""

import uuid
from typing import Optional

from models.catalog import CatalogResponse
from services import wiring
from utils.error_handling import AppError, to_response
from utils.http import json_response, require_actor_id
from utils.logging_config import get_logger

logger = get_logger(__name__)

# Survives warm invocations; refreshed from a store snapshot on every request
_projection: Optional["CatalogProjection"] = None


def _get_projection():
    """Lazy-load CatalogProjection."""
    global _projection
    if _projection is None:
        from services.catalog_projection import CatalogProjection

        _projection = CatalogProjection(wiring.get_settings().revenue_per_ticket)
    return _projection


def lambda_handler(event, context):
    """Return the ticket catalog and aggregates."""
    correlation_id = str(uuid.uuid4())
    try:
        require_actor_id(event)
    except AppError as exc:
        return to_response(exc)

    query_params = event.get("queryStringParameters") or {}

    multiplier = query_params.get("revenue_per_ticket")
    try:
        multiplier = float(multiplier) if multiplier is not None else None
    except ValueError:
        return json_response(422, {"message": "revenue_per_ticket must be a number"})

    try:
        projection = _get_projection()
        projection.apply_snapshot(wiring.get_ticket_store().list_tickets())
    except AppError as exc:
        logger.warning(
            "Catalog refresh failed",
            extra={"correlation_id": correlation_id, "error": str(exc)},
        )
        return to_response(exc)

    response = CatalogResponse(
        tickets=projection.tickets(),
        stats=projection.stats(multiplier),
    )
    logger.info(
        "Catalog served",
        extra={"correlation_id": correlation_id, "total": response.stats.total},
    )
    return json_response(200, response.model_dump_json())
