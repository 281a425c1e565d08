"""DynamoDB-backed ticket store."""

from __future__ import annotations

import time
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError as PydanticValidationError

from models.ticket import Ticket
from repositories.ticket_store import TicketStore, to_item
from utils.error_handling import StoreUnavailable
from utils.logging_config import get_logger

logger = get_logger(__name__)

CONDITION_FAILED = "ConditionalCheckFailedException"


class DynamoDbTicketStore(TicketStore):
    """
    Tickets table keyed by ``id``.

    The redemption write relies on DynamoDB evaluating ConditionExpression
    and applying the update as one step, so concurrent scans of the same id
    cannot both succeed.
    """

    def __init__(
        self,
        table_name: str,
        table=None,
        poll_seconds: float = 5.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.table = table if table is not None else boto3.resource("dynamodb").Table(table_name)
        self.poll_seconds = poll_seconds
        self._sleep = sleep

    def create(self, record: Dict[str, Any]) -> Ticket:
        item = to_item(record)
        item["id"] = uuid.uuid4().hex
        item["created_at"] = datetime.now(timezone.utc).isoformat()
        ticket = Ticket.model_validate(item)
        try:
            self.table.put_item(
                Item=item,
                ConditionExpression="attribute_not_exists(#id)",
                ExpressionAttributeNames={"#id": "id"},
            )
        except (ClientError, BotoCoreError) as exc:
            raise self._unavailable("put_item", exc) from exc
        return ticket

    def get(self, ticket_id: str) -> Optional[Ticket]:
        try:
            resp = self.table.get_item(Key={"id": ticket_id}, ConsistentRead=True)
        except (ClientError, BotoCoreError) as exc:
            raise self._unavailable("get_item", exc) from exc
        item = resp.get("Item")
        return self._to_ticket(item, "get_item") if item else None

    def conditional_update(
        self,
        ticket_id: str,
        expected: Dict[str, Any],
        patch: Dict[str, Any],
    ) -> Optional[Ticket]:
        names: Dict[str, str] = {"#id": "id"}
        values: Dict[str, Any] = {}

        set_parts = []
        for i, (field, value) in enumerate(to_item(patch).items()):
            names[f"#p{i}"] = field
            values[f":p{i}"] = value
            set_parts.append(f"#p{i} = :p{i}")

        conditions = ["attribute_exists(#id)"]
        for i, (field, value) in enumerate(to_item(expected).items()):
            names[f"#e{i}"] = field
            values[f":e{i}"] = value
            conditions.append(f"#e{i} = :e{i}")

        try:
            resp = self.table.update_item(
                Key={"id": ticket_id},
                UpdateExpression="SET " + ", ".join(set_parts),
                ConditionExpression=" AND ".join(conditions),
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
                ReturnValues="ALL_NEW",
            )
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == CONDITION_FAILED:
                return None
            raise self._unavailable("update_item", exc) from exc
        except BotoCoreError as exc:
            raise self._unavailable("update_item", exc) from exc
        return self._to_ticket(resp["Attributes"], "update_item")

    def list_tickets(self) -> List[Ticket]:
        items: List[Dict[str, Any]] = []
        kwargs: Dict[str, Any] = {"ConsistentRead": True}
        try:
            while True:
                resp = self.table.scan(**kwargs)
                items.extend(resp.get("Items", []))
                last_key = resp.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as exc:
            raise self._unavailable("scan", exc) from exc
        return [self._to_ticket(item, "scan") for item in items]

    def subscribe(self) -> Iterator[List[Ticket]]:
        """
        Poll the table and yield a snapshot whenever it differs from the last.

        Staleness is bounded by ``poll_seconds``.
        """
        last = None
        while True:
            snapshot = self.list_tickets()
            fingerprint = sorted(t.model_dump_json() for t in snapshot)
            if fingerprint != last:
                last = fingerprint
                yield snapshot
            self._sleep(self.poll_seconds)

    def _unavailable(self, operation: str, exc: Exception) -> StoreUnavailable:
        logger.error(
            "DynamoDB call failed",
            extra={"operation": operation, "error": str(exc)},
        )
        return StoreUnavailable(f"Ticket store unavailable during {operation}")

    def _to_ticket(self, item: Dict[str, Any], operation: str) -> Ticket:
        """Parse a stored item; a record that does not fit the model is a store fault."""
        try:
            return Ticket.model_validate(item)
        except PydanticValidationError as exc:
            raise self._unavailable(operation, exc) from exc
