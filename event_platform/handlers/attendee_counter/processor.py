"""
Attendee Counter Stream Processor

Consumes DynamoDB Stream batches of the platform table and keeps the
denormalized ``attendeeCount`` of each event in step with its attendee records.

Per record, in order:

1. Only records whose ``pk`` ends with ``#ATTENDEE`` are considered; the slug
   is the part of the key before that suffix.
2. INSERT adds one, REMOVE subtracts one, MODIFY changes nothing.
3. The owning event is resolved by slug (the attendee's own eventType first
   when it has one, then FAD, then EVENT). An unresolvable event is logged
   and skipped.
4. The change is one server-side ``ADD`` on the event record. Decrements are
   conditional on a positive counter; when that condition fails the counter
   is set to zero instead, so it never goes negative.

Any other error propagates so the stream consumer retries the whole batch.
Redelivered INSERTs are counted again; there is no deduplication.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from boto3.dynamodb.types import TypeDeserializer
from pydantic import BaseModel

from ...core import TableGateway
from ...exceptions import ConflictError
from ...models import slug_from_attendee_partition_key
from ..events import EventReadApi

logger = logging.getLogger(__name__)

INSERT = 'INSERT'
MODIFY = 'MODIFY'
REMOVE = 'REMOVE'

PROCESSED = 'processed'
SKIPPED = 'skipped'
UNRESOLVED = 'unresolved'

DECREMENT_CONDITION = "attribute_exists(attendeeCount) AND attendeeCount > :zero"

_deserializer = TypeDeserializer()


def _deserialize_image(image: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not image:
        return {}
    return {name: _deserializer.deserialize(value) for name, value in image.items()}


class BatchSummary(BaseModel):
    """Outcome counts of one stream batch."""

    processed: int = 0
    skipped: int = 0
    unresolved: int = 0

    def record(self, outcome: str) -> None:
        setattr(self, outcome, getattr(self, outcome) + 1)


class AttendeeCounterProcessor:
    """
    Applies attendee INSERT/REMOVE stream records to event ``attendeeCount``.
    """

    def __init__(self, gateway: TableGateway, event_reader: Optional[EventReadApi] = None):
        self.gateway = gateway
        self.event_reader = event_reader or EventReadApi(gateway)

    def process_batch(self, records: Iterable[Dict[str, Any]]) -> BatchSummary:
        """
        Process stream records sequentially, in delivery order.

        Returns:
            Counts of processed, skipped and unresolved records

        Raises:
            EventPlatformError: Any store error other than the handled ones
        """
        summary = BatchSummary()
        for record in records:
            summary.record(self.process_record(record))
        logger.info(
            f"Attendee counter batch done: processed={summary.processed} "
            f"skipped={summary.skipped} unresolved={summary.unresolved}"
        )
        return summary

    def process_record(self, record: Dict[str, Any]) -> str:
        """
        Process one stream record.

        Returns:
            One of ``processed``, ``skipped`` or ``unresolved``
        """
        event_name = record.get('eventName')
        stream_data = record.get('dynamodb') or {}

        keys = _deserialize_image(stream_data.get('Keys'))
        new_image = _deserialize_image(stream_data.get('NewImage'))
        old_image = _deserialize_image(stream_data.get('OldImage'))

        pk = keys.get('pk') or new_image.get('pk') or old_image.get('pk')
        slug = slug_from_attendee_partition_key(pk)
        if slug is None:
            return SKIPPED

        if event_name == MODIFY:
            logger.debug(f"Ignoring MODIFY of attendee {pk}/{keys.get('sk')}")
            return SKIPPED
        if event_name not in (INSERT, REMOVE):
            logger.warning(f"Skipping stream record with unknown eventName {event_name!r} for {pk}")
            return SKIPPED

        image = new_image if event_name == INSERT else old_image
        resolved = self.event_reader.resolve_event(slug, image.get('eventType'))
        if resolved is None:
            logger.warning(f"No event found for slug '{slug}', attendeeCount not updated ({event_name})")
            return UNRESOLVED

        _, event_item = resolved
        event_key = {'pk': event_item['pk'], 'sk': event_item['sk']}
        if event_name == INSERT:
            self.increment(event_key)
        else:
            self.decrement(event_key)
        return PROCESSED

    def increment(self, event_key: Dict[str, Any]) -> None:
        self.gateway.update_item(
            event_key,
            "ADD attendeeCount :inc",
            expression_attribute_values={':inc': 1}
        )
        logger.info(f"Incremented attendeeCount of {event_key['pk']}/{event_key['sk']}")

    def decrement(self, event_key: Dict[str, Any]) -> None:
        """
        Subtract one from attendeeCount, clamping at zero.

        A failed ``attendeeCount > 0`` condition (counter missing or already
        zero) resets the counter to zero unconditionally.
        """
        try:
            self.gateway.update_item(
                event_key,
                "ADD attendeeCount :dec",
                expression_attribute_values={':dec': -1, ':zero': 0},
                condition_expression=DECREMENT_CONDITION
            )
            logger.info(f"Decremented attendeeCount of {event_key['pk']}/{event_key['sk']}")
        except ConflictError:
            logger.warning(
                f"attendeeCount of {event_key['pk']}/{event_key['sk']} is missing or zero, resetting to 0"
            )
            self.gateway.update_item(
                event_key,
                "SET attendeeCount = :zero",
                expression_attribute_values={':zero': 0}
            )
