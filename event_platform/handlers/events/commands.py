"""
Event Write API

Mutations of event records:
- Create with ``attribute_not_exists(pk)`` so an existing event is never overwritten
- Partial update of allow-listed fields, stamped with updatedDate/updatedBy
- Hard delete of the resolved record (attendee and participant records are kept)

``attendeeCount`` is initialised here and afterwards only written by the
attendee counter.
"""

import logging
from typing import Any, Dict

from boto3.dynamodb.conditions import Attr

from ...core import TableGateway
from ...exceptions import ConflictError, ItemNotFoundError
from ...models import Event, EventCreate, EventType, EventUpdate, event_sort_key
from ...utils import build_set_expression, utc_now_iso
from .queries import EventReadApi

logger = logging.getLogger(__name__)


class EventWriteApi:
    """
    Write-only API for event mutations.

    Update and delete first resolve the full sort key with a slug-prefix query,
    since callers address events by slug only.
    """

    def __init__(self, gateway: TableGateway, read_api: EventReadApi = None):
        self.gateway = gateway
        self.read_api = read_api or EventReadApi(gateway)

    def create_event(self, event_type: EventType, event_data: EventCreate) -> Event:
        """
        Create an event in the partition named by the path.

        DynamoDB Operation: PutItem with attribute_not_exists(pk)

        Returns:
            The stored Event (pk = event type, sk = '{slug}#{creationDate}', attendeeCount = 0)

        Raises:
            ConflictError: An event with the same key already exists
        """
        event_type = EventType(event_type)
        fields = event_data.model_dump(exclude={'event_type'}, exclude_none=True)
        event = Event(
            **Event.key_for(event_type, event_data.slug, event_data.creation_date),
            event_type=event_type,
            attendee_count=0,
            **fields
        )

        try:
            self.gateway.put_item(event.to_dynamodb_item(), condition_expression=Attr('pk').not_exists())
        except ConflictError as e:
            raise ConflictError("Event already exists", event.sk, original_error=e) from e

        logger.info(f"Created event {event.pk}/{event.sk}")
        return event

    def update_event(
        self,
        event_type: EventType,
        slug: str,
        update: EventUpdate,
        updated_by: str
    ) -> Dict[str, Any]:
        """
        Apply an allow-listed partial update to an event.

        DynamoDB Operation: Query (resolve sk) + UpdateItem with attribute_exists(pk)

        Returns:
            All attributes of the updated record

        Raises:
            ItemNotFoundError: No event with this slug in the partition
            ValidationError: The update carries no fields
        """
        event_type = EventType(event_type)
        existing = self.read_api.find_event(event_type, slug)
        if existing is None:
            raise ItemNotFoundError("Event not found", {'pk': event_type.value, 'slug': slug})

        updates = update.to_updates()
        if updates:
            updates['updatedDate'] = utc_now_iso()
            updates['updatedBy'] = updated_by
        update_expression, names, values = build_set_expression(updates)

        key = {'pk': existing['pk'], 'sk': existing['sk']}
        try:
            attributes = self.gateway.update_item(
                key,
                update_expression,
                expression_attribute_values=values,
                expression_attribute_names=names,
                condition_expression=Attr('pk').exists(),
                return_values='ALL_NEW'
            )
        except ConflictError as e:
            raise ItemNotFoundError("Event not found", key, original_error=e) from e

        logger.info(f"Updated event {key['pk']}/{key['sk']} fields={sorted(names.values())} by {updated_by}")
        return attributes

    def delete_event(self, event_type: EventType, slug: str) -> Dict[str, Any]:
        """
        Delete an event record.

        Attendee and participant partitions of the slug are left in place.

        Returns:
            Key of the deleted record

        Raises:
            ItemNotFoundError: No event with this slug in the partition
        """
        event_type = EventType(event_type)
        existing = self.read_api.find_event(event_type, slug)
        if existing is None:
            raise ItemNotFoundError("Event not found", {'pk': event_type.value, 'slug': slug})

        key = {'pk': existing['pk'], 'sk': existing['sk']}
        try:
            self.gateway.delete_item(key, condition_expression=Attr('pk').exists())
        except ConflictError as e:
            raise ItemNotFoundError("Event not found", key, original_error=e) from e
        logger.info(f"Deleted event {key['pk']}/{key['sk']}")
        return key
