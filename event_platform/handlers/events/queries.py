"""
Event Read API

Events live in two partitions (``FAD`` and ``EVENT``) with sort keys
``{slug}#{creationDate}``. Callers usually know only the slug, so every
single-event lookup is a ``begins_with`` range query on ``{slug}#`` rather than
a GetItem.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from boto3.dynamodb.conditions import Key

from ...core import TableGateway
from ...models import EventType, event_sort_key_prefix

logger = logging.getLogger(__name__)


class EventReadApi:
    """
    Read-only API for event queries.

    Access patterns:
    - Whole partition query for listings (all pages)
    - Slug-prefix query for details
    - Slug-prefix query with ``Limit=1`` to resolve one event's full key
    """

    def __init__(self, gateway: TableGateway):
        self.gateway = gateway

    def list_events(self, event_type: EventType) -> List[Dict[str, Any]]:
        """
        Every record of one event partition.

        DynamoDB Operation: Query on pk, following LastEvaluatedKey
        """
        items = self.gateway.query_all(
            KeyConditionExpression=Key('pk').eq(EventType(event_type).value)
        )
        logger.debug(f"Listed {len(items)} events in {EventType(event_type).value}")
        return items

    def get_event_records(self, event_type: EventType, slug: str) -> List[Dict[str, Any]]:
        """
        Records of one event: every item whose sort key starts with ``{slug}#``.

        Returns:
            Possibly empty list of items
        """
        return self.gateway.query_all(
            KeyConditionExpression=(
                Key('pk').eq(EventType(event_type).value)
                & Key('sk').begins_with(event_sort_key_prefix(slug))
            )
        )

    def find_event(self, event_type: EventType, slug: str) -> Optional[Dict[str, Any]]:
        """
        First event record for a slug in one partition.

        DynamoDB Operation: Query with begins_with and Limit=1

        Returns:
            The item, or None when the partition has no such event
        """
        response = self.gateway.query(
            KeyConditionExpression=(
                Key('pk').eq(EventType(event_type).value)
                & Key('sk').begins_with(event_sort_key_prefix(slug))
            ),
            Limit=1
        )
        items = response.get('Items', [])
        return items[0] if items else None

    def resolve_event(
        self,
        slug: str,
        preferred_type: Optional[str] = None
    ) -> Optional[Tuple[EventType, Dict[str, Any]]]:
        """
        Locate an event by slug alone, probing FAD then EVENT.

        Args:
            slug: Event slug
            preferred_type: Partition to probe first when it is a valid event type

        Returns:
            (event_type, item) of the first match, or None when neither partition has it
        """
        for event_type in EventType.probe_order(preferred_type):
            item = self.find_event(event_type, slug)
            if item is not None:
                return event_type, item
        return None
