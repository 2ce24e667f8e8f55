"""
Attendee Read API

Attendees of an event share the partition ``{eventSlug}#ATTENDEE`` and are
keyed by email, so a listing is a single-partition query and a lookup is a
GetItem.
"""

import logging
from typing import Any, Dict, List, Optional

from boto3.dynamodb.conditions import Key

from ...core import TableGateway
from ...models import Attendee, AttendeeView, attendee_partition_key

logger = logging.getLogger(__name__)


class AttendeeReadApi:
    """Read-only API for attendee queries."""

    def __init__(self, gateway: TableGateway):
        self.gateway = gateway

    def get_attendee(self, event_slug: str, email: str) -> Optional[Dict[str, Any]]:
        """
        Get one attendee record.

        DynamoDB Operation: GetItem on ``{eventSlug}#ATTENDEE`` / email

        Returns:
            The raw item, or None when the attendee does not exist
        """
        return self.gateway.get_item(Attendee.key_for(event_slug, email))

    def list_attendees(self, event_slug: str) -> List[AttendeeView]:
        """
        Every attendee of an event, keys stripped.

        DynamoDB Operation: Query on pk, following LastEvaluatedKey
        """
        items = self.gateway.query_all(
            KeyConditionExpression=Key('pk').eq(attendee_partition_key(event_slug))
        )
        return [AttendeeView.from_dynamodb_item(item) for item in items]
