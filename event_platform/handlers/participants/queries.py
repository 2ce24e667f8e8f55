"""
Participant Read API

Participants of an event share the partition ``{eventSlug}#PARTICIPANT``.
"""

import logging
from typing import List

from boto3.dynamodb.conditions import Key

from ...core import TableGateway
from ...models import ParticipantView, participant_partition_key

logger = logging.getLogger(__name__)


class ParticipantReadApi:
    """Read-only API for participant queries."""

    def __init__(self, gateway: TableGateway):
        self.gateway = gateway

    def list_participants(self, event_slug: str) -> List[ParticipantView]:
        """Every participant of an event, keys stripped."""
        items = self.gateway.query_all(
            KeyConditionExpression=Key('pk').eq(participant_partition_key(event_slug))
        )
        return [ParticipantView.from_dynamodb_item(item) for item in items]
