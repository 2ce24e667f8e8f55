"""
Participant Write API

Participants are registered by admins only and are VERIFIED from the start.
Registering the same email again replaces the record.
"""

import logging

from ...core import TableGateway
from ...models import (
    AttendanceStatus,
    Participant,
    ParticipantRegistration,
    RegistrationType,
)
from ...utils import utc_now_iso

logger = logging.getLogger(__name__)


class ParticipantWriteApi:
    """Write-only API for participant mutations."""

    def __init__(self, gateway: TableGateway):
        self.gateway = gateway

    def register(
        self,
        event_slug: str,
        registration: ParticipantRegistration,
        registered_by: str
    ) -> Participant:
        """
        Register a participant.

        DynamoDB Operation: PutItem without condition
        """
        participant = Participant(
            **Participant.key_for(event_slug, registration.email),
            first_name=registration.first_name,
            last_name=registration.last_name,
            email=registration.email,
            phone=registration.phone,
            event_slug=event_slug,
            event_type=registration.event_type,
            attendance_status=AttendanceStatus.VERIFIED,
            registration_date=utc_now_iso(),
            registration_type=RegistrationType.MANUAL,
            registered_by=registered_by,
        )
        self.gateway.put_item(participant.to_dynamodb_item())
        logger.info(f"Registered participant for {event_slug}: {participant.email} by {registered_by}")
        return participant
