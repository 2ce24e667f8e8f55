"""
Attendee Write API

Registration and lifecycle of attendee records:

- Self-service registration: PENDING, optional payment screenshot in the bucket
- Manual registration by an admin: VERIFIED immediately
- Detail updates limited to the AttendeeUpdate allow-list
- Verification (PENDING → VERIFIED) and deletion

Both registration paths use ``attribute_not_exists(pk)`` so an existing
attendee, in particular a VERIFIED one, is never overwritten. Every insert and
delete here is picked up by the attendee counter through the table stream.
"""

import logging
from typing import Any, Dict, Optional

from boto3.dynamodb.conditions import Attr

from ...core import TableGateway
from ...exceptions import ConflictError, ItemNotFoundError
from ...models import (
    AttendanceStatus,
    Attendee,
    AttendeeRegistration,
    AttendeeUpdate,
    ManualAttendeeRegistration,
    RegistrationType,
    UploadedFile,
)
from ...utils import build_set_expression, utc_now_iso
from ..files import FileWriteApi
from .queries import AttendeeReadApi

logger = logging.getLogger(__name__)


class AttendeeWriteApi:
    """
    Write-only API for attendee mutations.

    Updates, verification and deletion read the record first so a missing
    attendee is reported as such instead of being created by an UpdateItem.
    """

    def __init__(
        self,
        gateway: TableGateway,
        files: Optional[FileWriteApi] = None,
        read_api: Optional[AttendeeReadApi] = None
    ):
        self.gateway = gateway
        self.files = files
        self.read_api = read_api or AttendeeReadApi(gateway)

    def _require_attendee(self, event_slug: str, email: str) -> Dict[str, Any]:
        existing = self.read_api.get_attendee(event_slug, email)
        if existing is None:
            raise ItemNotFoundError("Attendee not found", Attendee.key_for(event_slug, email))
        return existing

    def _put_new(self, attendee: Attendee) -> None:
        try:
            self.gateway.put_item(attendee.to_dynamodb_item(), condition_expression=Attr('pk').not_exists())
        except ConflictError as e:
            raise ConflictError("Attendee already registered", attendee.sk, original_error=e) from e

    def register_self_service(
        self,
        event_slug: str,
        registration: AttendeeRegistration,
        payment_screenshot: Optional[UploadedFile] = None
    ) -> Attendee:
        """
        Register an attendee from the public form.

        The duplicate check runs before the screenshot upload so a rejected
        registration leaves no orphaned object behind.

        Raises:
            ConflictError: The email is already registered for this event
        """
        if self.read_api.get_attendee(event_slug, registration.email) is not None:
            raise ConflictError("Attendee already registered", registration.email)

        screenshot_key = None
        if payment_screenshot is not None and payment_screenshot.content:
            if self.files is None:
                raise ValueError("AttendeeWriteApi needs a FileWriteApi to store payment screenshots")
            screenshot_key = self.files.store_payment_screenshot(event_slug, payment_screenshot)

        attendee = Attendee(
            **Attendee.key_for(event_slug, registration.email),
            first_name=registration.first_name,
            last_name=registration.last_name,
            email=registration.email,
            phone=registration.phone,
            profession=registration.profession,
            event_slug=event_slug,
            event_type=registration.event_type,
            payment_screenshot_key=screenshot_key,
            attendance_status=AttendanceStatus.PENDING,
            registration_date=utc_now_iso(),
            registration_type=RegistrationType.SELF_SERVICE,
        )
        self._put_new(attendee)
        logger.info(f"Self-service registration for {event_slug}: {attendee.email} (screenshot={screenshot_key})")
        return attendee

    def register_manually(
        self,
        event_slug: str,
        registration: ManualAttendeeRegistration,
        registered_by: str
    ) -> Attendee:
        """
        Register an attendee on behalf of an admin, already VERIFIED.

        Raises:
            ConflictError: The email is already registered for this event
        """
        attendee = Attendee(
            **Attendee.key_for(event_slug, registration.email),
            first_name=registration.first_name,
            last_name=registration.last_name,
            email=registration.email,
            phone=registration.phone,
            profession=registration.profession,
            event_slug=event_slug,
            event_type=registration.event_type,
            attendance_status=AttendanceStatus.VERIFIED,
            registration_date=utc_now_iso(),
            registration_type=RegistrationType.MANUAL,
            registered_by=registered_by,
        )
        self._put_new(attendee)
        logger.info(f"Manual registration for {event_slug}: {attendee.email} by {registered_by}")
        return attendee

    def update_details(
        self,
        event_slug: str,
        email: str,
        update: AttendeeUpdate,
        updated_by: str
    ) -> Dict[str, Any]:
        """
        Update the allow-listed personal details of an attendee.

        Returns:
            All attributes of the updated record

        Raises:
            ItemNotFoundError: No such attendee
        """
        self._require_attendee(event_slug, email)

        updates = update.to_updates()
        if updates:
            updates['updatedDate'] = utc_now_iso()
            updates['updatedBy'] = updated_by
        update_expression, names, values = build_set_expression(updates)

        key = Attendee.key_for(event_slug, email)
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
            raise ItemNotFoundError("Attendee not found", key, original_error=e) from e

        logger.info(f"Updated attendee {event_slug}/{email} fields={sorted(names.values())} by {updated_by}")
        return attributes

    def verify(self, event_slug: str, email: str, verified_by: str) -> Dict[str, Any]:
        """
        Mark an attendee VERIFIED and stamp verifiedDate/verifiedBy.

        Verifying an already VERIFIED attendee re-stamps the verification.

        Raises:
            ItemNotFoundError: No such attendee
        """
        self._require_attendee(event_slug, email)

        key = Attendee.key_for(event_slug, email)
        try:
            attributes = self.gateway.update_item(
                key,
                "SET attendanceStatus = :status, verifiedDate = :verifiedDate, verifiedBy = :verifiedBy",
                expression_attribute_values={
                    ':status': AttendanceStatus.VERIFIED.value,
                    ':verifiedDate': utc_now_iso(),
                    ':verifiedBy': verified_by,
                },
                condition_expression=Attr('pk').exists(),
                return_values='ALL_NEW'
            )
        except ConflictError as e:
            raise ItemNotFoundError("Attendee not found", key, original_error=e) from e

        logger.info(f"Verified attendee {event_slug}/{email} by {verified_by}")
        return attributes

    def delete(self, event_slug: str, email: str) -> Dict[str, Any]:
        """
        Delete an attendee record.

        Returns:
            The record as it was before deletion

        Raises:
            ItemNotFoundError: No such attendee
        """
        existing = self._require_attendee(event_slug, email)
        key = Attendee.key_for(event_slug, email)
        try:
            self.gateway.delete_item(key, condition_expression=Attr('pk').exists())
        except ConflictError as e:
            raise ItemNotFoundError("Attendee not found", key, original_error=e) from e
        logger.info(f"Deleted attendee {event_slug}/{email}")
        return existing
