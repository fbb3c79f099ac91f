"""
Form controller for the Zeus ERP section of the settings page

Holds the form values, the loaded (redacted) record and the view state,
and drives the settings API client. Rendering is left to the caller.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional, Protocol
from uuid import UUID

from pydantic import ValidationError

from campaign_settings.client.api_client import SettingsAPIClient, SettingsAPIError
from campaign_settings.client.tenant_selection import TenantSelection
from campaign_settings.schemas.zeus_credentials import ZeusCredentialsIn, field_errors

logger = logging.getLogger(__name__)

FORM_FIELDS = ("host", "port", "databaseName", "username", "password")


class FormState(str, Enum):
    """View state of the form"""
    LOADING = "loading"
    IDLE = "idle"
    SUBMITTING = "submitting"


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingNotifier:
    """Notifier that writes to the log; used when no UI toaster is wired in"""

    def success(self, message: str) -> None:
        logger.info(message)

    def error(self, message: str) -> None:
        logger.error(message)


def empty_values() -> Dict[str, Any]:
    return {field: "" for field in FORM_FIELDS}


class ZeusCredentialsFormController:
    """
    State machine: loading -> idle -> submitting -> idle.

    The password value is never pre-filled; when a password is already
    stored, leaving it blank keeps it.
    """

    def __init__(self, client: SettingsAPIClient, notifier: Optional[Notifier] = None,
                 tenant_selection: Optional[TenantSelection] = None,
                 confirm: Optional[Callable[[str], bool]] = None):
        self.client = client
        self.notifier = notifier or LoggingNotifier()
        self.tenant_selection = tenant_selection
        self.confirm = confirm

        self.state = FormState.LOADING
        self.record: Optional[Dict[str, Any]] = None
        self.values: Dict[str, Any] = empty_values()
        self.errors: Dict[str, str] = {}
        self.is_open = False
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def configured(self) -> bool:
        return self.record is not None

    @property
    def has_password(self) -> bool:
        return bool(self.record and self.record.get("hasPassword"))

    @property
    def password_label(self) -> str:
        if self.has_password:
            return "Password (leave blank to keep current)"
        return "Password *"

    async def mount(self) -> None:
        """Subscribe to tenant changes and load the current record"""
        if self.tenant_selection is not None:
            if self.tenant_selection.tenant_id is not None:
                self.client.tenant_id = self.tenant_selection.tenant_id
            if self._unsubscribe is None:
                self._unsubscribe = self.tenant_selection.subscribe(self._on_tenant_changed)
        await self.load()

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def load(self) -> None:
        self.state = FormState.LOADING
        try:
            await self._fetch()
        finally:
            self.state = FormState.IDLE

    def open(self) -> None:
        self.values = self._values_from(self.record)
        self.errors = {}
        self.is_open = True

    def cancel(self) -> None:
        """Close the form, discarding unsaved edits"""
        self.values = self._values_from(self.record)
        self.errors = {}
        self.is_open = False

    def set_value(self, field: str, value: Any) -> None:
        if field not in FORM_FIELDS:
            raise KeyError(f"Unknown form field: {field}")
        self.values[field] = value

    async def submit(self, values: Optional[Dict[str, Any]] = None) -> bool:
        """
        Validate and save the form

        Args:
            values: Form values to submit; defaults to the current values

        Returns:
            True when the credentials were saved
        """
        if values is not None:
            self.values = {**empty_values(), **values}

        try:
            data = ZeusCredentialsIn.model_validate(self.values)
        except ValidationError as e:
            self.errors = {item["field"]: item["message"] for item in field_errors(e)}
            logger.debug(f"Zeus form validation errors: {self.errors}")
            return False

        self.errors = {}
        self.state = FormState.SUBMITTING
        try:
            await self.client.save_zeus_credentials(data.model_dump(by_alias=True, exclude_none=True))
            self.notifier.success("Zeus settings saved successfully")
            self.is_open = False
            await self._fetch()
            return True
        except SettingsAPIError as e:
            self.errors = {
                item.get("field", "body"): item.get("message", "")
                for item in e.errors
                if isinstance(item, dict)
            }
            self.notifier.error(e.message or "Failed to save Zeus settings")
            return False
        finally:
            self.state = FormState.IDLE

    async def remove(self) -> bool:
        """
        Delete the stored credentials after confirmation

        Returns:
            True when the integration was removed
        """
        if self.confirm is not None and not self.confirm("Remove the Zeus integration?"):
            return False

        self.state = FormState.SUBMITTING
        try:
            await self.client.delete_zeus_credentials()
            self.notifier.success("Zeus integration removed successfully")
            self.is_open = False
            await self._fetch()
            return True
        except SettingsAPIError as e:
            self.notifier.error(e.message or "Failed to remove Zeus integration")
            return False
        finally:
            self.state = FormState.IDLE

    async def _fetch(self) -> None:
        try:
            record = await self.client.get_zeus_credentials()
        except SettingsAPIError as e:
            logger.error(f"Failed to load Zeus settings: {e}")
            self.notifier.error("Failed to load Zeus settings")
            return

        self.record = record
        self.values = self._values_from(record)
        self.errors = {}

    async def _on_tenant_changed(self, tenant_id: Optional[UUID]) -> None:
        self.client.tenant_id = tenant_id
        self.is_open = False
        # Drop the previous tenant's record; a failed load must not leave it on screen
        self.record = None
        self.values = empty_values()
        self.errors = {}
        await self.load()

    @staticmethod
    def _values_from(record: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        values = empty_values()
        if record:
            for field in ("host", "port", "databaseName", "username"):
                values[field] = record.get(field) or ""
        return values
