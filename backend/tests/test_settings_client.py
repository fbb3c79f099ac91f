"""Settings API client and form controller, driven against the app in-process."""

import httpx
import pytest

from campaign_settings.client import (
    FormState,
    SettingsAPIClient,
    SettingsAPIError,
    TenantSelection,
    ZeusCredentialsFormController,
)
from campaign_settings.main import app

FORM = {
    "host": "10.0.0.1",
    "port": "3050",
    "databaseName": "C:\\Zeus\\DB.FDB",
    "username": "SYSDBA",
    "password": "masterkey",
}


class RecordingNotifier:
    def __init__(self):
        self.messages = []

    def success(self, message):
        self.messages.append(("success", message))

    def error(self, message):
        self.messages.append(("error", message))


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def controller(api_client, notifier):
    return ZeusCredentialsFormController(api_client, notifier=notifier)


@pytest.mark.asyncio
async def test_client_roundtrip(api_client):
    assert await api_client.get_zeus_credentials() is None

    saved = await api_client.save_zeus_credentials({**FORM, "port": 3050})
    assert saved["success"] is True

    record = await api_client.get_zeus_credentials()
    assert record["hasPassword"] is True
    assert "password" not in record

    await api_client.delete_zeus_credentials()
    assert await api_client.get_zeus_credentials() is None


@pytest.mark.asyncio
async def test_client_surfaces_server_validation_errors(api_client):
    with pytest.raises(SettingsAPIError) as exc_info:
        await api_client.save_zeus_credentials({**FORM, "port": "abc"})

    assert exc_info.value.status_code == 400
    assert exc_info.value.errors[0]["field"] == "port"


@pytest.mark.asyncio
async def test_client_wraps_transport_failures():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = SettingsAPIClient("http://settings.invalid/api/v1", transport=httpx.MockTransport(refuse))

    with pytest.raises(SettingsAPIError, match="Could not reach"):
        await client.get_zeus_credentials()


def test_client_headers_carry_token_and_tenant(api_client, tenant):
    assert api_client.headers["Authorization"] == "Bearer test-token"
    assert api_client.headers["X-Tenant-ID"] == str(tenant.id)


@pytest.mark.asyncio
async def test_mount_without_record(controller):
    assert controller.state is FormState.LOADING

    await controller.mount()

    assert controller.state is FormState.IDLE
    assert controller.configured is False
    assert controller.password_label == "Password *"
    assert all(value == "" for value in controller.values.values())


@pytest.mark.asyncio
async def test_submit_saves_and_prefills_without_password(controller, notifier):
    await controller.mount()
    controller.open()

    assert await controller.submit(FORM) is True

    assert controller.state is FormState.IDLE
    assert controller.is_open is False
    assert notifier.messages == [("success", "Zeus settings saved successfully")]
    assert controller.configured is True
    assert controller.values["host"] == "10.0.0.1"
    assert controller.values["port"] == 3050
    assert controller.values["password"] == ""
    assert controller.password_label == "Password (leave blank to keep current)"


@pytest.mark.asyncio
async def test_invalid_form_is_not_sent(controller, notifier, api_client):
    await controller.mount()

    ok = await controller.submit({**FORM, "port": "-1", "username": ""})

    assert ok is False
    assert set(controller.errors) == {"port", "username"}
    assert notifier.messages == []
    assert controller.state is FormState.IDLE
    assert await api_client.get_zeus_credentials() is None


@pytest.mark.asyncio
async def test_blank_password_keeps_current_one(controller):
    await controller.mount()
    await controller.submit(FORM)

    controller.open()
    controller.set_value("host", "erp.local")
    assert await controller.submit() is True

    assert controller.record["host"] == "erp.local"
    assert controller.has_password is True


@pytest.mark.asyncio
async def test_cancel_discards_edits(controller, api_client):
    await controller.mount()
    await controller.submit(FORM)

    controller.open()
    controller.set_value("host", "unsaved.example")
    controller.cancel()

    assert controller.is_open is False
    assert controller.values["host"] == "10.0.0.1"
    assert (await api_client.get_zeus_credentials())["host"] == "10.0.0.1"


def test_unknown_field_is_refused(controller):
    with pytest.raises(KeyError):
        controller.set_value("hostname", "x")


@pytest.mark.asyncio
async def test_remove_respects_confirmation(api_client, notifier):
    answers = [False, True]
    controller = ZeusCredentialsFormController(
        api_client, notifier=notifier, confirm=lambda message: answers.pop(0)
    )
    await controller.mount()
    await controller.submit(FORM)

    assert await controller.remove() is False
    assert controller.configured is True

    assert await controller.remove() is True
    assert controller.configured is False
    assert controller.state is FormState.IDLE
    assert notifier.messages[-1] == ("success", "Zeus integration removed successfully")


@pytest.mark.asyncio
async def test_server_errors_are_notified(notifier):
    client = SettingsAPIClient(
        "http://testserver/api/v1", transport=httpx.ASGITransport(app=app)
    )
    controller = ZeusCredentialsFormController(client, notifier=notifier)

    await controller.mount()
    assert notifier.messages == [("error", "Failed to load Zeus settings")]

    assert await controller.submit(FORM) is False
    assert notifier.messages[-1] == ("error", "Tenant not identified")
    assert controller.state is FormState.IDLE


@pytest.mark.asyncio
async def test_tenant_switch_reloads(api_client, notifier, tenant, other_tenant):
    selection = TenantSelection(tenant.id)
    controller = ZeusCredentialsFormController(
        api_client, notifier=notifier, tenant_selection=selection
    )
    await controller.mount()
    await controller.submit(FORM)
    assert controller.configured is True

    await selection.select(other_tenant.id)
    assert api_client.tenant_id == other_tenant.id
    assert controller.configured is False

    await selection.select(tenant.id)
    assert controller.configured is True

    controller.unmount()
    await selection.select(other_tenant.id)
    assert controller.configured is True


@pytest.mark.asyncio
async def test_failed_load_after_tenant_switch_shows_no_stale_record(api_client, notifier, tenant):
    selection = TenantSelection(tenant.id)
    controller = ZeusCredentialsFormController(
        api_client, notifier=notifier, tenant_selection=selection
    )
    await controller.mount()
    await controller.submit(FORM)
    assert controller.configured is True

    # No tenant header: the load is rejected with 400
    await selection.select(None)

    assert api_client.tenant_id is None
    assert notifier.messages[-1] == ("error", "Failed to load Zeus settings")
    assert controller.record is None
    assert controller.configured is False
    assert controller.has_password is False
    assert all(value == "" for value in controller.values.values())
    assert controller.state is FormState.IDLE
