import time
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from engagement_harness.main import create_app
from engagement_harness.sdk import LoopbackEngagementSDK
from engagement_harness.settings import Settings


def wait_for(predicate: Callable[[], bool], timeout: float = 3.0) -> None:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return
        time.sleep(0.02)
    raise AssertionError("condition not reached before timeout")


@pytest.fixture
def sdk() -> LoopbackEngagementSDK:
    return LoopbackEngagementSDK()


@pytest.fixture
def client(sdk: LoopbackEngagementSDK):
    app_settings = Settings(
        app_id="demo-app",
        default_user_id="operator",
        api_key="api-token",
        debounce_window_ms=10,
        identity_debounce_window_ms=20,
        default_event_payload="",
    )
    with TestClient(create_app(app_settings, sdk=sdk)) as test_client:
        yield test_client


def _session_state(client: TestClient) -> str:
    return client.get("/session").json()["state"]


def test_health(client: TestClient) -> None:
    assert client.get("/health").json()["status"] == "ok"


def test_bootstrap_seeds_form_and_creates_session(client: TestClient, sdk: LoopbackEngagementSDK) -> None:
    wait_for(lambda: _session_state(client) == "READY")

    published = client.get("/form").json()["published"]
    assert published["app_id"] == "demo-app"
    assert published["user_id"] == "operator"
    assert published["is_valid"] is False

    assert len(sdk.sessions) == 1
    assert sdk.last_session.options.token == "api-token"
    assert sdk.last_session.options.container == "engagement-placeholder"


def test_send_is_rejected_while_form_invalid(client: TestClient) -> None:
    wait_for(lambda: _session_state(client) == "READY")

    response = client.post("/events/send")

    assert response.status_code == 409
    messages = [entry["message"] for entry in client.get("/logs").json()]
    assert "Send event" not in messages


def test_end_to_end_send_and_engagement(client: TestClient) -> None:
    response = client.patch("/form", json={"event_name": "click", "event_payload_raw": '{"a":1}'})
    assert response.status_code == 202
    wait_for(lambda: client.get("/form").json()["published"]["is_valid"])
    wait_for(lambda: _session_state(client) == "READY")
    assert client.get("/form").json()["draft"]["event_payload_raw"] == '{\n  "a": 1\n}'

    sent = client.post("/events/send")
    assert sent.status_code == 202
    assert sent.json()["message"] == "Send event"
    assert sent.json()["payload"] == {"eventName": "click", "eventPayload": {"a": 1}}

    wait_for(lambda: client.get("/engagement").json()["template"] != "")
    assert "click" in client.get("/engagement").json()["template"]
    assert 'id="engagement-placeholder"' in client.get("/engagement/preview").text

    newest = client.get("/logs", params={"limit": 2}).json()
    assert [entry["message"] for entry in newest] == ["Engagement", "Send event"]
    assert newest[0]["timestamp"] >= newest[1]["timestamp"]


def test_identity_change_reinitializes_session(client: TestClient, sdk: LoopbackEngagementSDK) -> None:
    wait_for(lambda: _session_state(client) == "READY")

    client.patch("/form", json={"auth_method": "EMAIL", "email": "e@x.com", "password": "pw"})
    wait_for(lambda: len(sdk.sessions) == 2 and _session_state(client) == "READY")

    status = client.get("/session").json()
    assert status["key"] == {"appId": "demo-app", "userId": "operator", "authMethod": "EMAIL", "email": "e@x.com"}
    assert status["sessions_created"] == 2
    messages = [entry["message"] for entry in client.get("/logs").json()]
    assert "Init SDK with EMAIL auth" in messages


def test_reinitialize_endpoint(client: TestClient, sdk: LoopbackEngagementSDK) -> None:
    wait_for(lambda: _session_state(client) == "READY")

    response = client.post("/session/reinitialize")

    assert response.status_code == 200
    assert response.json()["sessions_created"] == 2
    assert len(sdk.sessions) == 2


def test_unknown_auth_method_is_rejected(client: TestClient) -> None:
    response = client.patch("/form", json={"auth_method": "KERBEROS"})
    assert response.status_code == 422
