# engagement_harness/sdk/http_client.py
import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from .interfaces import (
    AbstractEngagementSDK,
    AbstractEngagementSession,
    EngagementCallback,
    SessionOptions,
    Unsubscribe,
)

logger = logging.getLogger(__name__)


async def _request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    json_payload: Optional[Dict[str, Any]] = None,
    params: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Perform one call against the engagement backend.

    Returns the decoded JSON body (empty dict for 204 / empty bodies) and
    raises httpx.HTTPStatusError for non-2xx answers.
    """
    logger.debug(f"Engagement API Request: {method} {url} | Params: {params} | JSON: {json_payload is not None}")
    response = await client.request(method, url, json=json_payload, params=params)

    if not 200 <= response.status_code < 300:
        logger.error(
            f"Engagement API HTTP Error: {method} {url} - Status {response.status_code} - Body: {response.text[:300]}"
        )
        response.raise_for_status()

    if response.status_code == 204 or not response.content:
        return {}
    try:
        return response.json()
    except json.JSONDecodeError:
        logger.error(f"Engagement API Response: {method} {url} -> {response.status_code} | Failed to decode JSON.")
        raise


class HttpEngagementSession(AbstractEngagementSession):
    """
    Session backed by the REST engagement API.

    Pushes are delivered by a polling task that runs while at least one
    listener is attached.
    """

    def __init__(self, client: httpx.AsyncClient, session_id: str, poll_interval: float):
        self.client = client
        self.session_id = session_id
        self.poll_interval = poll_interval
        self._listeners: List[EngagementCallback] = []
        self._cursor: Optional[str] = None
        self._poll_task: Optional["asyncio.Task[None]"] = None

    def on_engagement(self, callback: EngagementCallback) -> Unsubscribe:
        self._listeners.append(callback)
        if self._poll_task is None or self._poll_task.done():
            self._poll_task = asyncio.get_running_loop().create_task(self._poll())

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)
            if not self._listeners and self._poll_task is not None:
                self._poll_task.cancel()
                self._poll_task = None

        return unsubscribe

    async def send_event(self, event_name: str, payload: Any) -> None:
        await _request(
            self.client,
            "POST",
            f"/sessions/{self.session_id}/events",
            json_payload={"eventName": event_name, "payload": payload},
        )

    async def _poll(self) -> None:
        while self._listeners:
            params = {"after": self._cursor} if self._cursor else None
            try:
                body = await _request(
                    self.client, "GET", f"/sessions/{self.session_id}/engagements", params=params
                )
            except (httpx.HTTPError, json.JSONDecodeError) as e:
                logger.warning(f"Engagement poll for session {self.session_id} failed: {e}")
            else:
                self._cursor = body.get("cursor", self._cursor)
                for engagement in body.get("engagements", []):
                    template = engagement.get("template", "")
                    for listener in list(self._listeners):
                        try:
                            listener(template)
                        except Exception as e:
                            logger.error(
                                f"Engagement listener for session {self.session_id} failed: {e}", exc_info=True
                            )
            await asyncio.sleep(self.poll_interval)

    async def close(self) -> None:
        if self._poll_task is not None:
            self._poll_task.cancel()
            self._poll_task = None
        self._listeners.clear()


class HttpEngagementSDK(AbstractEngagementSDK):
    """httpx-based client for a REST engagement backend."""

    name = "http"

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 30.0,
        poll_interval_seconds: float = 2.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.poll_interval_seconds = poll_interval_seconds
        self.client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout_seconds)
        logger.info(f"HttpEngagementSDK initialized for {self.base_url}")

    async def create_session(
        self, app_id: str, user_id: str, options: SessionOptions
    ) -> HttpEngagementSession:
        payload: Dict[str, Any] = {"userId": user_id, "container": options.container}
        if options.credential is not None:
            payload["credential"] = options.credential.to_sdk_payload()
        if options.deployment:
            payload["deployment"] = options.deployment

        headers = {"Authorization": f"Bearer {options.token}"} if options.token else {}
        if headers:
            self.client.headers.update(headers)

        body = await _request(self.client, "POST", f"/applications/{app_id}/sessions", json_payload=payload)
        session_id = body.get("sessionId")
        if not session_id:
            raise ValueError(f"Engagement API did not return a sessionId for app '{app_id}'.")
        logger.info(f"HTTP session {session_id} created for app '{app_id}'")
        return HttpEngagementSession(self.client, session_id, self.poll_interval_seconds)

    async def aclose(self) -> None:
        await self.client.aclose()
