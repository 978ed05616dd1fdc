"""
Graph API client — Send API, app events, and user profiles over httpx.
"""

import asyncio
import json
from typing import Optional, Set

import httpx

from narrative_dispatch.delivery.adapters import DeliveryError
from narrative_dispatch.models.config import DispatcherConfig
from narrative_dispatch.utils.logging_config import get_logger

logger = get_logger(__name__)

PROFILE_FIELDS = "first_name,last_name,gender,locale,timezone"
EVENT_ORIGIN = "narrative_dispatch"


class GraphApiClient:
    """Delivery adapter backed by the Messenger Platform Graph API."""

    def __init__(
        self,
        config: DispatcherConfig,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config
        self._client = client or httpx.AsyncClient(timeout=10.0)
        self._tasks: Set[asyncio.Task] = set()    # App events in flight

    @property
    def _auth(self) -> dict:
        return {"access_token": self.config.page_access_token}

    async def send(self, request_body: dict) -> None:
        """Call the Send API with one request body."""
        response = await self._client.post(
            f"{self.config.graph_url}/me/messages",
            params=self._auth,
            json=request_body,
        )
        if response.is_error:
            raise DeliveryError(
                f"Send API returned {response.status_code}: {response.text}"
            )

    def log_event(self, psid: str, payload: str) -> None:
        """
        Record a custom app event for a resolved payload.

        Returns immediately; the request runs as a task on the current loop.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise DeliveryError("App events require a running event loop") from e
        task = loop.create_task(self.post_event(psid, payload))
        self._tasks.add(task)
        task.add_done_callback(self._event_done)

    @property
    def pending_events(self) -> int:
        return len(self._tasks)

    def _event_done(self, task: "asyncio.Task") -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning("Could not record app event: %s", error)

    async def post_event(self, psid: str, payload: str) -> None:
        body = {
            "event": "CUSTOM_APP_EVENTS",
            "custom_events": json.dumps([{
                "_eventName": "postback_payload",
                "_value": payload,
                "_origin": EVENT_ORIGIN,
            }]),
            "advertiser_tracking_enabled": 1,
            "application_tracking_enabled": 1,
            "extinfo": json.dumps(["mb1"]),
            "page_id": self.config.page_id,
            "page_scoped_user_id": psid,
        }
        response = await self._client.post(
            f"{self.config.graph_url}/{self.config.app_id}/activities",
            json=body,
        )
        if response.is_error:
            raise DeliveryError(
                f"App events API returned {response.status_code}: {response.text}"
            )

    async def fetch_profile(self, psid: str) -> Optional[dict]:
        """Look up a user's public profile. None if the lookup is refused."""
        response = await self._client.get(
            f"{self.config.graph_url}/{psid}",
            params={**self._auth, "fields": PROFILE_FIELDS},
        )
        if response.is_error:
            logger.warning(
                "Profile lookup for %s returned %s", psid, response.status_code
            )
            return None
        return response.json()

    async def aclose(self) -> None:
        await self._client.aclose()
