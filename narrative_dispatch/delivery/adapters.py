"""
Delivery Adapter — the boundary to the messaging platform.

An adapter transmits a fully-formed Send API request body, records analytics
events for resolved payloads, and looks up user profiles.
"""

from typing import Dict, List, Optional, Protocol, Tuple


class DeliveryError(Exception):
    """Raised when a message or analytics event cannot be delivered."""
    pass


class DeliveryAdapter(Protocol):
    """Protocol for delivery transports — pluggable backend."""

    async def send(self, request_body: dict) -> None: ...

    def log_event(self, psid: str, payload: str) -> None: ...

    async def fetch_profile(self, psid: str) -> Optional[dict]: ...


class InMemoryDeliveryAdapter:
    """
    Records every call instead of transmitting. Used when no page credentials
    are configured, and in tests.
    """

    def __init__(self, profiles: Optional[Dict[str, dict]] = None):
        self.sent: List[dict] = []
        self.events: List[Tuple[str, str]] = []
        self._profiles = profiles or {}

    async def send(self, request_body: dict) -> None:
        self.sent.append(request_body)

    def log_event(self, psid: str, payload: str) -> None:
        self.events.append((psid, payload))

    async def fetch_profile(self, psid: str) -> Optional[dict]:
        return self._profiles.get(psid)
