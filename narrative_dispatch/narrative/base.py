"""
Narrative Stage — shared contract for payload-keyed story handlers.

Each stage owns a subset of the payload space. A stage is built per event and
is stateless: the active stage is re-derived from the payload every time.
"""

from typing import Callable, Dict, Protocol

from narrative_dispatch.i18n.localizer import Localizer
from narrative_dispatch.models.events import InboundEvent
from narrative_dispatch.models.responses import ResponseUnit
from narrative_dispatch.models.user import User


class StageError(Exception):
    """Raised when a stage is asked to handle a payload it does not own."""
    pass


class PayloadHandler(Protocol):
    """Anything that turns a canonical payload into a response."""

    def handle_payload(self, payload: str) -> ResponseUnit: ...


class NarrativeStage:
    """
    Base for the story stages. Subclasses register one handler per payload
    in `_register_handlers`.
    """

    name = "stage"

    def __init__(self, user: User, event: InboundEvent, localizer: Localizer):
        self.user = user
        self.event = event
        self.localizer = localizer
        self._handlers: Dict[str, Callable[[], ResponseUnit]] = {}
        self._register_handlers()

    def _register_handlers(self) -> None:
        raise NotImplementedError

    def handles(self, payload: str) -> bool:
        return payload in self._handlers

    def handle_payload(self, payload: str) -> ResponseUnit:
        handler = self._handlers.get(payload)
        if handler is None:
            raise StageError(f"{self.name} has no handler for payload {payload}")
        return handler()

    def _option(self, key: str, payload: str) -> dict:
        return {"title": self.localizer.t(key), "payload": payload}
