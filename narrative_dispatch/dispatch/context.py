"""Per-event context handed to intent rules and payload handlers."""

from typing import Optional

from narrative_dispatch.i18n.localizer import Localizer
from narrative_dispatch.models.events import InboundEvent
from narrative_dispatch.models.user import User


class DispatchContext:
    """The user, the event, and the collaborators needed to build a reply."""

    def __init__(
        self,
        user: User,
        event: InboundEvent,
        localizer: Localizer,
        care_persona_id: Optional[str] = None,
    ):
        self.user = user
        self.event = event
        self.localizer = localizer
        self.care_persona_id = care_persona_id
