"""Care — the help desk, answered by the lighthouse keeper persona."""

from typing import Optional

from narrative_dispatch.i18n.localizer import Localizer
from narrative_dispatch.models.events import InboundEvent
from narrative_dispatch.models.responses import ResponseUnit
from narrative_dispatch.models.user import User
from narrative_dispatch.narrative.base import NarrativeStage
from narrative_dispatch.responses import builder


class Care(NarrativeStage):
    name = "care"

    def __init__(
        self,
        user: User,
        event: InboundEvent,
        localizer: Localizer,
        persona_id: Optional[str] = None,
    ):
        self.persona_id = persona_id
        super().__init__(user, event, localizer)

    def _register_handlers(self) -> None:
        self._handlers["CARE_HELP"] = self._help

    def _help(self) -> ResponseUnit:
        return builder.gen_quick_reply(
            self.localizer.t(
                "care.prompt",
                first_name=self.user.first_name or "there",
                persona=self.localizer.t("care.persona"),
            ),
            [
                self._option("care.continue", "OPEN_DOOR_AGAIN"),
                self._option("menu.start_over", "GET_STARTED"),
            ],
            persona_id=self.persona_id,
        )
