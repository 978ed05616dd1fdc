"""Survey — collects feedback about the story."""

from narrative_dispatch.models.responses import ResponseUnit
from narrative_dispatch.narrative.base import NarrativeStage
from narrative_dispatch.responses import builder


class Survey(NarrativeStage):
    name = "survey"

    def _register_handlers(self) -> None:
        self._handlers["CSAT_SUGGESTION"] = self._suggestion

    def _suggestion(self) -> ResponseUnit:
        return [
            builder.gen_text(self.localizer.t("survey.suggestion")),
            builder.gen_quick_reply(
                self.localizer.t("survey.rate"),
                [
                    self._option("survey.good", "CSAT_GOOD"),
                    self._option("survey.bad", "CSAT_BAD"),
                ],
            ),
        ]
