"""
The lighthouse story, in four stages.

  Stage 1: the door                  (any payload containing OPEN_DOOR)
  Stage 2: the staircase             GO_DOWNSTAIRS | GO_UPSTAIRS
  Stage 3: the cellar / lamp room    EXAMINE_ROPE | EXAMINE_BACKPACK |
                                     ENTER_TUNNEL | BREAK_THE_WINDOW
  Stage 4: the escape                USE_BACKPACK | USE_ROPE

Stages offer payloads that belong to other stages, including earlier ones
(the tunnel sends the player back to the door).
"""

from narrative_dispatch.models.responses import ResponseUnit
from narrative_dispatch.narrative.base import NarrativeStage
from narrative_dispatch.responses import builder


class Step1(NarrativeStage):
    name = "step1"

    def _register_handlers(self) -> None:
        self._handlers["OPEN_DOOR"] = self._open_door
        self._handlers["OPEN_DOOR_AGAIN"] = self._open_door_again

    def handle_payload(self, payload: str) -> ResponseUnit:
        # Stage 1 is entered by substring, so unlisted variants open the door.
        if payload not in self._handlers:
            return self._open_door()
        return super().handle_payload(payload)

    def _stairs(self) -> list:
        return [
            self._option("step1.go_down", "GO_DOWNSTAIRS"),
            self._option("step1.go_up", "GO_UPSTAIRS"),
        ]

    def _open_door(self) -> ResponseUnit:
        return builder.gen_quick_reply(self.localizer.t("step1.door"), self._stairs())

    def _open_door_again(self) -> ResponseUnit:
        return builder.gen_quick_reply(
            self.localizer.t("step1.door_again"), self._stairs()
        )


class Step2(NarrativeStage):
    name = "step2"

    def _register_handlers(self) -> None:
        self._handlers["GO_DOWNSTAIRS"] = self._downstairs
        self._handlers["GO_UPSTAIRS"] = self._upstairs

    def _downstairs(self) -> ResponseUnit:
        return builder.gen_quick_reply(
            self.localizer.t("step2.downstairs"),
            [
                self._option("step2.examine_rope", "EXAMINE_ROPE"),
                self._option("step2.examine_backpack", "EXAMINE_BACKPACK"),
            ],
        )

    def _upstairs(self) -> ResponseUnit:
        return builder.gen_quick_reply(
            self.localizer.t("step2.upstairs"),
            [
                self._option("step2.enter_tunnel", "ENTER_TUNNEL"),
                self._option("step2.break_window", "BREAK_THE_WINDOW"),
            ],
        )


class Step3(NarrativeStage):
    name = "step3"

    def _register_handlers(self) -> None:
        self._handlers["EXAMINE_ROPE"] = self._examine_rope
        self._handlers["EXAMINE_BACKPACK"] = self._examine_backpack
        self._handlers["ENTER_TUNNEL"] = self._enter_tunnel
        self._handlers["BREAK_THE_WINDOW"] = self._break_window

    def _examine_rope(self) -> ResponseUnit:
        return builder.gen_quick_reply(
            self.localizer.t("step3.rope"),
            [self._option("step3.use_rope", "USE_ROPE")],
        )

    def _examine_backpack(self) -> ResponseUnit:
        return builder.gen_quick_reply(
            self.localizer.t("step3.backpack"),
            [self._option("step3.use_backpack", "USE_BACKPACK")],
        )

    def _enter_tunnel(self) -> ResponseUnit:
        return builder.gen_quick_reply(
            self.localizer.t("step3.tunnel"),
            [self._option("step3.go_back", "OPEN_DOOR_AGAIN")],
        )

    def _break_window(self) -> ResponseUnit:
        return builder.gen_quick_reply(
            self.localizer.t("step3.window"),
            [self._option("step3.go_back", "GO_DOWNSTAIRS")],
        )


class Step4(NarrativeStage):
    name = "step4"

    # Let the escape sink in before the closing card.
    ENDING_DELAY_MS = 4000

    def _register_handlers(self) -> None:
        self._handlers["USE_ROPE"] = lambda: self._escape("step4.rope")
        self._handlers["USE_BACKPACK"] = lambda: self._escape("step4.backpack")

    def _escape(self, key: str) -> ResponseUnit:
        ending = builder.gen_button_template(
            self.localizer.t("step4.escaped", first_name=self.user.first_name or "friend"),
            [builder.gen_postback_button(self.localizer.t("step4.again"), "GET_STARTED")],
        )
        ending.delay = self.ENDING_DELAY_MS
        return [builder.gen_text(self.localizer.t(key)), ending]
