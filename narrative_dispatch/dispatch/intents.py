"""
Text Intent Matcher — free-text messages.

Rules run in order against the trimmed, lower-cased text; the first rule that
returns a response wins. When no rule matches, the user gets a three-part
fallback: an echo of what they wrote, guidance, and a menu.
"""

from typing import Callable, List, Optional

from narrative_dispatch.dispatch.context import DispatchContext
from narrative_dispatch.models.events import NlpResult
from narrative_dispatch.models.responses import ResponseUnit
from narrative_dispatch.narrative.care import Care
from narrative_dispatch.narrative.survey import Survey
from narrative_dispatch.responses import builder

GREETING_ENTITY = "greetings"
GREETING_CONFIDENCE_THRESHOLD = 0.8     # Strictly greater than
START_OVER_PHRASE = "start over"
SURVEY_MARKER = "#"


class TextMessage:
    """A text message as seen by the intent rules."""

    def __init__(self, raw: str, nlp: Optional[NlpResult] = None):
        self.raw = raw
        self.normalized = raw.strip().lower()
        self.nlp = nlp

    def greeting_confidence(self) -> float:
        if self.nlp is None:
            return 0.0
        greeting = self.nlp.first_entity(GREETING_ENTITY)
        return greeting.confidence if greeting else 0.0


IntentRule = Callable[[DispatchContext, TextMessage], Optional[ResponseUnit]]


class TextIntentMatcher:
    """Ordered intent rules with a multi-part default."""

    def __init__(self):
        self._rules: List[IntentRule] = []
        self._register_default_rules()

    def _register_default_rules(self) -> None:
        self._rules = [
            self._rule_greeting_or_start_over,
            self._rule_survey,
            self._rule_help,
        ]

    def match(
        self,
        context: DispatchContext,
        text: str,
        nlp: Optional[NlpResult] = None,
    ) -> ResponseUnit:
        message = TextMessage(text, nlp)
        for rule in self._rules:
            response = rule(context, message)
            if response is not None:
                return response
        return self._fallback(context, message)

    def _rule_greeting_or_start_over(
        self, context: DispatchContext, message: TextMessage
    ) -> Optional[ResponseUnit]:
        if (
            message.greeting_confidence() > GREETING_CONFIDENCE_THRESHOLD
            or START_OVER_PHRASE in message.normalized
        ):
            return builder.gen_nux_message(context.user, context.localizer)
        return None

    def _rule_survey(
        self, context: DispatchContext, message: TextMessage
    ) -> Optional[ResponseUnit]:
        if SURVEY_MARKER in message.normalized:
            survey = Survey(context.user, context.event, context.localizer)
            return survey.handle_payload("CSAT_SUGGESTION")
        return None

    def _rule_help(
        self, context: DispatchContext, message: TextMessage
    ) -> Optional[ResponseUnit]:
        keyword = context.localizer.t("care.help").lower()
        if keyword in message.normalized:
            care = Care(
                context.user,
                context.event,
                context.localizer,
                persona_id=context.care_persona_id,
            )
            return care.handle_payload("CARE_HELP")
        return None

    def _fallback(self, context: DispatchContext, message: TextMessage) -> ResponseUnit:
        t = context.localizer.t
        return [
            builder.gen_text(t("fallback.any", message=message.raw)),
            builder.gen_text(t("get_started.guidance")),
            builder.gen_quick_reply(
                t("get_started.help"),
                [
                    {"title": t("menu.suggestion"), "payload": "CURATION"},
                    {"title": t("menu.help"), "payload": "CARE_HELP"},
                ],
            ),
        ]
