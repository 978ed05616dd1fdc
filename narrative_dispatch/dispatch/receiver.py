"""
Dispatcher — the entry point for one inbound event.

  classify → (text intents | payload → dispatch table) → sequence → schedule

Behavioral Contract:
- Produces exactly one response unit per recognized event, or nothing for
  events it does not recognize
- Reports every resolved payload to analytics before building the reply;
  analytics failures never affect the reply
- Any fault while building the reply becomes a single apology message. This
  is the only place faults are recovered; nothing is retried
"""

from typing import Optional

from narrative_dispatch.delivery.adapters import DeliveryAdapter
from narrative_dispatch.delivery.sequencer import ResponseSequencer
from narrative_dispatch.dispatch.classifier import (
    PAYLOAD_KINDS,
    EventKind,
    classify_event,
    resolve_payload,
)
from narrative_dispatch.dispatch.context import DispatchContext
from narrative_dispatch.dispatch.intents import TextIntentMatcher
from narrative_dispatch.dispatch.table import NarrativeDispatchTable
from narrative_dispatch.i18n.localizer import Localizer
from narrative_dispatch.models.events import InboundEvent
from narrative_dispatch.models.responses import OutboundMessage, ResponseUnit
from narrative_dispatch.models.user import User
from narrative_dispatch.responses import builder
from narrative_dispatch.utils.logging_config import get_logger

logger = get_logger(__name__)


def apology(error: Exception) -> OutboundMessage:
    return OutboundMessage(
        text=(
            f"An error has occurred: '{error}'. We have been notified and "
            f"will fix the issue shortly!"
        )
    )


class Dispatcher:
    def __init__(
        self,
        sequencer: ResponseSequencer,
        analytics: Optional[DeliveryAdapter] = None,
        localizer: Optional[Localizer] = None,
        dispatch_table: Optional[NarrativeDispatchTable] = None,
        intent_matcher: Optional[TextIntentMatcher] = None,
        care_persona_id: Optional[str] = None,
    ):
        self.sequencer = sequencer
        self.analytics = analytics
        self.localizer = localizer or Localizer()
        self.dispatch_table = dispatch_table or NarrativeDispatchTable()
        self.intent_matcher = intent_matcher or TextIntentMatcher()
        self.care_persona_id = care_persona_id

    def handle_event(self, user: User, event: InboundEvent) -> Optional[ResponseUnit]:
        """
        Resolve an event and schedule the reply. Returns what was sent.

        Only resolution is recovered. Errors raised while scheduling, such as
        an `AsyncioScheduler` used outside a running loop, reach the caller.
        """
        response = self.resolve(user, event)
        if response is None:
            return None
        self.sequencer.send(user, response)
        return response

    def handle_fault(self, user: User, error: Exception) -> OutboundMessage:
        """Apologize for an event that could not be read at all."""
        logger.error("Unreadable event for %s: %s", user.psid, error)
        response = apology(error)
        self.sequencer.send(user, response)
        return response

    def resolve(self, user: User, event: InboundEvent) -> Optional[ResponseUnit]:
        """Build the reply for an event without sending it."""
        try:
            kind = classify_event(event)
            if kind == EventKind.UNKNOWN:
                logger.debug("Ignoring unrecognized event for %s", user.psid)
                return None

            context = DispatchContext(
                user=user,
                event=event,
                localizer=self.localizer.for_locale(user.locale),
                care_persona_id=self.care_persona_id,
            )

            if kind == EventKind.ATTACHMENT:
                return self._handle_attachment(context)
            if kind == EventKind.TEXT:
                return self._handle_text(context)
            if kind in PAYLOAD_KINDS:
                return self.handle_payload(context, resolve_payload(event, kind))
        except Exception as e:
            logger.exception("Failed to handle event for %s", user.psid)
            return apology(e)
        return None

    def handle_payload(self, context: DispatchContext, payload: str) -> ResponseUnit:
        logger.info("Received payload %s for %s", payload, context.user.psid)
        self._log_event(context.user.psid, payload)
        return self.dispatch_table.dispatch(context, payload)

    def _handle_text(self, context: DispatchContext) -> ResponseUnit:
        message = context.event.message
        logger.info("Received text %r for %s", message.text, context.user.psid)
        return self.intent_matcher.match(context, message.text, message.nlp)

    def _handle_attachment(self, context: DispatchContext) -> ResponseUnit:
        attachment = context.event.message.attachments[0]
        logger.info(
            "Received %s attachment for %s", attachment.type, context.user.psid
        )
        t = context.localizer.t
        return builder.gen_quick_reply(
            t("fallback.attachment"),
            [
                {"title": t("menu.help"), "payload": "CARE_HELP"},
                {"title": t("menu.start_over"), "payload": "GET_STARTED"},
            ],
        )

    def _log_event(self, psid: str, payload: str) -> None:
        if self.analytics is None:
            return
        try:
            self.analytics.log_event(psid, payload)
        except Exception as e:
            logger.warning("Analytics event for %s not recorded: %s", payload, e)
