"""Narrative Dispatch data models."""

from narrative_dispatch.models.config import DispatcherConfig
from narrative_dispatch.models.events import (
    Attachment,
    InboundEvent,
    Message,
    NlpEntity,
    NlpResult,
    Party,
    Postback,
    QuickReply,
    Referral,
)
from narrative_dispatch.models.responses import (
    OutboundMessage,
    QuickReplyOption,
    ResponseUnit,
    ScheduledDelivery,
)
from narrative_dispatch.models.user import User

__all__ = [
    "Attachment",
    "DispatcherConfig",
    "InboundEvent",
    "Message",
    "NlpEntity",
    "NlpResult",
    "OutboundMessage",
    "Party",
    "Postback",
    "QuickReply",
    "QuickReplyOption",
    "Referral",
    "ResponseUnit",
    "ScheduledDelivery",
    "User",
]
