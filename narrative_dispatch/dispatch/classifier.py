"""
Event Classifier and Payload Resolver.

Classification order, first match wins:
  message.quick_reply > message.attachments > message.text > postback > referral

Payloads from postbacks and referrals are upper-cased; quick reply payloads are
used verbatim.
"""

from enum import Enum

from narrative_dispatch.models.events import InboundEvent


class DispatchError(Exception):
    """Raised when an event cannot be turned into a response."""
    pass


class EventKind(str, Enum):
    QUICK_REPLY = "quick_reply"
    ATTACHMENT = "attachment"
    TEXT = "text"
    POSTBACK = "postback"
    REFERRAL = "referral"
    UNKNOWN = "unknown"     # Receipts, echoes, anything else: ignored


PAYLOAD_KINDS = (EventKind.QUICK_REPLY, EventKind.POSTBACK, EventKind.REFERRAL)

OPEN_THREAD = "OPEN_THREAD"


def classify_event(event: InboundEvent) -> EventKind:
    """Determine which handling path an inbound event takes."""
    message = event.message
    if message is not None:
        if message.quick_reply is not None:
            return EventKind.QUICK_REPLY
        if message.attachments:
            return EventKind.ATTACHMENT
        if message.text:
            return EventKind.TEXT
        return EventKind.UNKNOWN
    if event.postback is not None:
        return EventKind.POSTBACK
    if event.referral is not None:
        return EventKind.REFERRAL
    return EventKind.UNKNOWN


def resolve_payload(event: InboundEvent, kind: EventKind) -> str:
    """Normalize the payload of a quick reply, postback, or referral event."""
    if kind == EventKind.QUICK_REPLY:
        payload = event.message.quick_reply.payload
        if payload is None:
            raise DispatchError("Quick reply carries no payload")
        return payload

    if kind == EventKind.POSTBACK:
        postback = event.postback
        # Get Started tapped from an m.me link carries the link's ref
        if postback.referral is not None and postback.referral.type == OPEN_THREAD:
            payload = postback.referral.ref
        else:
            payload = postback.payload
        if payload is None:
            raise DispatchError("Postback carries no payload")
        return payload.upper()

    if kind == EventKind.REFERRAL:
        if event.referral.ref is None:
            raise DispatchError("Referral carries no ref")
        return event.referral.ref.upper()

    raise DispatchError(f"Event of kind {kind.value} carries no payload")
