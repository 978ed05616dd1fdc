"""Inbound Event — one Messenger `messaging` entry as delivered by the webhook."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class QuickReply(BaseModel):
    """The quick reply button a user tapped."""

    payload: Optional[str] = None


class NlpEntity(BaseModel):
    """A single built-in NLP entity instance."""

    value: Any = None
    confidence: float = Field(ge=0, le=1, default=0.0)


class NlpResult(BaseModel):
    """Entities detected by the platform's built-in NLP, highest-ranked first."""

    entities: Dict[str, List[NlpEntity]] = {}

    def first_entity(self, name: str) -> Optional[NlpEntity]:
        """Only the first (highest-ranked) instance per entity name is consulted."""
        instances = self.entities.get(name)
        if not instances:
            return None
        return instances[0]


class Attachment(BaseModel):
    type: str = "file"                      # e.g., "image", "audio", "fallback"
    payload: Optional[dict] = None


class Message(BaseModel):
    mid: Optional[str] = None
    text: Optional[str] = None
    attachments: List[Attachment] = []
    quick_reply: Optional[QuickReply] = None
    nlp: Optional[NlpResult] = None
    is_echo: bool = False                   # Sent by the page itself


class Referral(BaseModel):
    ref: Optional[str] = None
    type: Optional[str] = None              # e.g., "OPEN_THREAD"
    source: Optional[str] = None            # e.g., "SHORTLINK", "ADS"


class Postback(BaseModel):
    payload: Optional[str] = None
    title: Optional[str] = None
    referral: Optional[Referral] = None     # Set on Get Started with m.me ref links


class Party(BaseModel):
    id: str


class InboundEvent(BaseModel):
    """
    A single inbound event. At most one of message / postback / referral is
    expected to be populated; events carrying none of them (delivery and read
    receipts, for example) are ignored by the dispatcher.
    """

    sender: Optional[Party] = None
    recipient: Optional[Party] = None
    timestamp: Optional[int] = None
    message: Optional[Message] = None
    postback: Optional[Postback] = None
    referral: Optional[Referral] = None

    @property
    def sender_psid(self) -> Optional[str]:
        return self.sender.id if self.sender else None
