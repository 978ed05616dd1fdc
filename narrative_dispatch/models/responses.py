"""Outbound messages, response units, and scheduled deliveries."""

from typing import List, Optional, Union

from pydantic import BaseModel, Field


class QuickReplyOption(BaseModel):
    content_type: str = "text"
    title: str
    payload: str


class OutboundMessage(BaseModel):
    """
    A single message payload bound for the Send API.

    `delay` and `persona_id` are side-channel fields read by the Response
    Sequencer. They never appear in the delivered message content.
    """

    text: Optional[str] = None
    quick_replies: Optional[List[QuickReplyOption]] = None
    attachment: Optional[dict] = None       # Templates, media

    # Side channel
    delay: Optional[int] = Field(default=None, ge=0)   # Milliseconds
    persona_id: Optional[str] = None

    def content(self) -> dict:
        """The message body as the Send API expects it."""
        return self.model_dump(
            mode="json",
            exclude_none=True,
            exclude={"delay", "persona_id"},
        )


# One message, or an ordered sequence of messages for a single inbound event.
ResponseUnit = Union[OutboundMessage, List[OutboundMessage]]


class ScheduledDelivery(BaseModel):
    """A message addressed to a user, with the delay before it is sent."""

    psid: str
    message: dict
    persona_id: Optional[str] = None
    delay_ms: int = Field(ge=0, default=0)

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0

    def request_body(self) -> dict:
        """The Send API request body (persona is a top-level field)."""
        body = {
            "recipient": {"id": self.psid},
            "message": self.message,
        }
        if self.persona_id is not None:
            body["persona_id"] = self.persona_id
        return body
