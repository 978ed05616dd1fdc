"""
Response Builder — factories for Send API message payloads.

Every factory returns an `OutboundMessage` (or a list of them for multi-part
replies), ready for the Response Sequencer.
"""

from typing import List, Optional

from narrative_dispatch.i18n.localizer import Localizer
from narrative_dispatch.models.responses import OutboundMessage, QuickReplyOption
from narrative_dispatch.models.user import User


def gen_text(text: str, persona_id: Optional[str] = None) -> OutboundMessage:
    return OutboundMessage(text=text, persona_id=persona_id)


def gen_quick_reply(
    text: str,
    quick_replies: List[dict],
    persona_id: Optional[str] = None,
) -> OutboundMessage:
    """A text message with quick reply buttons, given as {title, payload} dicts."""
    return OutboundMessage(
        text=text,
        quick_replies=[
            QuickReplyOption(title=qr["title"], payload=qr["payload"])
            for qr in quick_replies
        ],
        persona_id=persona_id,
    )


def gen_postback_button(title: str, payload: str) -> dict:
    return {"type": "postback", "title": title, "payload": payload}


def gen_button_template(text: str, buttons: List[dict]) -> OutboundMessage:
    return OutboundMessage(
        attachment={
            "type": "template",
            "payload": {
                "template_type": "button",
                "text": text,
                "buttons": buttons,
            },
        }
    )


def gen_nux_message(user: User, localizer: Localizer) -> List[OutboundMessage]:
    """The new-user experience: welcome, guidance, and the first choice."""
    welcome = gen_text(
        localizer.t("get_started.welcome", first_name=user.first_name or "there")
    )
    guide = gen_text(localizer.t("get_started.guidance"))
    curation = gen_quick_reply(
        localizer.t("get_started.help"),
        [
            {"title": localizer.t("menu.open_door"), "payload": "OPEN_DOOR"},
            {"title": localizer.t("menu.help"), "payload": "CARE_HELP"},
        ],
    )
    return [welcome, guide, curation]
