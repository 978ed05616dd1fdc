"""Tests for the Text Intent Matcher."""

import pytest

from narrative_dispatch.dispatch.context import DispatchContext
from narrative_dispatch.dispatch.intents import (
    GREETING_CONFIDENCE_THRESHOLD,
    TextIntentMatcher,
    TextMessage,
)
from narrative_dispatch.i18n.localizer import Localizer
from narrative_dispatch.models.events import InboundEvent, NlpResult
from narrative_dispatch.models.user import User

WELCOME = "Hi Ada! Welcome to the lighthouse."


def _make_context(text: str) -> DispatchContext:
    return DispatchContext(
        user=User(psid="psid_1", first_name="Ada"),
        event=InboundEvent.model_validate({"message": {"text": text}}),
        localizer=Localizer(),
    )


def _greeting(confidence: float) -> NlpResult:
    return NlpResult.model_validate({
        "entities": {
            "greetings": [
                {"value": "true", "confidence": confidence},
                {"value": "true", "confidence": 0.99},
            ]
        }
    })


def _match(text: str, nlp=None):
    return TextIntentMatcher().match(_make_context(text), text, nlp)


class TestGreeting:
    def test_threshold_is_strict(self):
        response = _match("hey there", _greeting(GREETING_CONFIDENCE_THRESHOLD))
        assert response[0].text != WELCOME
        assert "hey there" in response[0].text

    def test_just_above_threshold(self):
        response = _match("hey there", _greeting(0.801))
        assert response[0].text == WELCOME

    def test_only_first_entity_is_consulted(self):
        # The second instance is confident, the first is not
        response = _match("hey there", _greeting(0.2))
        assert response[0].text != WELCOME

    def test_start_over_needs_no_nlp(self):
        response = _match("  Start Over please ", _greeting(0.0))
        assert response[0].text == WELCOME


class TestRuleOrder:
    def test_start_over_beats_hash_and_help(self):
        response = _match("start over #help")
        assert response[0].text == WELCOME

    def test_hash_beats_help(self):
        response = _match("#help")
        assert response[0].text.startswith("Thanks for the idea!")

    def test_hash_survey(self):
        response = _match("I love #42")
        assert len(response) == 2
        assert [qr.payload for qr in response[1].quick_replies] == ["CSAT_GOOD", "CSAT_BAD"]

    @pytest.mark.parametrize("text", ["help", "Can you HELP?", "helpful"])
    def test_help_keyword(self, text):
        response = _match(text)
        assert [qr.payload for qr in response.quick_replies] == [
            "OPEN_DOOR_AGAIN",
            "GET_STARTED",
        ]


class TestFallback:
    def test_three_part_fallback(self):
        response = _match("What Is This Place?")

        assert len(response) == 3
        assert "What Is This Place?" in response[0].text
        assert response[1].text.startswith("The storm has passed")
        assert [qr.payload for qr in response[2].quick_replies] == [
            "CURATION",
            "CARE_HELP",
        ]

    def test_greeting_confidence_without_nlp(self):
        assert TextMessage("hello").greeting_confidence() == 0.0

    def test_text_is_normalized(self):
        message = TextMessage("  Hello THERE  ")
        assert message.normalized == "hello there"
        assert message.raw == "  Hello THERE  "
