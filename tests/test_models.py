"""Tests for core data models, configuration, and localization."""

import pytest

from narrative_dispatch.i18n.localizer import Localizer
from narrative_dispatch.models import (
    DispatcherConfig,
    InboundEvent,
    NlpResult,
    OutboundMessage,
    ScheduledDelivery,
    User,
)
from narrative_dispatch.users.store import UserStore


class TestInboundEvent:
    def test_parse_text_message_with_nlp(self):
        event = InboundEvent.model_validate({
            "sender": {"id": "psid_1"},
            "recipient": {"id": "page_1"},
            "timestamp": 1458692752478,
            "message": {
                "mid": "m_1",
                "text": "hello",
                "nlp": {"entities": {"greetings": [{"value": "true", "confidence": 0.97}]}},
            },
        })
        assert event.sender_psid == "psid_1"
        assert event.message.nlp.first_entity("greetings").confidence == 0.97
        assert event.message.nlp.first_entity("bye") is None
        assert event.message.attachments == []

    def test_confidence_bounds(self):
        with pytest.raises(Exception):
            NlpResult.model_validate({"entities": {"greetings": [{"confidence": 1.5}]}})

    def test_postback_with_referral(self):
        event = InboundEvent.model_validate({
            "postback": {
                "title": "Get Started",
                "payload": "GET_STARTED",
                "referral": {"ref": "open_door", "source": "SHORTLINK", "type": "OPEN_THREAD"},
            }
        })
        assert event.postback.referral.type == "OPEN_THREAD"
        assert event.sender_psid is None

    def test_echo_flag(self):
        event = InboundEvent.model_validate({"message": {"is_echo": True, "text": "x"}})
        assert event.message.is_echo is True


class TestOutboundMessage:
    def test_content_excludes_side_channel(self):
        message = OutboundMessage(text="hi", delay=100, persona_id="p")
        assert message.content() == {"text": "hi"}

    def test_negative_delay_rejected(self):
        with pytest.raises(Exception):
            OutboundMessage(text="hi", delay=-1)

    def test_delivery_seconds(self):
        delivery = ScheduledDelivery(psid="x", message={}, delay_ms=2000)
        assert delivery.delay_seconds == 2.0


class TestUser:
    def test_apply_profile(self):
        user = User(psid="psid_1")
        user.apply_profile({"first_name": "Ada", "locale": "en_GB", "timezone": 1})
        assert user.first_name == "Ada"
        assert user.locale == "en_GB"
        assert user.timezone == 1
        assert user.gender == "neutral"

    def test_store_creates_once(self):
        store = UserStore()
        first = store.get_or_create("psid_1", {"first_name": "Ada"})
        second = store.get_or_create("psid_1", {"first_name": "Grace"})
        assert first is second
        assert second.first_name == "Ada"
        assert store.count() == 1
        assert store.get("psid_2") is None


class TestDispatcherConfig:
    def test_defaults(self):
        config = DispatcherConfig()
        assert config.sequence_spacing_ms == 2000
        assert config.graph_url == "https://graph.facebook.com/v11.0"
        assert config.missing_settings() == [
            "PAGE_ID", "APP_ID", "PAGE_ACCESS_TOKEN", "VERIFY_TOKEN",
        ]

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PAGE_ID", "page_1")
        monkeypatch.setenv("APP_ID", "app_1")
        monkeypatch.setenv("PAGE_ACCESS_TOKEN", "token")
        monkeypatch.setenv("VERIFY_TOKEN", "verify")
        monkeypatch.setenv("API_VERSION", "v18.0")
        monkeypatch.setenv("CARE_PERSONA_ID", "persona_1")

        config = DispatcherConfig.from_env()

        assert config.missing_settings() == []
        assert config.graph_url == "https://graph.facebook.com/v18.0"
        assert config.care_persona_id == "persona_1"


class TestLocalizer:
    def test_interpolation(self):
        text = Localizer().t("fallback.payload", payload="USE_ROPE")
        assert text == "This is a default postback message for payload: USE_ROPE!"

    def test_unknown_locale_falls_back(self):
        assert Localizer("xx_XX").locale == "en_US"

    def test_missing_key_returns_key(self):
        assert Localizer().t("no.such.key") == "no.such.key"

    def test_missing_key_in_locale_uses_default(self):
        catalogs = {"en_US": {"greet": "Hello"}, "fr_FR": {}}
        assert Localizer("fr_FR", catalogs).t("greet") == "Hello"

    def test_braces_in_parameters_are_kept(self):
        text = Localizer().t("fallback.any", message="{weird}")
        assert "{weird}" in text
