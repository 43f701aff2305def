"""
Unit Tests for Notification Composer

Tests localization, name fallback and XML escaping.
"""

from heartbeat.domain.enums.language import Language
from heartbeat.services.alerting.message_composer import compose_message, escape_for_xml
from heartbeat.services.alerting.message_templates import ALERT_TEMPLATES


class TestEscaping:
    """Tests for XML escaping of user-provided names."""

    def test_escapes_all_special_characters(self) -> None:
        assert escape_for_xml("<b>&\"'") == "&lt;b&gt;&amp;&quot;&apos;"

    def test_plain_text_unchanged(self) -> None:
        assert escape_for_xml("Alice Smith") == "Alice Smith"

    def test_name_is_escaped_in_message(self) -> None:
        message = compose_message("Tom & <Jerry>", Language.EN)

        assert "Tom &amp; &lt;Jerry&gt;" in message.urgency
        assert "<Jerry>" not in message.to_twiml()


class TestLocalization:
    """Tests for template selection."""

    def test_english_message(self) -> None:
        message = compose_message("Alice", Language.EN)

        assert message.voice_locale == "en-US"
        assert "Alice" in message.urgency
        assert "Alice" in message.repeat
        assert message.greeting == ALERT_TEMPLATES[Language.EN].greeting
        assert message.closing == ALERT_TEMPLATES[Language.EN].closing

    def test_chinese_message(self) -> None:
        message = compose_message("小明", Language.ZH)

        assert message.voice_locale == "zh-CN"
        assert "小明" in message.urgency
        assert message.greeting == ALERT_TEMPLATES[Language.ZH].greeting

    def test_language_given_as_string(self) -> None:
        assert compose_message("Alice", "zh").voice_locale == "zh-CN"

    def test_unknown_language_falls_back_to_english(self) -> None:
        assert compose_message("Alice", "fr").voice_locale == "en-US"
        assert compose_message("Alice", None).voice_locale == "en-US"


class TestNameFallback:
    """Tests for blank display names."""

    def test_none_uses_generic_name(self) -> None:
        message = compose_message(None, Language.EN)
        assert "your friend" in message.urgency

    def test_blank_uses_generic_name(self) -> None:
        message = compose_message("   ", Language.EN)
        assert "your friend" in message.urgency

    def test_generic_name_is_localized(self) -> None:
        message = compose_message("", Language.ZH)
        assert ALERT_TEMPLATES[Language.ZH].generic_name in message.urgency

    def test_name_is_trimmed(self) -> None:
        message = compose_message("  Alice  ", Language.EN)
        assert " Alice has not" in message.urgency


class TestTwiml:
    """Tests for TwiML rendering."""

    def test_structure(self) -> None:
        twiml = compose_message("Alice", Language.EN).to_twiml()

        assert twiml.startswith("<Response>")
        assert twiml.endswith("</Response>")
        assert '<Say language="en-US">' in twiml
        assert '<Pause length="2"/>' in twiml
        assert twiml.count("<Say") == 2

    def test_body_precedes_closing(self) -> None:
        message = compose_message("Alice", Language.EN)
        twiml = message.to_twiml()

        assert twiml.index(message.urgency) < twiml.index(message.closing)
