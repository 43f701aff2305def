"""
Alert Message Templates

Spoken wording for emergency calls, one template per language.
Every template has the same four parts: greeting, urgency statement
naming the silent user, repeated urgency, closing.

The {name} placeholder receives an XML-escaped display name.
"""

from dataclasses import dataclass

from heartbeat.domain.enums.language import Language


@dataclass(frozen=True)
class AlertTemplate:
    """Four-part spoken alert template for one language."""

    language: Language
    greeting: str
    urgency: str
    repeat: str
    closing: str
    generic_name: str
    """Used when the user has no usable display name."""


ALERT_TEMPLATES: dict[Language, AlertTemplate] = {
    Language.EN: AlertTemplate(
        language=Language.EN,
        greeting="Hello, this is an emergency alert from the Heartbeat app.",
        urgency=(
            "Your friend {name} has not checked in for over two days. "
            "Please contact them as soon as possible to confirm their safety."
        ),
        repeat="Again, {name} has not checked in for over two days. Please check on them.",
        closing="Thank you for your attention. Goodbye.",
        generic_name="your friend",
    ),

    Language.ZH: AlertTemplate(
        language=Language.ZH,
        greeting="您好，这是Heartbeat应用的紧急提醒。",
        urgency="您的朋友 {name} 已经超过两天没有打卡，请尽快联系确认其安全状况。",
        repeat="重复一次，{name} 已超过两天未打卡，请关注其安全。",
        closing="感谢您的关注，再见。",
        generic_name="您的朋友",
    ),
}

DEFAULT_LANGUAGE = Language.EN


def get_template(language: Language) -> AlertTemplate:
    """Template for a language, falling back to the default locale."""
    return ALERT_TEMPLATES.get(language, ALERT_TEMPLATES[DEFAULT_LANGUAGE])
