"""
Notification Composer

Builds the localized spoken message for an emergency call.
"""

from typing import Optional, Union
from xml.sax.saxutils import escape

from heartbeat.domain.enums.language import Language
from heartbeat.domain.models.spoken_message import SpokenMessage
from heartbeat.services.alerting.message_templates import get_template

_QUOTE_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def escape_for_xml(value: str) -> str:
    """Escape &, <, >, double and single quotes for XML text and attributes."""
    return escape(str(value), _QUOTE_ENTITIES)


def compose_message(
    display_name: Optional[str],
    language: Union[Language, str, None] = Language.EN,
) -> SpokenMessage:
    """
    Compose the spoken alert for a user.

    Args:
        display_name: Name to speak; blank falls back to a generic phrase
        language: Message locale; unknown values fall back to English

    Returns:
        SpokenMessage with escaped text parts
    """
    template = get_template(Language.parse(language))

    name = (display_name or "").strip() or template.generic_name
    spoken_name = escape_for_xml(name)

    return SpokenMessage(
        voice_locale=template.language.voice_locale,
        greeting=template.greeting,
        urgency=template.urgency.format(name=spoken_name),
        repeat=template.repeat.format(name=spoken_name),
        closing=template.closing,
    )
