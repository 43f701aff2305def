"""
Language Enumeration

Supported locales for spoken alert messages.
"""

from enum import StrEnum
from typing import Optional


class Language(StrEnum):
    """
    Alert message language.

    Each value maps to a spoken-voice locale used by the
    call provider's text-to-speech engine.
    """

    EN = "en"
    """English (default)."""

    ZH = "zh"
    """Simplified Chinese."""

    @property
    def voice_locale(self) -> str:
        """Locale tag for the text-to-speech voice."""
        return {
            Language.EN: "en-US",
            Language.ZH: "zh-CN",
        }[self]

    @classmethod
    def parse(cls, value: Optional[str]) -> "Language":
        """
        Parse a stored or requested language code.

        Unrecognized or missing values fall back to English.
        """
        if isinstance(value, Language):
            return value
        if not value:
            return cls.EN
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.EN
