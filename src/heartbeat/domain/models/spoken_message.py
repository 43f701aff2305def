"""
Spoken Message Model

The text a call provider reads to an emergency contact.
Built by the notification composer; rendered to TwiML for Twilio.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SpokenMessage:
    """
    Localized four-part alert message.

    All text parts are already escaped for embedding in XML markup.

    Attributes:
        voice_locale: Text-to-speech locale (e.g. "en-US")
        greeting: Opening line identifying the app
        urgency: Statement naming the silent user
        repeat: Repeated urgency statement
        closing: Final line after a pause
        pause_seconds: Pause between body and closing
    """

    voice_locale: str
    greeting: str
    urgency: str
    repeat: str
    closing: str
    pause_seconds: int = 2

    @property
    def body(self) -> str:
        """Main spoken body (greeting, urgency and repeat)."""
        return " ".join(part for part in (self.greeting, self.urgency, self.repeat) if part)

    def to_twiml(self) -> str:
        """Render as a TwiML voice response."""
        return "\n".join([
            "<Response>",
            f'  <Say language="{self.voice_locale}">{self.body}</Say>',
            f'  <Pause length="{self.pause_seconds}"/>',
            f'  <Say language="{self.voice_locale}">{self.closing}</Say>',
            "</Response>",
        ])

    def to_text(self) -> str:
        """Plain text rendering for logs and simulation."""
        return f"{self.body} {self.closing}"
