"""
Alert Orchestrator

Notifies every eligible emergency contact of one user.

Slot 1 is always attempted, so a user with no phone on slot 1
still yields a failed result rather than silence. Later slots are
attempted only when they carry a phone number. Contacts are called
one after another, each independently of the others' outcome.
"""

from heartbeat.config.logging_config import get_logger
from heartbeat.domain.models.dispatch import DispatchResult
from heartbeat.domain.models.user import User
from heartbeat.services.alerting.contact_dispatcher import ContactDispatcher
from heartbeat.services.alerting.message_composer import compose_message

logger = get_logger(__name__)


class AlertOrchestrator:
    """Fans one alert out to a user's emergency contacts."""

    def __init__(self, dispatcher: ContactDispatcher) -> None:
        self._dispatcher = dispatcher

    async def dispatch_all(self, user: User) -> list[DispatchResult]:
        """
        Compose the user's alert once and call each eligible contact.

        Returns:
            Results in slot order; an empty list never occurs
        """
        message = compose_message(user.display_name, user.language)
        results: list[DispatchResult] = []

        for slot, contact in enumerate(user.emergency_contacts, start=1):
            if slot > 1 and not contact.has_phone:
                continue
            results.append(await self._dispatcher.dispatch(contact, message, slot))

        logger.info(
            "Emergency contacts notified",
            user_id=user.user_id,
            attempted=len(results),
            succeeded=sum(1 for r in results if r.ok),
            language=user.language.value,
        )

        return results
