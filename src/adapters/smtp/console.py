"""
Console notification sender adapter - Implements NotificationSender protocol.

This module provides a console-based implementation of the domain's
notification port, logging confirmation and admin-alert messages to
stdout for demo purposes.
"""

import logging

from src.domain.models import RegistrationRecord

logger = logging.getLogger(__name__)


class ConsoleNotificationSender:
    """
    Implements NotificationSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints notifications to stdout.
    """

    def __init__(self, admin_email: str) -> None:
        """
        Args:
            admin_email: Recipient of new-registration alerts
        """
        self.admin_email = admin_email

    def send_confirmation(self, record: RegistrationRecord) -> None:
        """
        Log the registrant's confirmation (simulates email delivery).

        In production, this would be replaced with an SMTP adapter.
        Logged at INFO level so it appears in the application log.
        """
        logger.info(
            "[CONFIRMATION] To: %s Registration: %s Schedule: %s",
            record.email,
            record.id,
            record.schedule,
        )

    def send_admin_alert(self, record: RegistrationRecord) -> None:
        """Log the new-registration alert addressed to the administrator."""
        logger.info(
            "[ADMIN ALERT] To: %s Registration: %s Student: %s %s <%s>",
            self.admin_email,
            record.id,
            record.first_name,
            record.last_name,
            record.email,
        )
