"""
Notification dispatcher - Best-effort delivery of registration messages.

Wraps a NotificationSender port. Delivery failures are logged and
reported as False; they never propagate to the workflow.
"""

import logging
from dataclasses import dataclass

from .models import RegistrationRecord
from .ports import NotificationSender

logger = logging.getLogger(__name__)


@dataclass
class NotificationDispatcher:
    """Issues confirmation and admin-alert notifications for a registration."""

    sender: NotificationSender

    def send_confirmation(self, record: RegistrationRecord) -> bool:
        """Send the registrant's confirmation. Returns True if delivered."""
        try:
            self.sender.send_confirmation(record)
        except Exception:
            logger.exception("Failed to send confirmation email for registration %s", record.id)
            return False
        return True

    def send_admin_alert(self, record: RegistrationRecord) -> bool:
        """Send the admin alert. Returns True if delivered."""
        try:
            self.sender.send_admin_alert(record)
        except Exception:
            logger.exception("Failed to send admin notification for registration %s", record.id)
            return False
        return True
