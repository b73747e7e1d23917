"""
In-memory repository adapter - Implements RegistrationRepository protocol.

Process-local stand-in for a real store, used for local development
(``STORAGE_BACKEND=memory``) and tests. Each instance owns its own data;
construct one per process or per test and call reset() to clear it.

Email uniqueness is enforced under a lock so concurrent saves for the
same email cannot both succeed.
"""

import logging
import threading
from dataclasses import replace

from src.domain.exceptions import EmailAlreadyRegistered
from src.domain.models import RegistrationRecord

logger = logging.getLogger(__name__)


class InMemoryRegistrationRepository:
    """
    Implements RegistrationRepository protocol with dictionaries.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Records are copied on the way in and out, so callers never share
    mutable state with the store.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, RegistrationRecord] = {}
        self._email_index: dict[str, str] = {}  # email -> registration id

    def find_by_email(self, email: str) -> RegistrationRecord | None:
        with self._lock:
            registration_id = self._email_index.get(email.lower())
            if registration_id is None:
                return None
            return replace(self._records[registration_id])

    def find_by_id(self, registration_id: str) -> RegistrationRecord | None:
        with self._lock:
            record = self._records.get(registration_id)
            return replace(record) if record is not None else None

    def save(self, record: RegistrationRecord) -> RegistrationRecord:
        """
        Insert or update a registration keyed by id.

        Raises:
            EmailAlreadyRegistered: If a different registration owns the email
        """
        email = record.email.lower()
        with self._lock:
            owner = self._email_index.get(email)
            if owner is not None and owner != record.id:
                raise EmailAlreadyRegistered(email)

            previous = self._records.get(record.id)
            if previous is not None and previous.email != email:
                del self._email_index[previous.email]

            self._records[record.id] = replace(record, email=email)
            self._email_index[email] = record.id

        logger.debug("Registration saved: %s", record.id)
        return replace(record, email=email)

    def reset(self) -> None:
        """Remove all registrations."""
        with self._lock:
            self._records.clear()
            self._email_index.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
