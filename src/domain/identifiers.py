"""
Registration identifier generation.

Ids are opaque and unguessable, not sequential. Business uniqueness is
keyed on email, so no cross-process coordination is needed here.
"""

import secrets
import time

DEFAULT_PREFIX = "reg_"

_SUFFIX_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_SUFFIX_LENGTH = 9


def generate_registration_id(prefix: str = DEFAULT_PREFIX) -> str:
    """
    Generate a prefixed registration id.

    Format: ``<prefix><epoch milliseconds><9 random base36 chars>``.
    Uses the secrets module so suffixes are not predictable.
    """
    timestamp = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return f"{prefix}{timestamp}{suffix}"
