"""Record identifiers: ``<prefix>_<base36 ms timestamp><random base36>``."""

import secrets
import string
import time

_ALPHABET = string.digits + string.ascii_lowercase
RANDOM_LENGTH = 13


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_id(prefix: str = "id") -> str:
    """Generate a unique id for a store record.

    The timestamp part keeps ids roughly time-ordered, the random part makes
    ids created within the same millisecond distinct.
    """
    timestamp = _base36(time.time_ns() // 1_000_000)
    random_part = "".join(secrets.choice(_ALPHABET) for _ in range(RANDOM_LENGTH))
    return f"{prefix}_{timestamp}{random_part}"
