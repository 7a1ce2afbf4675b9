"""
Short identifiers for new people and roles.

An id is the current time in milliseconds (base36) followed by four random
base36 characters. Collisions are not checked; at this scale they are
practically impossible.
"""

from __future__ import annotations

import secrets
import threading
import time

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_SUFFIX_LENGTH = 4

_lock = threading.Lock()
_last_ms = 0


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def _now_ms() -> int:
    # never step backwards even if the wall clock does
    global _last_ms
    with _lock:
        _last_ms = max(_last_ms, int(time.time() * 1000))
        return _last_ms


def generate_id() -> str:
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return _base36(_now_ms()) + suffix
