"""Opaque identifier generation for stored books."""
import itertools
import secrets
import threading
import time

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("Cannot encode a negative number")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


class IdGenerator:
    """Issues ids unique within the process.

    Each id is the wall-clock time in milliseconds, a monotonically increasing
    counter and a random suffix, all base36 encoded. The counter alone keeps
    ids unique even when several are issued in the same millisecond.
    """

    def __init__(self, suffix_length: int = 8):
        self._counter = itertools.count(1)
        self._lock = threading.Lock()
        self._suffix_length = suffix_length

    def generate(self) -> str:
        with self._lock:
            sequence = next(self._counter)
        millis = time.time_ns() // 1_000_000
        suffix = "".join(secrets.choice(_ALPHABET) for _ in range(self._suffix_length))
        return f"{to_base36(millis)}{to_base36(sequence).rjust(4, '0')}{suffix}"
