import itertools
import string
import threading
import time

_DIGITS = string.digits + string.ascii_lowercase


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_DIGITS[rem])
    return "".join(reversed(digits))


class IdFactory:
    """Generates ``<prefix>-<ms timestamp base36>-<counter base36>`` ids."""

    def __init__(self, clock=time.time):
        self._clock = clock
        self._counter = itertools.count()
        self._lock = threading.Lock()

    def __call__(self, prefix: str = "item") -> str:
        with self._lock:
            n = next(self._counter)
        millis = int(self._clock() * 1000)
        return f"{prefix}-{to_base36(millis)}-{to_base36(n)}"


next_id = IdFactory()
