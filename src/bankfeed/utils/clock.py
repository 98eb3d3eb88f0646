"""Injectable time source.

Anything that needs "now" takes a ``Clock`` argument instead of calling
``datetime.now()`` directly, so tests pass a fixed clock rather than
patching a global.
"""

from datetime import datetime
from typing import Callable

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Return the current local time as an aware datetime."""
    return datetime.now().astimezone()


def fixed_clock(moment: datetime) -> Clock:
    """Return a clock that always reports ``moment``."""

    def _clock() -> datetime:
        return moment

    return _clock
