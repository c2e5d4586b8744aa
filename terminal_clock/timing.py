"""
Timing state machines
Chronometer (count up) and Countdown (count down), both on a monotonic
clock, plus lap bookkeeping and duration formatting/parsing.

Instants and durations are float seconds. Durations never go negative.
"""

import logging
import re
import time
from typing import Callable, List, NamedTuple, Optional, Tuple

from terminal_clock.errors import DurationError

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

# Added to a fresh countdown so the first frame shows the full duration
COUNTDOWN_PAD = 1.0


def saturating_sub(a: float, b: float) -> float:
    return max(0.0, a - b)


class Chronometer:
    """Stopwatch. Running while start_time is set, paused otherwise."""

    def __init__(self, clock: Clock = time.monotonic):
        self.clock = clock
        self.start_time: Optional[float] = None
        self.paused_duration = 0.0

    def start(self):
        self.start_time = self.clock()

    def reset(self):
        self.start_time = None
        self.paused_duration = 0.0

    def toggle_pause(self):
        if self.start_time is not None:
            self.paused_duration += saturating_sub(self.clock(), self.start_time)
            self.start_time = None
        else:
            self.start_time = self.clock()

    def is_paused(self) -> bool:
        return self.start_time is None

    def elapsed(self) -> float:
        if self.start_time is not None:
            return saturating_sub(self.clock(), self.start_time) + self.paused_duration
        return self.paused_duration


class Countdown:
    """
    Count down from a fixed duration.

    Running while end_time is set. When paused, paused_duration holds the
    remaining time. Also drives the timer mode.
    """

    def __init__(self, duration: float, clock: Clock = time.monotonic):
        self.clock = clock
        self.duration = duration
        self.end_time: Optional[float] = self.clock() + duration + COUNTDOWN_PAD
        self.paused_duration = 0.0

    def toggle_pause(self):
        if self.end_time is not None:
            self.paused_duration += saturating_sub(self.end_time, self.clock())
            self.end_time = None
        else:
            self.end_time = self.clock() + self.paused_duration
            self.paused_duration = 0.0

    def time_left(self) -> float:
        if self.end_time is not None:
            remaining = saturating_sub(self.end_time, self.clock())
            return saturating_sub(remaining, self.paused_duration)
        return self.paused_duration

    def is_finished(self) -> bool:
        return int(self.time_left()) == 0

    def is_paused(self) -> bool:
        return self.end_time is None

    def reset(self):
        """Re-arm with the full duration, left paused"""
        # Paused at exactly the duration, the pad only applies to a fresh start
        self.end_time = None
        self.paused_duration = self.duration


class Lapse(NamedTuple):
    time: float
    delta: float


class LapList:
    """Recorded laps and the scroll position of the lap list."""

    def __init__(self):
        self.lapses: List[Lapse] = []
        self.scroll_offset = 0

    def __len__(self):
        return len(self.lapses)

    def record(self, elapsed: float) -> Lapse:
        if self.lapses:
            delta = saturating_sub(elapsed, self.lapses[-1].time)
        else:
            delta = elapsed

        lapse = Lapse(elapsed, delta)
        self.lapses.append(lapse)
        self.scroll_offset = 0
        return lapse

    def clear(self):
        self.lapses.clear()
        self.scroll_offset = 0

    def scroll_down(self):
        self.scroll_offset = min(self.scroll_offset + 1, len(self.lapses))

    def scroll_up(self):
        self.scroll_offset = max(0, self.scroll_offset - 1)

    def scroll_to_oldest(self):
        self.scroll_offset = len(self.lapses)

    def scroll_to_newest(self):
        self.scroll_offset = 0

    def clamp(self, rows: int):
        """Keep the offset within max(0, count - rows)"""
        self.scroll_offset = max(0, min(self.scroll_offset, len(self.lapses) - rows))

    def visible(self, rows: int) -> List[Tuple[int, Lapse]]:
        """(lap number, lapse) pairs to display, newest first"""
        self.clamp(rows)
        if rows <= 0:
            return []

        newest = len(self.lapses) - self.scroll_offset
        return [
            (number, self.lapses[number - 1])
            for number in range(newest, max(0, newest - rows), -1)
        ]


def format_duration(seconds: float) -> str:
    """HH:MM:SS from whole seconds"""
    seconds = int(seconds)
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    seconds = seconds % 60
    return f"{hours:02}:{minutes:02}:{seconds:02}"


DURATION_UNITS = {
    'ms': 0.001, 'msec': 0.001, 'msecs': 0.001,
    'millisecond': 0.001, 'milliseconds': 0.001,
    '': 1, 's': 1, 'sec': 1, 'secs': 1, 'second': 1, 'seconds': 1,
    'm': 60, 'min': 60, 'mins': 60, 'minute': 60, 'minutes': 60,
    'h': 3600, 'hr': 3600, 'hrs': 3600, 'hour': 3600, 'hours': 3600,
    'd': 86400, 'day': 86400, 'days': 86400,
}

DURATION_TERM = re.compile(r'\s*(\d+(?:\.\d+)?)\s*([a-z]*)\s*,?', re.IGNORECASE)


def parse_duration(text: str) -> float:
    """Parse '5m 30s', '1h30m', '90' or '1.5 hours' into seconds"""
    text = text.strip()
    if not text:
        raise DurationError("Empty duration")

    total = 0.0
    pos = 0
    while pos < len(text):
        match = DURATION_TERM.match(text, pos)
        if not match:
            raise DurationError(f"Invalid duration: {text!r}")

        value, unit = match.groups()
        if unit.lower() not in DURATION_UNITS:
            raise DurationError(f"Unknown duration unit {unit!r} in {text!r}")

        total += float(value) * DURATION_UNITS[unit.lower()]
        pos = match.end()

    logger.debug("Parsed duration %r as %.3fs", text, total)
    return total
