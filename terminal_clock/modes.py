"""
Mode drivers and the frame loop
Each driver owns the state of one display mode, reacts to keys and
renders a frame. run_frame_loop ties a driver to the terminal.
"""

import logging
import time
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from terminal_clock import rendering
from terminal_clock.symbols import SYMBOL_HEIGHT
from terminal_clock.terminal import (
    KEY_CTRL_C,
    KEY_DOWN,
    KEY_PAGE_DOWN,
    KEY_PAGE_UP,
    KEY_UP,
)
from terminal_clock.timing import Chronometer, Countdown, LapList, format_duration

logger = logging.getLogger(__name__)

MAX_VISIBLE_LAPSES = 10
PAUSE_LABEL = "[PAUSE]"
FINISHED_LABEL = "[FINISHED]"


class Mode(Enum):
    CLOCK = "clock"
    CHRONO = "chrono"
    COUNTDOWN = "countdown"
    TIMER = "timer"
    DEBUG = "debug"


def below_glyphs(height: int) -> int:
    """First text row under the big digits"""
    return height // 2 + SYMBOL_HEIGHT // 2 + 2


class ModeDriver:
    """Base class for a full-screen mode."""

    def handle_key(self, key: str):
        pass

    def render(self, term, color):
        raise NotImplementedError


class ClockDriver(ModeDriver):
    """Current local time with the date underneath."""

    def __init__(self, time_format: str, date_format: str, now: Callable[[], datetime] = datetime.now):
        self.time_format = time_format
        self.date_format = date_format
        self.now = now

    def render(self, term, color):
        date_time = self.now()

        rendering.draw_time(term, date_time.strftime(self.time_format), color)

        date = date_time.strftime(self.date_format)
        width, height = term.size()
        x = width // 2 - len(date) // 2
        y = below_glyphs(height)
        rendering.draw_text(term, date, x, y - 1, color)


class ChronoDriver(ModeDriver):
    """Stopwatch with laps."""

    def __init__(self, chronometer: Optional[Chronometer] = None):
        self.chronometer = chronometer if chronometer is not None else Chronometer()
        self.laps = LapList()
        self.chronometer.start()

    def handle_key(self, key: str):
        if key == ' ':
            self.chronometer.toggle_pause()
            logger.debug("Chronometer paused: %s", self.chronometer.is_paused())
        elif key == 'r':
            self.chronometer.reset()
            self.laps.clear()
            logger.debug("Chronometer reset")
        elif key == 'l':
            lapse = self.laps.record(self.chronometer.elapsed())
            logger.debug("Lap #%d at %s", len(self.laps), format_duration(lapse.time))
        elif key == KEY_DOWN:
            self.laps.scroll_down()
        elif key == KEY_UP:
            self.laps.scroll_up()
        elif key == KEY_PAGE_DOWN:
            self.laps.scroll_to_oldest()
        elif key == KEY_PAGE_UP:
            self.laps.scroll_to_newest()

    def render(self, term, color):
        rendering.draw_time(term, format_duration(self.chronometer.elapsed()), color)

        width, height = term.size()
        y = below_glyphs(height)
        rows = max(0, min(MAX_VISIBLE_LAPSES, height - y - 1))

        for i, (number, lapse) in enumerate(self.laps.visible(rows)):
            text = f"#{number:02}  --  +{format_duration(lapse.delta)}  --  {format_duration(lapse.time)}"
            x = width // 2 - len(text) // 2
            rendering.draw_text(term, text, x, y + i, color)

        if self.chronometer.is_paused():
            x = width // 2 - len(PAUSE_LABEL) // 2 - 1
            label_y = y - SYMBOL_HEIGHT + SYMBOL_HEIGHT // 2 + 1
            rendering.draw_text(term, PAUSE_LABEL, x, label_y, color)


class CountdownDriver(ModeDriver):
    """Countdown and timer modes."""

    def __init__(self, countdown: Countdown):
        self.countdown = countdown

    def handle_key(self, key: str):
        if key == ' ':
            self.countdown.toggle_pause()
            logger.debug("Countdown paused: %s", self.countdown.is_paused())
        elif key == 'r':
            self.countdown.reset()
            logger.debug("Countdown reset")

    def render(self, term, color):
        rendering.draw_time(term, format_duration(self.countdown.time_left()), color)

        if self.countdown.is_paused():
            label = PAUSE_LABEL
        elif self.countdown.is_finished():
            label = FINISHED_LABEL
        else:
            return

        width, height = term.size()
        x = width // 2 - len(label) // 2
        y = below_glyphs(height) - SYMBOL_HEIGHT - SYMBOL_HEIGHT // 2
        rendering.draw_text(term, label, x, y, color)


def create_driver(mode: Mode, config, duration: Optional[float] = None) -> ModeDriver:
    """Build the driver for a full-screen mode"""
    if mode == Mode.CLOCK:
        return ClockDriver(config.time_format, config.date_format)
    if mode == Mode.CHRONO:
        return ChronoDriver()
    if mode in (Mode.COUNTDOWN, Mode.TIMER):
        if duration is None:
            raise ValueError(f"{mode.value} mode needs a duration")
        return CountdownDriver(Countdown(duration))
    raise ValueError(f"{mode.value} is not a full-screen mode")


def run_frame_loop(config, term, driver: ModeDriver, sleep: Callable[[float], None] = time.sleep) -> int:
    """
    Run frames until Ctrl+C. Returns the number of frames rendered.

    Every frame: drain pending keys, clear, render, advance the color,
    flush, then sleep 1000 / fps milliseconds.
    """
    frame_interval = (1000 // config.fps) / 1000
    frames = 0
    quit_requested = False

    logger.info("Starting %s at %d fps", type(driver).__name__, config.fps)
    while True:
        # Handle input
        for key in term.poll_keys():
            if key == KEY_CTRL_C:
                quit_requested = True
            else:
                driver.handle_key(key)

        if quit_requested:
            break

        term.clear()
        driver.render(term, config.color.get_value())
        config.color.update()
        term.flush()
        frames += 1

        sleep(frame_interval)

    logger.info("Stopped after %d frames", frames)
    return frames
