from datetime import datetime

import pytest

from terminal_clock.color import ComputableColor, TermColor
from terminal_clock.modes import (
    ChronoDriver,
    ClockDriver,
    CountdownDriver,
    Mode,
    ModeDriver,
    create_driver,
    run_frame_loop,
)
from terminal_clock.timing import Chronometer, Countdown


class RecordingDriver(ModeDriver):
    def __init__(self, term):
        self.term = term
        self.keys = []
        self.colors = []

    def handle_key(self, key):
        self.keys.append(key)

    def render(self, term, color):
        term.calls.append('render')
        self.colors.append(color)


def test_quit_before_first_frame(config, term):
    driver = RecordingDriver(term)
    sleeps = []
    frames = run_frame_loop(config, term, driver, sleep=sleeps.append)

    assert frames == 0
    assert driver.colors == []
    assert sleeps == []
    assert term.calls == ['poll']


def test_frame_order(config, make_term):
    term = make_term(keys=[[], []])
    driver = RecordingDriver(term)
    sleeps = []
    frames = run_frame_loop(config, term, driver, sleep=sleeps.append)

    assert frames == 2
    assert term.calls == ['poll', 'clear', 'render', 'flush'] * 2 + ['poll']
    assert sleeps == [0.1, 0.1]


def test_frame_interval_uses_whole_milliseconds(config, make_term):
    config.fps = 3
    sleeps = []
    run_frame_loop(config, make_term(keys=[[]]), RecordingDriver(None), sleep=sleeps.append)
    assert sleeps == [0.333]


def test_keys_reach_driver_and_ctrl_c_quits(config, make_term):
    term = make_term(keys=[[' ', 'l'], ['up', 'ctrl+c']])
    driver = RecordingDriver(term)
    frames = run_frame_loop(config, term, driver, sleep=lambda _: None)

    assert frames == 1
    assert driver.keys == [' ', 'l', 'up']


def test_color_advances_once_per_frame(config, make_term):
    config.color = ComputableColor([TermColor(1), TermColor(2), TermColor(3)])
    term = make_term(keys=[[], [], [], []])
    driver = RecordingDriver(term)
    run_frame_loop(config, term, driver, sleep=lambda _: None)

    assert driver.colors == [TermColor(1), TermColor(2), TermColor(3), TermColor(1)]
    assert config.color.current == 1


def test_clock_driver_draws_time_and_date(term):
    fixed = datetime(2024, 5, 17, 12, 34, 56)
    driver = ClockDriver("%H:%M", "%Y-%m-%d", now=lambda: fixed)
    driver.render(term, TermColor(4))

    assert term.cells
    # Date sits one row under the glyphs
    assert term.text_at_row(15) == ["2024-05-17"]
    assert term.texts[0][0] == (40 - 5, 15)


class TestChronoDriver:
    def test_starts_running(self, clock):
        driver = ChronoDriver(Chronometer(clock))
        assert not driver.chronometer.is_paused()

    def test_keys(self, clock):
        driver = ChronoDriver(Chronometer(clock))
        clock.advance(5)
        driver.handle_key('l')
        clock.advance(3)
        driver.handle_key('l')
        assert [lapse.delta for lapse in driver.laps.lapses] == [5, 3]

        driver.handle_key(' ')
        assert driver.chronometer.is_paused()

        driver.handle_key('r')
        assert driver.chronometer.elapsed() == 0
        assert len(driver.laps) == 0

    def test_scroll_keys(self, clock):
        driver = ChronoDriver(Chronometer(clock))
        for _ in range(5):
            driver.handle_key('l')

        driver.handle_key('down')
        driver.handle_key('down')
        assert driver.laps.scroll_offset == 2
        driver.handle_key('up')
        assert driver.laps.scroll_offset == 1
        driver.handle_key('pagedown')
        assert driver.laps.scroll_offset == 5
        driver.handle_key('pageup')
        assert driver.laps.scroll_offset == 0

    def test_render_laps_and_pause(self, clock, term):
        driver = ChronoDriver(Chronometer(clock))
        clock.advance(61)
        driver.handle_key('l')
        clock.advance(2)
        driver.handle_key('l')
        driver.handle_key(' ')

        driver.render(term, TermColor(3))
        text = term.all_text()
        assert "#02  --  +00:00:02  --  00:01:03" in text
        assert "#01  --  +00:01:01  --  00:01:01" in text
        assert "[PAUSE]" in text
        assert term.text_at_row(16) == ["#02  --  +00:00:02  --  00:01:03"]

    def test_render_clamps_scroll_to_screen(self, clock, make_term):
        term = make_term(width=80, height=20)
        driver = ChronoDriver(Chronometer(clock))
        for _ in range(12):
            driver.handle_key('l')
        driver.handle_key('pagedown')

        driver.render(term, TermColor(3))
        # Rows 14..18 are free under the glyphs on a 20-row screen
        assert driver.laps.scroll_offset == 12 - 5
        assert len([t for t in term.all_text() if t.startswith('#')]) == 5


class TestCountdownDriver:
    def test_running_has_no_label(self, clock, term):
        driver = CountdownDriver(Countdown(30, clock))
        clock.advance(0.5)
        driver.render(term, TermColor(1))
        assert term.texts == []

    def test_pause_label(self, clock, term):
        driver = CountdownDriver(Countdown(30, clock))
        driver.handle_key(' ')
        driver.render(term, TermColor(1))
        assert term.all_text() == ["[PAUSE]"]

    def test_finished_label(self, clock, term):
        driver = CountdownDriver(Countdown(2, clock))
        clock.advance(10)
        driver.render(term, TermColor(1))
        assert term.all_text() == ["[FINISHED]"]

    def test_reset_key_pauses(self, clock):
        driver = CountdownDriver(Countdown(30, clock))
        clock.advance(10)
        driver.handle_key('r')
        assert driver.countdown.is_paused()
        assert driver.countdown.time_left() == 30


def test_create_driver(config):
    assert isinstance(create_driver(Mode.CLOCK, config), ClockDriver)
    assert isinstance(create_driver(Mode.CHRONO, config), ChronoDriver)
    assert isinstance(create_driver(Mode.COUNTDOWN, config, 60), CountdownDriver)
    assert isinstance(create_driver(Mode.TIMER, config, 60), CountdownDriver)


def test_create_driver_rejects_bad_requests(config):
    with pytest.raises(ValueError):
        create_driver(Mode.TIMER, config)
    with pytest.raises(ValueError):
        create_driver(Mode.DEBUG, config)
