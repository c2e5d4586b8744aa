import pytest

from terminal_clock.color import ComputableColor, TermColor
from terminal_clock.config import Config


class FakeClock:
    """Monotonic clock driven by the test. tick is added after every read."""

    def __init__(self, start=1000.0, tick=0.0):
        self.now = start
        self.tick = tick

    def __call__(self):
        value = self.now
        self.now += self.tick
        return value

    def advance(self, seconds):
        self.now += seconds


class FakeTerminal:
    """Records draw calls instead of emitting escape sequences."""

    def __init__(self, width=80, height=24, keys=None):
        self.width = width
        self.height = height
        # One list of keys per frame; Ctrl+C once the script runs out
        self.key_script = list(keys or [])
        self.cursor = (0, 0)
        self.background = None
        self.foreground = None
        self.bold = False
        self.cells = {}
        self.texts = []
        self.writes = 0
        self.calls = []

    def size(self):
        return self.width, self.height

    def poll_keys(self):
        self.calls.append('poll')
        if self.key_script:
            return self.key_script.pop(0)
        return ['ctrl+c']

    def clear(self):
        self.calls.append('clear')
        self.cells = {}
        self.texts = []

    def move_to(self, x, y):
        self.cursor = (x, y)

    def set_background(self, color):
        self.background = color

    def set_foreground(self, color):
        self.foreground = color

    def set_bold(self):
        self.bold = True

    def reset_style(self):
        self.background = None
        self.foreground = None
        self.bold = False

    def write(self, text):
        self.writes += 1
        if text == " " and self.background is not None:
            self.cells[self.cursor] = self.background
        else:
            self.texts.append((self.cursor, text, self.foreground, self.bold))

    def flush(self):
        self.calls.append('flush')

    def text_at_row(self, y):
        return [text for (x, row), text, _, _ in self.texts if row == y]

    def all_text(self):
        return [text for _, text, _, _ in self.texts]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def term():
    return FakeTerminal()


@pytest.fixture
def config():
    return Config(
        be_polite=False,
        fps=10,
        color=ComputableColor.from_color(TermColor(2)),
        time_format="%H:%M:%S",
        date_format="%Y-%m-%d",
    )


@pytest.fixture
def make_clock():
    return FakeClock


@pytest.fixture
def make_term():
    return FakeTerminal
