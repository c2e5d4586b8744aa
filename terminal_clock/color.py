"""
Color engine
Static colors and precomputed gradients, advanced one step per frame.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from colorama import Back, Fore
from colorama.ansi import code_to_chars

from terminal_clock.errors import ConfigParseError, ConfigRangeError

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

HEX_COLOR = re.compile(r'#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})')

# Terminal palette: (colorama attribute, rich color name)
TERM_COLORS = [
    ('BLACK', 'black'),
    ('RED', 'red'),
    ('GREEN', 'green'),
    ('YELLOW', 'yellow'),
    ('BLUE', 'blue'),
    ('MAGENTA', 'magenta'),
    ('CYAN', 'cyan'),
    ('WHITE', 'white'),
    ('LIGHTBLACK_EX', 'bright_black'),
    ('LIGHTRED_EX', 'bright_red'),
    ('LIGHTGREEN_EX', 'bright_green'),
    ('LIGHTYELLOW_EX', 'bright_yellow'),
    ('LIGHTBLUE_EX', 'bright_blue'),
    ('LIGHTMAGENTA_EX', 'bright_magenta'),
    ('LIGHTCYAN_EX', 'bright_cyan'),
    ('LIGHTWHITE_EX', 'bright_white'),
]


@dataclass(frozen=True)
class TermColor:
    """One of the 16 colors of the terminal palette."""
    index: int

    def __post_init__(self):
        if not 0 <= self.index < len(TERM_COLORS):
            raise ConfigRangeError(f"Invalid terminal color: {self.index}")

    def foreground(self) -> str:
        return getattr(Fore, TERM_COLORS[self.index][0])

    def background(self) -> str:
        return getattr(Back, TERM_COLORS[self.index][0])

    def rich_name(self) -> str:
        return TERM_COLORS[self.index][1]


@dataclass(frozen=True)
class RgbColor:
    """24-bit color."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ConfigRangeError(f"Invalid RGB channel: {channel}")

    def foreground(self) -> str:
        return code_to_chars(f"38;2;{self.r};{self.g};{self.b}")

    def background(self) -> str:
        return code_to_chars(f"48;2;{self.r};{self.g};{self.b}")

    def rich_name(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def as_tuple(self) -> RGB:
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class AnsiColor:
    """Index into the 256-color ANSI palette."""
    index: int

    def __post_init__(self):
        if not 0 <= self.index <= 255:
            raise ConfigRangeError(f"Invalid ANSI color: {self.index}")

    def foreground(self) -> str:
        return code_to_chars(f"38;5;{self.index}")

    def background(self) -> str:
        return code_to_chars(f"48;5;{self.index}")

    def rich_name(self) -> str:
        return f"color({self.index})"


Color = Union[TermColor, RgbColor, AnsiColor]


class ComputableColor:
    """Cyclic sequence of colors with a current position."""

    def __init__(self, values: Sequence[Color]):
        if not values:
            raise ValueError("A color scheme needs at least one color")
        self.values: List[Color] = list(values)
        self.current = 0

    @classmethod
    def from_color(cls, color: Color) -> 'ComputableColor':
        return cls([color])

    def update(self):
        """Advance to the next color, wrapping around."""
        self.current = (self.current + 1) % len(self.values)

    def get_value(self) -> Color:
        return self.values[self.current]

    def get_keys_count(self) -> int:
        return len(self.values)


def load_term_color(value: int) -> TermColor:
    return TermColor(value)


def load_ansi_color(value: int) -> AnsiColor:
    return AnsiColor(value)


def parse_hex_color(value: str) -> RGB:
    """Parse 'rrggbb' or the 'rgb' shorthand, with an optional leading '#'."""
    match = HEX_COLOR.fullmatch(value.strip())
    if match is None:
        raise ConfigParseError(f"Invalid hex color: {value}")

    digits = match.group(1)
    # Expand #XXX colors
    if len(digits) == 3:
        digits = ''.join(digit * 2 for digit in digits)

    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def load_hex_color(value: str) -> RgbColor:
    return RgbColor(*parse_hex_color(value))


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def lerp(a: int, b: int, t: float) -> int:
    return int(a + (b - a) * clamp01(t))


def generate_gradient(keys: Sequence[RGB], steps: int, loop: bool = False) -> ComputableColor:
    """
    Interpolate between key colors.

    Each segment between two adjacent keys contributes about
    steps / segments colors, sampled at t in (0, 1]. With loop, the keys
    are mirrored (a b c -> a b c b a) so the animation runs back and forth.
    A single key or a non-positive step count gives a static color.
    """
    keys = list(keys)
    if not keys:
        raise ValueError("A gradient needs at least one key color")

    if loop:
        keys = keys + keys[-2::-1]

    segments = len(keys) - 1
    if segments == 0 or steps <= 0:
        return ComputableColor.from_color(RgbColor(*keys[0]))

    segment_steps = max(1, round(steps / segments))
    gradient = []
    for current, following in zip(keys, keys[1:]):
        for i in range(1, segment_steps + 1):
            t = i / segment_steps
            gradient.append(RgbColor(
                lerp(current[0], following[0], t),
                lerp(current[1], following[1], t),
                lerp(current[2], following[2], t),
            ))

    logger.debug("Generated gradient: %d keys, %d colors", len(keys), len(gradient))
    return ComputableColor(gradient)
