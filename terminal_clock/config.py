"""
Configuration
Loads the INI configuration file into a Config record and writes the
default one. Every problem is raised as a ConfigError subclass.
"""

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from terminal_clock.color import (
    ComputableColor,
    generate_gradient,
    load_ansi_color,
    load_hex_color,
    load_term_color,
    parse_hex_color,
)
from terminal_clock.errors import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigRangeError,
    MissingKeyError,
)

logger = logging.getLogger(__name__)

APP_DIR_NAME = "terminal-clock"

DEFAULT_CONFIG = """\
# terminal-clock configuration

[general]
# Say goodbye when leaving with Ctrl+C
polite = true
# Frames per second, must be at least 1
fps = 10

[format]
# strftime formats
time = %H:%M:%S
date = %Y-%m-%d

[styling]
# One of: term, hex, ansi, gradient
color_mode = term
# Terminal palette index, 0 to 15
color_term = 2
# 24-bit color, rrggbb or rgb
color_hex = 5ae
# 256-color ANSI index, 0 to 255
color_ansi = 105
# Hex key colors of the gradient, separated by spaces or commas
gradient = 5ae, f33, fc0
# Number of interpolated colors
gradient_steps = 60
# Go back and forth through the keys
gradient_loop = true
"""


@dataclass
class Config:
    be_polite: bool
    fps: int
    color: ComputableColor
    time_format: str
    date_format: str


def default_config_path() -> Path:
    """Platform config directory, e.g. ~/.config/terminal-clock/config"""
    if os.name == 'nt' and os.environ.get('APPDATA'):
        base = Path(os.environ['APPDATA'])
    elif os.environ.get('XDG_CONFIG_HOME'):
        base = Path(os.environ['XDG_CONFIG_HOME'])
    else:
        base = Path.home() / ".config"
    return base / APP_DIR_NAME / "config"


def write_default_config(path):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG, encoding='utf-8')
    logger.info("Wrote default configuration to %s", path)


def _get(ini: configparser.ConfigParser, section: str, key: str) -> str:
    try:
        return ini.get(section, key)
    except (configparser.NoSectionError, configparser.NoOptionError):
        raise MissingKeyError(section, key) from None


def _get_int(ini, section: str, key: str) -> int:
    value = _get(ini, section, key)
    try:
        return int(value)
    except ValueError:
        raise ConfigParseError(f"[{section}] {key}: expected an integer, got {value!r}") from None


def _get_bool(ini, section: str, key: str) -> bool:
    _get(ini, section, key)
    try:
        return ini.getboolean(section, key)
    except ValueError as e:
        raise ConfigParseError(f"[{section}] {key}: {e}") from None


def load_color(ini, debug: bool = False) -> ComputableColor:
    color_mode = _get(ini, "styling", "color_mode").strip().lower()

    if color_mode == "term":
        return ComputableColor.from_color(load_term_color(_get_int(ini, "styling", "color_term")))
    if color_mode == "hex":
        return ComputableColor.from_color(load_hex_color(_get(ini, "styling", "color_hex")))
    if color_mode == "ansi":
        return ComputableColor.from_color(load_ansi_color(_get_int(ini, "styling", "color_ansi")))
    if color_mode == "gradient":
        keys = [
            parse_hex_color(value)
            for value in _get(ini, "styling", "gradient").replace(',', ' ').split()
        ]
        if not keys:
            raise ConfigParseError("[styling] gradient: no key colors")

        steps = _get_int(ini, "styling", "gradient_steps")
        if steps < 0:
            raise ConfigRangeError(f"[styling] gradient_steps must not be negative, got {steps}")

        # The debug swatch shows the plain gradient
        loop = _get_bool(ini, "styling", "gradient_loop") and not debug
        return generate_gradient(keys, steps, loop)

    raise ConfigParseError(f"Invalid color mode: {color_mode}")


def load_from_file(path, debug: bool = False) -> Config:
    """Read and validate a configuration file"""
    path = Path(path)
    if not path.exists():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")

    # No interpolation, strftime formats are full of '%'
    ini = configparser.ConfigParser(interpolation=None)
    # OSError (directory, permissions) goes to the caller as is
    with open(path, encoding='utf-8') as f:
        try:
            ini.read_file(f)
        except UnicodeDecodeError as e:
            raise ConfigParseError(f"{path}: not valid UTF-8 ({e.reason} at byte {e.start})") from None
        except configparser.Error as e:
            raise ConfigParseError(f"{path}: {e}") from None

    fps = _get_int(ini, "general", "fps")
    if fps < 1:
        raise ConfigRangeError(f"[general] fps must be at least 1, got {fps}")

    config = Config(
        be_polite=_get_bool(ini, "general", "polite"),
        fps=fps,
        color=load_color(ini, debug),
        time_format=_get(ini, "format", "time"),
        date_format=_get(ini, "format", "date"),
    )
    logger.info("Loaded configuration from %s", path)
    return config
