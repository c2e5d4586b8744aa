"""
Debug dump
Prints the resolved configuration and a swatch of the color scheme.
"""

from typing import Optional

from rich.console import Console
from rich.text import Text

from terminal_clock import __version__

DEBUG_COLOR_DISPLAY_SIZE = 50


def debug_label(key: str) -> Text:
    return Text(f"{key}: ", style="bold")


def color_swatch(color) -> Text:
    """Single color as a solid bar, gradients as pairs of half blocks"""
    width = color.get_keys_count()
    if width == 1:
        return Text(" " * DEBUG_COLOR_DISPLAY_SIZE, style=f"on {color.get_value().rich_name()}")

    swatch = Text()
    for _ in range(width // 2):
        foreground = color.get_value().rich_name()
        color.update()
        background = color.get_value().rich_name()
        color.update()
        swatch.append("▌", style=f"{foreground} on {background}")
    return swatch


def print_debug_infos(config, console: Optional[Console] = None):
    console = console or Console(highlight=False)

    lines = [
        ("Version", __version__),
        ("FPS", str(config.fps)),
        ("Time format", config.time_format),
        ("Date format", config.date_format),
    ]
    for key, value in lines:
        console.print(debug_label(key) + Text(value))

    console.print(debug_label("Color scheme") + color_swatch(config.color))
