"""
Big-digit font
Block glyphs, 6 cells wide and 5 rows tall, used for the main display.
"""

from typing import Dict, Tuple

SYMBOL_WIDTH = 6
SYMBOL_HEIGHT = 5

Glyph = Tuple[Tuple[bool, ...], ...]

# Block art, one string per row
GLYPH_ART = {
    '0': [
        "██████",
        "██  ██",
        "██  ██",
        "██  ██",
        "██████"
    ],
    '1': [
        "    ██",
        "    ██",
        "    ██",
        "    ██",
        "    ██"
    ],
    '2': [
        "██████",
        "    ██",
        "██████",
        "██    ",
        "██████"
    ],
    '3': [
        "██████",
        "    ██",
        "██████",
        "    ██",
        "██████"
    ],
    '4': [
        "██  ██",
        "██  ██",
        "██████",
        "    ██",
        "    ██"
    ],
    '5': [
        "██████",
        "██    ",
        "██████",
        "    ██",
        "██████"
    ],
    '6': [
        "██████",
        "██    ",
        "██████",
        "██  ██",
        "██████"
    ],
    '7': [
        "██████",
        "    ██",
        "    ██",
        "    ██",
        "    ██"
    ],
    '8': [
        "██████",
        "██  ██",
        "██████",
        "██  ██",
        "██████"
    ],
    '9': [
        "██████",
        "██  ██",
        "██████",
        "    ██",
        "██████"
    ],
    ':': [
        "      ",
        "  ██  ",
        "      ",
        "  ██  ",
        "      "
    ],
    '-': [
        "      ",
        "      ",
        " ████ ",
        "      ",
        "      "
    ],
    ' ': [
        "      ",
        "      ",
        "      ",
        "      ",
        "      "
    ],
    'A': [
        "██████",
        "██  ██",
        "██████",
        "██  ██",
        "██  ██"
    ],
    'P': [
        "██████",
        "██  ██",
        "██████",
        "██    ",
        "██    "
    ],
    'M': [
        "██████",
        "██ █ █",
        "██ █ █",
        "██ █ █",
        "██ █ █"
    ],
}

# Shown for any character the font does not cover
ERROR_ART = [
    "██  ██",
    " ████ ",
    "  ██  ",
    " ████ ",
    "██  ██"
]


def compile_glyph(art) -> Glyph:
    """Turn block art into an immutable grid of on/off cells."""
    if len(art) != SYMBOL_HEIGHT or any(len(row) != SYMBOL_WIDTH for row in art):
        raise ValueError(f"Glyph art must be {SYMBOL_WIDTH}x{SYMBOL_HEIGHT}")
    return tuple(tuple(cell != ' ' for cell in row) for row in art)


GLYPHS: Dict[str, Glyph] = {char: compile_glyph(art) for char, art in GLYPH_ART.items()}
ERROR_GLYPH: Glyph = compile_glyph(ERROR_ART)


def symbol_to_render_data(char: str) -> Glyph:
    """Return the glyph for a character, or the error glyph."""
    return GLYPHS.get(char, ERROR_GLYPH)
