"""
Rendering primitives
Big block digits drawn with colored backgrounds, plus plain bold text.
Anything falling outside the terminal is clipped silently.
"""

from terminal_clock.symbols import SYMBOL_HEIGHT, SYMBOL_WIDTH, symbol_to_render_data

# Horizontal advance of one glyph, including the gap after it
SYMBOL_ADVANCE = SYMBOL_WIDTH + 1


def draw_time_width(time: str) -> int:
    """Width in cells of a big-digit string, without trailing space"""
    if not time:
        return 0

    width = 0
    for char in time:
        width += SYMBOL_HEIGHT if char == ':' else SYMBOL_ADVANCE

    width -= 1 if len(time) == 1 else 2
    return width


def draw_time(term, time: str, color):
    """Draw a big-digit string centered on the screen"""
    width, height = term.size()

    x = width // 2 - draw_time_width(time) // 2
    y = height // 2 - SYMBOL_HEIGHT // 2
    for char in time:
        # Colons are narrower, pull them closer to their neighbours
        if char == ':':
            x -= 1

        draw_time_symbol(term, char, x, y, color)
        x += SYMBOL_ADVANCE

        if char == ':':
            x -= 1


def draw_time_symbol(term, symbol: str, x: int, y: int, color):
    """Paint every lit cell of a glyph as a blank with a colored background"""
    width, height = term.size()
    data = symbol_to_render_data(symbol)

    for oy, row in enumerate(data):
        for ox, lit in enumerate(row):
            if not lit:
                continue

            cx, cy = x + ox, y + oy
            if not (0 <= cx < width and 0 <= cy < height):
                continue

            term.move_to(cx, cy)
            term.set_background(color)
            term.write(" ")
            term.reset_style()


def draw_text(term, text: str, x: int, y: int, color):
    """Draw bold text, trimming whatever runs past either edge"""
    width, height = term.size()
    if not 0 <= y < height:
        return

    if x < 0:
        text = text[-x:]
        x = 0
    if x + len(text) > width:
        text = text[:max(0, width - x)]
    if not text:
        return

    term.move_to(x, y)
    term.set_foreground(color)
    term.set_bold()
    term.write(text)
    term.reset_style()
