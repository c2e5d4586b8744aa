from terminal_clock.color import RgbColor, TermColor
from terminal_clock.rendering import draw_text, draw_time, draw_time_symbol, draw_time_width

RED = TermColor(1)


def test_draw_time_width():
    assert draw_time_width("12:30") == 31
    assert draw_time_width("00:00:00") == 6 * 7 + 2 * 5 - 2
    assert draw_time_width("8") == 6
    assert draw_time_width("") == 0


def test_glyph_cells_use_background_color(term):
    draw_time_symbol(term, '8', 0, 0, RED)
    # 8 lights every cell except the two holes
    assert len(term.cells) == 30 - 4
    assert set(term.cells.values()) == {RED}
    assert (2, 1) not in term.cells
    assert (0, 0) in term.cells
    assert term.texts == []


def test_glyph_fully_outside_writes_nothing(term):
    draw_time_symbol(term, '8', 100, 100, RED)
    draw_time_symbol(term, '8', -20, 5, RED)
    draw_time_symbol(term, '8', 10, 24, RED)
    assert term.writes == 0


def test_glyph_partly_outside_is_clipped(term):
    draw_time_symbol(term, '0', 77, 0, RED)
    assert {x for x, _ in term.cells} == {77, 78, 79}

    term.clear()
    draw_time_symbol(term, '0', 0, -3, RED)
    assert {y for _, y in term.cells} == {0, 1}


def test_draw_time_is_centered(term):
    draw_time(term, "12:30", RED)

    xs = [x for x, _ in term.cells]
    ys = [y for _, y in term.cells]
    assert min(ys) == 10
    assert max(ys) == 14
    # '1' only lights its two rightmost columns
    assert min(xs) == 25 + 4
    assert max(xs) == 51 + 5


def test_draw_time_nudges_colon(term):
    draw_time(term, "12:30", RED)
    # The colon glyph starts one column early at x=38
    assert (40, 11) in term.cells
    assert (41, 13) in term.cells
    assert (39, 11) not in term.cells


def test_draw_time_on_tiny_terminal(make_term):
    term = make_term(width=10, height=3)
    draw_time(term, "00:00:00", RED)
    assert all(0 <= x < 10 and 0 <= y < 3 for x, y in term.cells)


def test_draw_text(term):
    color = RgbColor(1, 2, 3)
    draw_text(term, "2024-01-01", 5, 7, color)
    assert term.texts == [((5, 7), "2024-01-01", color, True)]


def test_draw_text_clips_left_edge(term):
    draw_text(term, "hello", -2, 0, RED)
    assert term.texts[0][:2] == ((0, 0), "llo")


def test_draw_text_clips_right_edge(term):
    draw_text(term, "hello", 78, 3, RED)
    assert term.texts[0][:2] == ((78, 3), "he")


def test_draw_text_outside_is_skipped(term):
    draw_text(term, "hello", -10, 0, RED)
    draw_text(term, "hello", 80, 0, RED)
    draw_text(term, "hello", 0, 24, RED)
    draw_text(term, "hello", 0, -1, RED)
    assert term.writes == 0
