"""
Terminal abstraction
Alternate screen, raw keyboard input and buffered ANSI output for the
full-screen modes. Output is queued and only written on flush().
"""

import logging
import os
import select
import sys
from typing import List, Tuple

from colorama import Cursor, Style
from colorama.ansi import CSI, clear_screen

if os.name != 'nt':
    import termios
    import tty

logger = logging.getLogger(__name__)

DEFAULT_SIZE = (80, 24)

KEY_CTRL_C = 'ctrl+c'
KEY_ESCAPE = 'escape'
KEY_UP = 'up'
KEY_DOWN = 'down'
KEY_LEFT = 'left'
KEY_RIGHT = 'right'
KEY_PAGE_UP = 'pageup'
KEY_PAGE_DOWN = 'pagedown'

ESCAPE_SEQUENCES = {
    '\x1b[A': KEY_UP,
    '\x1b[B': KEY_DOWN,
    '\x1b[C': KEY_RIGHT,
    '\x1b[D': KEY_LEFT,
    '\x1bOA': KEY_UP,
    '\x1bOB': KEY_DOWN,
    '\x1bOC': KEY_RIGHT,
    '\x1bOD': KEY_LEFT,
    '\x1b[5~': KEY_PAGE_UP,
    '\x1b[6~': KEY_PAGE_DOWN,
}

# Second byte of msvcrt's two-byte special keys, as the matching ANSI sequence
WINDOWS_SPECIAL_KEYS = {
    'H': '\x1b[A',
    'P': '\x1b[B',
    'K': '\x1b[D',
    'M': '\x1b[C',
    'I': '\x1b[5~',
    'Q': '\x1b[6~',
}

ENTER_ALTERNATE_SCREEN = CSI + '?1049h'
LEAVE_ALTERNATE_SCREEN = CSI + '?1049l'
HIDE_CURSOR = CSI + '?25l'
SHOW_CURSOR = CSI + '?25h'


def decode_keys(data: str) -> List[str]:
    """Split raw terminal input into key names."""
    keys = []
    i = 0
    while i < len(data):
        char = data[i]
        if char == '\x1b':
            for sequence, name in ESCAPE_SEQUENCES.items():
                if data.startswith(sequence, i):
                    keys.append(name)
                    i += len(sequence)
                    break
            else:
                keys.append(KEY_ESCAPE)
                i += 1
            continue

        if char == '\x03':
            keys.append(KEY_CTRL_C)
        else:
            keys.append(char.lower())
        i += 1

    return keys


class Terminal:
    """Full-screen terminal session."""

    def __init__(self, stream=None, input_stream=None):
        self.stream = stream if stream is not None else sys.stdout
        self.input_stream = input_stream if input_stream is not None else sys.stdin
        self.buffer: List[str] = []
        self.old_settings = None

    def __enter__(self):
        self.enter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.leave()
        return False

    def enter(self):
        """Switch to the alternate screen, hide the cursor and enable raw mode"""
        self.stream.write(ENTER_ALTERNATE_SCREEN + HIDE_CURSOR)
        self.stream.flush()

        try:
            if os.name != 'nt' and self.input_stream.isatty():
                fd = self.input_stream.fileno()
                self.old_settings = termios.tcgetattr(fd)
                tty.setraw(fd)
        except BaseException:
            self.leave()
            raise

        logger.debug("Entered full-screen mode")

    def leave(self):
        """Restore input settings, leave the alternate screen and show the cursor"""
        try:
            if self.old_settings is not None:
                termios.tcsetattr(self.input_stream.fileno(), termios.TCSADRAIN, self.old_settings)
                self.old_settings = None
        finally:
            self.buffer.clear()
            self.stream.write(Style.RESET_ALL + LEAVE_ALTERNATE_SCREEN + SHOW_CURSOR)
            self.stream.flush()
            logger.debug("Left full-screen mode")

    def size(self) -> Tuple[int, int]:
        """Get terminal dimensions as (width, height)"""
        try:
            columns, rows = os.get_terminal_size(self.stream.fileno())
            return columns, rows
        except (OSError, ValueError):
            return DEFAULT_SIZE

    def read_pending(self) -> str:
        """Read everything currently queued on the input, without blocking"""
        if os.name == 'nt':
            import msvcrt
            chars = []
            while msvcrt.kbhit():
                char = msvcrt.getwch()
                if char in ('\x00', '\xe0'):
                    chars.append(WINDOWS_SPECIAL_KEYS.get(msvcrt.getwch(), ''))
                else:
                    chars.append(char)
            return ''.join(chars)

        fd = self.input_stream.fileno()
        data = b''
        while select.select([fd], [], [], 0)[0]:
            chunk = os.read(fd, 1024)
            if not chunk:
                break
            data += chunk
        return data.decode('utf-8', errors='ignore')

    def poll_keys(self) -> List[str]:
        return decode_keys(self.read_pending())

    def clear(self):
        self.buffer.append(clear_screen(2))

    def move_to(self, x: int, y: int):
        # colorama positions are 1-based
        self.buffer.append(Cursor.POS(x + 1, y + 1))

    def set_foreground(self, color):
        self.buffer.append(color.foreground())

    def set_background(self, color):
        self.buffer.append(color.background())

    def set_bold(self):
        self.buffer.append(Style.BRIGHT)

    def reset_style(self):
        self.buffer.append(Style.RESET_ALL)

    def write(self, text: str):
        self.buffer.append(text)

    def flush(self):
        """Write the queued frame to the terminal"""
        self.stream.write(''.join(self.buffer))
        self.buffer.clear()
        self.stream.flush()
