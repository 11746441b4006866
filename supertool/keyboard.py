"""On-screen numeric keypad: key layout, placement and the key events it produces."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

# Key codes sent with the events, as the windowing toolkit defines them.
QT_KEY_PLUS = 0x2B
QT_KEY_MINUS = 0x2D
QT_KEY_PERIOD = 0x2E
QT_KEY_COLON = 0x3A
QT_KEY_BACKSPACE = 0x01000003

DEFAULT_SIZE = 250
BUTTON_SIZE = 48
ROW_SPACE = 7
COLUMN_SPACE = 7


class Key(IntEnum):
    KEY_0 = 0
    KEY_1 = 1
    KEY_2 = 2
    KEY_3 = 3
    KEY_4 = 4
    KEY_5 = 5
    KEY_6 = 6
    KEY_7 = 7
    KEY_8 = 8
    KEY_9 = 9
    POSITIVE = 10
    NEGATIVE = 11
    DOT = 12
    COLON = 13
    BACKSPACE = 14
    QUIT = 15

    @property
    def char(self) -> str:
        """The character the key stands for."""
        return _KEY_CHARS[self]

    @property
    def is_digit(self) -> bool:
        return self <= Key.KEY_9


_KEY_CHARS = {
    **{Key(i): str(i) for i in range(10)},
    Key.POSITIVE: "+",
    Key.NEGATIVE: "-",
    Key.DOT: ".",
    Key.COLON: ":",
    Key.BACKSPACE: "\b",
    Key.QUIT: "q",
}

_KEY_CODES = {
    Key.POSITIVE: QT_KEY_PLUS,
    Key.NEGATIVE: QT_KEY_MINUS,
    Key.DOT: QT_KEY_PERIOD,
    Key.COLON: QT_KEY_COLON,
    Key.BACKSPACE: QT_KEY_BACKSPACE,
}

_ROWS = (
    (Key.KEY_7, Key.KEY_8, Key.KEY_9, Key.BACKSPACE),
    (Key.KEY_4, Key.KEY_5, Key.KEY_6, Key.POSITIVE),
    (Key.KEY_1, Key.KEY_2, Key.KEY_3, Key.NEGATIVE),
    (Key.COLON, Key.KEY_0, Key.DOT, Key.QUIT),
)

_LABELS = {Key.BACKSPACE: "DEL", Key.QUIT: "退出"}


@dataclass(frozen=True)
class KeyEvent:
    """A key press or release delivered to the focused input field."""

    press: bool
    code: int
    text: str = ""


class NumberKeyboard:
    """A numeric keypad that pops up next to the field being edited."""

    def __init__(self, width: int = DEFAULT_SIZE, height: int = DEFAULT_SIZE) -> None:
        self.width = width
        self.height = height
        self.visible = False

    def rows(self) -> list[list[Key]]:
        """The keys, row by row from top to bottom."""
        return [list(row) for row in _ROWS]

    def label(self, key: Key) -> str:
        """The text shown on a key's button."""
        return _LABELS.get(key, key.char)

    def place(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        desktop_width: int,
        desktop_height: int,
    ) -> tuple[int, int]:
        """Return where to put the keypad for a field at (x, y) of the given size.

        The keypad goes below the field, or above it if it would run off the bottom,
        centred horizontally and kept within the desktop's width.
        """
        top = y + height
        if top + self.height > desktop_height:
            top = y - height - self.height
        left = x - int((self.width - width) / 2)
        if left < 0:
            left = 0
        elif left + self.width > desktop_width:
            left = desktop_width - self.width
        return left, top

    def events(self, key: Key) -> list[KeyEvent]:
        """The press and release events a key sends; the quit key sends none."""
        key = Key(key)
        if key is Key.QUIT:
            return []
        if key.is_digit:
            code = int(key.char)
        else:
            code = _KEY_CODES[key]
        press_text = "" if key is Key.BACKSPACE else key.char
        return [KeyEvent(True, code, press_text), KeyEvent(False, code, "")]

    def apply(self, key: Key, text: str) -> str:
        """Return the field's text after the key is pressed; the quit key hides the keypad."""
        key = Key(key)
        if key is Key.QUIT:
            self.visible = False
            return text
        if key is Key.BACKSPACE:
            return text[:-1]
        return text + key.char