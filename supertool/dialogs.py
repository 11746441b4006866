"""Message dialogs: button layout, an optional countdown and the dialog's outcome."""

from __future__ import annotations

from enum import Enum, IntEnum

CONFIRM_TEXT = "确认"
CANCEL_TEXT = "取消"
SECONDS_SUFFIX = " 秒"


class MsgStyle(Enum):
    """Which buttons a message dialog offers."""

    ONLYOK = "onlyok"
    OKANDCANCEL = "okandcancel"
    ONLYCANCEL = "onlycancel"
    NONE = "none"


class DialogResult(IntEnum):
    REJECTED = 0
    ACCEPTED = 1


_BUTTONS = {
    MsgStyle.ONLYOK: (CONFIRM_TEXT,),
    MsgStyle.OKANDCANCEL: (CONFIRM_TEXT, CANCEL_TEXT),
    MsgStyle.ONLYCANCEL: (CANCEL_TEXT,),
    MsgStyle.NONE: (),
}


class MessageDialog:
    """A message with confirm/cancel buttons and, optionally, a countdown.

    With a positive dead_time the dialog counts down once per tick and accepts
    itself when the count reaches zero.  Without a countdown the default style
    offers only a confirm button; with one, only a cancel button.
    """

    def __init__(
        self,
        text: str = "",
        style: MsgStyle | None = None,
        dead_time: int | None = None,
    ) -> None:
        if style is None:
            style = MsgStyle.ONLYOK if dead_time is None else MsgStyle.ONLYCANCEL
        self.text = text
        self.style = MsgStyle(style)
        self.dead_time = dead_time if dead_time is not None else 0
        self.has_countdown = dead_time is not None and dead_time > 0
        self.running = self.has_countdown
        self.result: DialogResult | None = None

    def visible_buttons(self) -> tuple[str, ...]:
        """The captions of the buttons shown, left to right."""
        return _BUTTONS[self.style]

    def countdown_label(self) -> str | None:
        """The text of the countdown label, or None when the dialog has no countdown."""
        if not self.has_countdown:
            return None
        return f"{self.dead_time}{SECONDS_SUFFIX}"

    def tick(self) -> int:
        """Advance the countdown by one second and return the seconds left."""
        if not self.running:
            raise RuntimeError("countdown is not running")
        self.dead_time -= 1
        if self.dead_time <= 0:
            self.running = False
            self.result = DialogResult.ACCEPTED
        return self.dead_time

    def confirm(self) -> DialogResult:
        self.running = False
        self.result = DialogResult.ACCEPTED
        return self.result

    def cancel(self) -> DialogResult:
        self.running = False
        self.result = DialogResult.REJECTED
        return self.result