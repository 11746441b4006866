"""Main window contents: tabs offered per user, status text and the clock."""

from __future__ import annotations

from datetime import datetime

from supertool.users import CheckUser, UserType

APP_NAME = "超级工具 1.0.2"
FILE_TAB = "文件操作"
UPDATER_TAB = "升级功能"
AUXILIARY_TAB = "高级功能"
COMMAND_TAB = "命令行"
CHANGE_USER_TEXT = "切换用户"


def tab_titles(user: UserType | None = None) -> list[str]:
    """The tabs shown for a user; the file tab is for the super user only."""
    if user is None:
        user = CheckUser.instance().user
    titles = [FILE_TAB] if user == UserType.SUPER else []
    titles += [UPDATER_TAB, AUXILIARY_TAB, COMMAND_TAB]
    return titles


def clock_text(now: datetime | None = None) -> str:
    """The date and time shown in the status bar."""
    return (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")


def status_text() -> str:
    """The application name shown in the status bar."""
    return f"  {APP_NAME}"