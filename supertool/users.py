"""The kind of user currently logged in to the tool."""

from __future__ import annotations

from enum import IntEnum
from typing import ClassVar


class UserType(IntEnum):
    ADMIN = 0
    SUPER = 1


class CheckUser:
    """Holds the current user type; one shared instance serves the application."""

    _instance: ClassVar[CheckUser | None] = None

    def __init__(self) -> None:
        self.user = UserType.ADMIN

    @classmethod
    def instance(cls) -> CheckUser:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance