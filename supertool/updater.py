"""Finding update packages and describing the installed system versions."""

from __future__ import annotations

import os
from dataclasses import dataclass

UPDATER_DIR = "/mnt/udisk/Updater"
FS_VERSION_FILE = "/opt/version"
_EXCLUDED = {".", "..", "luip"}


@dataclass(frozen=True)
class UpdateEntry:
    """An item offered for updating."""

    name: str
    size: int
    path: str

    @property
    def size_label(self) -> str:
        return size_label(self.size)


def kernel_version_label(kernel_type: str, kernel_version: str) -> str:
    """The kernel description shown to the user, without the board vendor suffix."""
    return f"{kernel_type}-{kernel_version.replace('-EmbedSky', '')}"


def read_fs_version(path: str = FS_VERSION_FILE) -> str:
    """The first line of the file-system version file, or "" if it cannot be read."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return handle.readline().rstrip("\r\n")
    except OSError:
        return ""


def size_label(size: int) -> str:
    """A size in whole kilobytes, rounded up."""
    return f"{(size + 1023) // 1024}KB"


def search_updates(directory: str = UPDATER_DIR) -> list[UpdateEntry]:
    """List the files and directories in the update directory, sorted by name.

    Symbolic links and the "luip" entry are left out; a missing directory gives
    an empty list.
    """
    if not os.path.isdir(directory):
        return []
    entries = []
    with os.scandir(directory) as it:
        for entry in it:
            if entry.name in _EXCLUDED or entry.is_symlink():
                continue
            try:
                size = entry.stat(follow_symlinks=False).st_size
            except OSError:
                continue
            entries.append(UpdateEntry(entry.name, size, f"{directory}/{entry.name}"))
    entries.sort(key=lambda e: e.name.lower())
    return entries