"""Run a shell command and report the first character of its last output line."""

from __future__ import annotations

import subprocess


class AppCheckError(OSError):
    """The command could not be started."""


def app_check(cmd: str) -> str:
    """Return the first character of the last line the command prints, or "" if none."""
    try:
        result = subprocess.run(
            cmd, shell=True, capture_output=True, text=True, check=False
        )
    except OSError as exc:
        raise AppCheckError(f"Failed to obtain status: {exc}") from exc
    lines = result.stdout.splitlines()
    if not lines:
        return ""
    return lines[-1][:1]