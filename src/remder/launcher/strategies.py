"""Browser launch strategies."""

from __future__ import annotations

import logging
import subprocess
import webbrowser
from pathlib import Path
from typing import Protocol, runtime_checkable

from remder.errors.exceptions import LaunchError

logger = logging.getLogger(__name__)


@runtime_checkable
class Launcher(Protocol):
    """One way of opening a file externally. Raises LaunchError on failure."""

    name: str

    def attempt(self, path: Path) -> None: ...


class DesktopLauncher:
    """Ask the desktop environment for the default browser."""

    name = "desktop"

    def attempt(self, path: Path) -> None:
        uri = Path(path).resolve().as_uri()
        try:
            opened = webbrowser.open(uri)
        except webbrowser.Error as e:
            raise LaunchError(f"No usable browser: {e}", launcher=self.name, original=e) from e
        if not opened:
            raise LaunchError("Desktop browser did not accept the page", launcher=self.name)


class CommandLauncher:
    """Run an external ``open`` command; exit code 0 means success."""

    def __init__(self, command: str = "xdg-open") -> None:
        self.command = command
        self.name = command

    def attempt(self, path: Path) -> None:
        uri = Path(path).resolve().as_uri()
        try:
            result = subprocess.run([self.command, uri], check=False, capture_output=True)
        except OSError as e:
            raise LaunchError(f"{self.command} failed: {e}", launcher=self.name, original=e) from e
        if result.returncode != 0:
            raise LaunchError(
                f"{self.command} exited with {result.returncode}",
                launcher=self.name,
                exit_code=result.returncode,
            )
