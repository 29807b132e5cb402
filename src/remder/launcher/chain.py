"""Ordered launcher chain — first success wins."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console

from remder.errors.exceptions import AllLaunchersFailedError, LaunchError
from remder.launcher.strategies import CommandLauncher, DesktopLauncher, Launcher

logger = logging.getLogger(__name__)

error_console = Console(stderr=True)

DEFAULT_LAUNCHERS: tuple[Launcher, ...] = (DesktopLauncher(), CommandLauncher("xdg-open"))


def launch_browser(
    path: Path,
    launchers: Sequence[Launcher] = DEFAULT_LAUNCHERS,
    console: Console | None = None,
) -> bool:
    """Open ``path`` with the first launcher that works.

    When every launcher fails, prints a single notice and logs each cause
    at DEBUG. Never raises; returns whether the page was opened.
    """
    failures: list[Exception] = []
    for launcher in launchers:
        logger.debug("Launching %s with %s", path, launcher.name)
        try:
            launcher.attempt(path)
        except LaunchError as e:
            failures.append(e)
            continue
        except Exception as e:
            failures.append(LaunchError(str(e), launcher=launcher.name, original=e))
            continue
        return True

    error = AllLaunchersFailedError(failures=failures)
    (console or error_console).print(f"[red]{error.message}[/red]")
    for failure in error.failures:
        logger.debug("Launch browser failed", exc_info=failure)
    return False
