"""Open rendered pages in an external browser."""

from remder.launcher.chain import DEFAULT_LAUNCHERS, launch_browser
from remder.launcher.strategies import CommandLauncher, DesktopLauncher, Launcher

__all__ = [
    "DEFAULT_LAUNCHERS",
    "CommandLauncher",
    "DesktopLauncher",
    "Launcher",
    "launch_browser",
]
