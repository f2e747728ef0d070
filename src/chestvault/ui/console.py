import sys

from chestvault.ui.constants import MESSAGE_COLORS, MESSAGE_PREFIXES, RESET


def say(level: str, message: str, ignore: bool = False) -> None:
    if ignore:
        return
    line = f"{MESSAGE_PREFIXES[level]} {message}"
    if sys.stdout.isatty():
        line = f"{MESSAGE_COLORS[level]}{line}{RESET}"
    print(line)
