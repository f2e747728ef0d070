"""Shared console constants for the chest CLI."""

# Status line prefixes
MESSAGE_PREFIXES = {
    "info": "[*]",
    "warning": "[~]",
    "error": "[!]",
    "success": "[+]"
}

# ANSI colors, only used when stdout is a terminal
MESSAGE_COLORS = {
    "info": "\033[36m",     # Cyan
    "warning": "\033[33m",  # Yellow
    "error": "\033[31m",    # Red
    "success": "\033[32m"   # Green
}

RESET = "\033[0m"
