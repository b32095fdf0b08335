import sys

COLORS = {
    "success": "\033[92m",  # Green
    "info": "\033[94m",  # Blue
    "warning": "\033[93m",  # Yellow
    "error": "\033[91m",  # Red
    "reset": "\033[0m",  # Reset to default color
}

LABELS = {
    "success": "[SUCCESS]",
    "info": "[INFO]",
    "warning": "[WARN]",
    "error": "[ERROR]",
}

_enabled = True


def set_enabled(enabled):
    """Turns ANSI colors on or off for every following message."""
    global _enabled
    _enabled = bool(enabled)


def _print_colored(color, *args, file=None, **kwargs):
    """Prints a labeled message with the specified color."""
    if _enabled:
        print(f"{COLORS[color]}{LABELS[color]}{COLORS['reset']}", *args, file=file, **kwargs)
    else:
        print(LABELS[color], *args, file=file, **kwargs)


def success(*args, sep=" ", end="\n", file=None, **kwargs):
    """Prints a success message (green)."""
    _print_colored("success", *args, sep=sep, end=end, file=file, **kwargs)


def info(*args, sep=" ", end="\n", file=None, **kwargs):
    """Prints an info message (blue)."""
    _print_colored("info", *args, sep=sep, end=end, file=file, **kwargs)


def warning(*args, sep=" ", end="\n", file=None, **kwargs):
    """Prints a warning message (yellow) to stderr."""
    _print_colored("warning", *args, sep=sep, end=end, file=file or sys.stderr, **kwargs)


def error(*args, sep=" ", end="\n", file=None, **kwargs):
    """Prints an error message (red) to stderr."""
    _print_colored("error", *args, sep=sep, end=end, file=file or sys.stderr, **kwargs)
