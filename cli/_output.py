"""CLI output formatting: colors, step boxes, banners."""
import os
import sys

NO_COLOR = bool(os.environ.get("NO_COLOR")) or "--no-color" in sys.argv

# ANSI codes
_RESET = "\033[0m"
_RED = "\033[31m"
_GREEN = "\033[32m"
_BLUE = "\033[34m"


def c(text: str, code: str) -> str:
    if NO_COLOR:
        return text
    # Per line, for multi-line boxes
    return "\n".join(f"{code}{line}{_RESET}" if line else line for line in text.split("\n"))


def red(t: str) -> str: return c(t, _RED)
def green(t: str) -> str: return c(t, _GREEN)
def blue(t: str) -> str: return c(t, _BLUE)


def step(text: str) -> None:
    """Step boxes from the pipeline."""
    print(blue(text))


def banner(text: str) -> None:
    """Closing banner of a successful run."""
    print(green(text))


def error(msg: str) -> None:
    print(f"{red('✗')} {msg}", file=sys.stderr)
