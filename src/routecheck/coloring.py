"""
Colorify terminal output.
"""


import os
import sys
from dataclasses import dataclass
from typing import Final

__all__ = [
    "disable_colors",
    "supports_colors",
    "supports_true_color",
    "RGB",
    "Color",
]


_on = True


def disable_colors() -> None:
    global _on
    _on = False


def supports_colors() -> bool:
    """
    Check if ANSI colors are supported.

    Returns
    -------
    bool
        True if ansi colors are supported. False otherwise.
    """
    if not _on:
        return False

    is_a_tty = hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
    return os.name != "nt" and is_a_tty


def supports_true_color() -> bool:
    """
    Check if true colors are supported.
    """
    if not supports_colors():
        return False
    return os.environ.get("COLORTERM", "") in {"truecolor", "24bit"}


@dataclass(frozen=True)
class RGB:
    r: int
    g: int
    b: int
    bold: bool = False


# (ANSI, true color)
_PALETTE: Final[dict[str, tuple[str, RGB]]] = {
    "red": ("\x1b[0;31m", RGB(255, 92, 79)),
    "green": ("\x1b[0;32m", RGB(5, 255, 125)),
    "yellow": ("\x1b[0;33m", RGB(253, 157, 99)),
    "blue": ("\x1b[0;34m", RGB(4, 165, 229)),
    "cyan": ("\x1b[0;36m", RGB(28, 255, 228)),
}

_MODIFIERS: Final = {
    "normal": "\x1b[0m",
    "bold": "\x1b[1m",
}


class Color:
    """
    Colorify terminal output.
    """

    @staticmethod
    def red(msg: str, /) -> str:
        return Color.color(msg, "red")

    @staticmethod
    def green(msg: str, /) -> str:
        return Color.color(msg, "green")

    @staticmethod
    def yellow(msg: str, /) -> str:
        return Color.color(msg, "yellow")

    @staticmethod
    def blue(msg: str, /) -> str:
        return Color.color(msg, "blue")

    @staticmethod
    def cyan(msg: str, /) -> str:
        return Color.color(msg, "cyan")

    @staticmethod
    def bold(msg: str, /) -> str:
        return Color.color(msg, "bold")

    @staticmethod
    def color(msg: str, color: RGB | str | None = None, /) -> str:
        """
        Color a message.

        Parameters
        ----------
        msg : str
            String to be colored.

        color : RGB | str | None
            Color name (or space separated names, e.g. 'red bold') or an RGB
            object. (default None)

        Returns
        -------
        str
            Colorified `msg`.
        """
        if color is None:
            return msg
        elif isinstance(color, RGB):
            return Color.rgb(msg, color)
        elif supports_true_color() and color in _PALETTE:
            return Color.rgb(msg, _PALETTE[color][1])
        return Color.ansi(msg, color)

    @staticmethod
    def ansi(msg: str, color_or_colors: str, /) -> str:
        """
        Color a message using ANSI color(s).
        """
        if not supports_colors() or not len(color_or_colors):
            return msg

        codes = []
        for name in color_or_colors.split():
            if name in _PALETTE:
                codes.append(_PALETTE[name][0])
            elif name in _MODIFIERS:
                codes.append(_MODIFIERS[name])

        return "".join(codes) + str(msg) + _MODIFIERS["normal"]

    @staticmethod
    def rgb(msg: str, color: RGB, /) -> str:
        """
        Color a message using RGB values.
        """
        if not supports_true_color():
            return msg

        bold_prefix = "1;" if color.bold else ""
        return f"\x1b[{bold_prefix}38;2;{color.r};{color.g};{color.b}m{msg}\x1b[0m"
