from __future__ import annotations

from typing import Callable, Dict

from rich.color import ColorSystem
from rich.style import Style

STYLES = (
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
    "black",
    "bold",
    "italic",
    "underline",
    "reverse",
)

_PARSED: Dict[str, Style] = {name: Style.parse(name) for name in STYLES}


def style(name: str, *parts: object) -> str:
    """Wrap each part in the ANSI escapes for ``name`` and join the results."""
    try:
        st = _PARSED[name]
    except KeyError:
        raise ValueError(f"unknown style {name!r}; expected one of {', '.join(STYLES)}") from None
    return "".join(st.render(str(p), color_system=ColorSystem.STANDARD) for p in parts)


def _styler(name: str) -> Callable[..., str]:
    def apply(*parts: object) -> str:
        return style(name, *parts)

    apply.__name__ = name
    apply.__doc__ = f"Render every argument as {name} text."
    return apply


red = _styler("red")
green = _styler("green")
yellow = _styler("yellow")
blue = _styler("blue")
magenta = _styler("magenta")
cyan = _styler("cyan")
white = _styler("white")
black = _styler("black")
bold = _styler("bold")
italic = _styler("italic")
underline = _styler("underline")
reverse = _styler("reverse")
