"""
Logo Rendering

Selects a distribution logo from the detected OS identity and lays it out
as a fixed-width, colored left-hand column.
"""

from typing import Iterable, List, Optional

from rich.cells import cell_len
from rich.text import Text

from ..detectors import OsInfo
from .database import FALLBACK_LOGO, LOGOS, LogoDefinition, available_logos, lookup_logo

__all__ = [
    "FALLBACK_LOGO",
    "LOGOS",
    "LogoDefinition",
    "LogoRenderer",
    "available_logos",
    "custom_logo",
    "logo_for",
    "lookup_logo",
]


def logo_for(os_info: Optional[OsInfo]) -> LogoDefinition:
    """Pick the logo for a detected OS, or the generic fallback if unknown."""
    if os_info is None:
        return FALLBACK_LOGO
    return lookup_logo(os_info.id, os_info.id_like)


def custom_logo(lines: Iterable[str], color: Optional[str] = None) -> Optional[LogoDefinition]:
    """
    Build a logo from user-supplied ASCII art.

    Trailing blank lines are dropped. Returns None for empty art.
    """
    art = [line.rstrip("\r\n") for line in lines]
    while art and not art[-1].strip():
        art.pop()
    if not art:
        return None
    return LogoDefinition(name="custom", lines=tuple(art), color=color)


class LogoRenderer:
    """Lays out a LogoDefinition as a padded column of styled lines."""

    def __init__(self, definition: LogoDefinition):
        self.definition = definition
        self.width = max((cell_len(line) for line in definition.lines), default=0)

    @property
    def height(self) -> int:
        return len(self.definition.lines)

    @property
    def color(self) -> Optional[str]:
        return self.definition.color

    def column(self, height: int = 0) -> List[Text]:
        """
        Render the logo column.

        Args:
            height: Minimum number of lines; blank lines of the logo's width
                are appended when the logo is shorter

        Returns:
            Lines all exactly ``width`` cells wide
        """
        style = self.definition.color or ""
        lines = []
        for line in self.definition.lines:
            text = Text()
            text.append(line + " " * (self.width - cell_len(line)), style=style)
            lines.append(text)
        while len(lines) < height:
            lines.append(Text(" " * self.width))
        return lines
