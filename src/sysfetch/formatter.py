"""
Output Formatter

Merges the optional logo column with the info rows into the final report
lines.
"""

from typing import List, Optional, Sequence

from rich.text import Text

from .aggregator import DisplayRow
from .logo import LogoDefinition, LogoRenderer

DEFAULT_GAP = 3
SEPARATOR = ": "


class OutputFormatter:
    """
    Formats display rows for the terminal.

    Modes:
        - default: ``Label: value`` rows, labels right-aligned to the
          longest label so values share a start column
        - values-only: bare values, one per line
        - no logo: info lines only, with no left column or height padding
    """

    def __init__(
        self,
        values_only: bool = False,
        logo: Optional[LogoDefinition] = None,
        gap: int = DEFAULT_GAP,
    ):
        self.values_only = values_only
        self.logo = LogoRenderer(logo) if logo is not None else None
        self.gap = gap

    def format(self, rows: Sequence[DisplayRow]) -> List[Text]:
        """
        Build the report.

        Args:
            rows: Display rows in module order

        Returns:
            One styled Text per output line
        """
        info_lines = self._info_lines(rows)
        if self.logo is None:
            return info_lines
        return self._merge_with_logo(info_lines)

    def format_plain(self, rows: Sequence[DisplayRow]) -> List[str]:
        """Build the report without styling."""
        return [line.plain.rstrip() for line in self.format(rows)]

    def _info_lines(self, rows: Sequence[DisplayRow]) -> List[Text]:
        if self.values_only:
            return [Text(row.value) for row in rows]

        label_width = max((len(row.label) for row in rows), default=0)
        label_style = "bold"
        if self.logo is not None and self.logo.color:
            label_style = f"bold {self.logo.color}"

        lines = []
        for row in rows:
            line = Text()
            line.append(row.label.rjust(label_width), style=label_style)
            line.append(SEPARATOR)
            line.append(row.value)
            lines.append(line)
        return lines

    def _merge_with_logo(self, info_lines: List[Text]) -> List[Text]:
        total = max(len(info_lines), self.logo.height)
        logo_lines = self.logo.column(total)
        spacer = " " * self.gap

        merged = []
        for index in range(total):
            line = logo_lines[index].copy()
            if index < len(info_lines):
                line.append(spacer)
                line.append_text(info_lines[index])
            merged.append(line)
        return merged
