"""
Graphical Range Gauge
Draws a fixed-width text gauge with labelled marks, like |    ....4...|.....| 10
"""

import sys
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class GaugeConfig:
    """Gauge geometry and characters"""
    width: int = 40
    filler: str = "."
    blank: str = " "
    border: str = "|"


@dataclass(frozen=True)
class Mark:
    """A label drawn at a position between 0 and the gauge maximum"""
    label: str
    position: int


# Always sorts last; closes the gauge with the numeric maximum as its label
END_MARK = Mark("|", sys.maxsize)


class GaugeRenderer:
    """Render marks onto a text gauge"""

    def __init__(self, config: Optional[GaugeConfig] = None):
        self.config = config or GaugeConfig()

    def render(self, maximum: int, leading: int, marks: List[Mark]) -> str:
        """
        Render marks on a 0..maximum scale.

        The region below `leading` (usually the minimum bound) is left blank.
        Marks beyond `maximum` are not drawn. When two marks collide only the
        first one is guaranteed to be drawn.

        Args:
            maximum: Upper end of the scale, must be positive
            leading: Value up to which the gauge is blank
            marks: Marks to draw, in any order

        Returns:
            The gauge, e.g. "|      ....X......|" or "|...3..|....| 12"
        """
        if maximum <= 0:
            raise ValueError(f"Gauge maximum must be positive, got {maximum}")

        config = self.config
        scale = config.width
        ordered = sorted(marks, key=lambda mark: mark.position)

        padding = self._column(leading, maximum)
        cells = [config.blank * padding]
        cursor = padding

        for index, mark in enumerate(ordered):
            if mark.position > maximum:
                continue

            gap = self._column(mark.position, maximum) - cursor

            if gap > 0:
                cells.append(config.filler * (gap - 1))
                cells.append(mark.label)
                cursor += gap - 1 + len(mark.label)
            elif index == 0:
                cells.append(mark.label)
                cursor += len(mark.label)

        cells.append(config.filler * max(0, scale - cursor))

        gauge = config.border + "".join(cells) + config.border
        if ordered and ordered[-1] == END_MARK:
            gauge += f" {maximum}"

        return gauge

    def render_percentage(self, current: int, minimum: int, maximum: int) -> str:
        """Single-marker gauge, like |   ....X.....|"""
        return self.render(maximum, minimum, [Mark("X", current)])

    def _column(self, value: int, maximum: int) -> int:
        return int(value / maximum * self.config.width)
