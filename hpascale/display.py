"""
HPA Display
Table of HPAs with CPU and replica gauges, coloured by how close they are to their limits
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from hpascale.bounds import BoundsRecord
from hpascale.gauge import END_MARK, GaugeConfig, GaugeRenderer, Mark

logger = logging.getLogger(__name__)

CPU_HOT_THRESHOLD = 90       # % utilization shown in red
REPLICA_WARNING_RATIO = 0.8  # share of maximum shown in yellow


@dataclass
class DisplayRow:
    """Rendered table row for one HPA"""
    name: str
    reference: str
    cpu: Text
    scale: Text


def make_console(output_format: str = "auto") -> Console:
    """Console for the requested output format: auto, terminal or plain"""
    if output_format == "terminal":
        logger.debug("Enabling colors")
        return Console(force_terminal=True)
    if output_format == "plain":
        logger.debug("Disabling colors")
        return Console(color_system=None, no_color=True)

    console = Console()
    logger.debug(f"{'Enabling' if console.is_terminal else 'Disabling'} colors")
    return console


class HpaTable:
    """Render BoundsRecords as a table"""

    def __init__(self, gauge_config: Optional[GaugeConfig] = None):
        self.gauge = GaugeRenderer(gauge_config)

    def cpu_cell(self, record: BoundsRecord) -> Text:
        current = record.current_cpu_utilization
        target = record.cpu_target
        if current is None or target is None:
            return Text("unknown")

        logger.debug(f"{record.name} - cpu current={current} target={target}")
        gauge = self.gauge.render(100, 0, [Mark(f"{current}%", current), Mark("<", target)])

        if current <= target:
            style = "green"
        elif current >= CPU_HOT_THRESHOLD:
            style = "red"
        else:
            style = "yellow"
        return Text(gauge, style=style)

    def scale_cell(self, record: BoundsRecord) -> Text:
        if record.maximum <= 0:
            return Text("n/a")

        gauge = self.gauge.render(record.maximum, record.minimum, [
            Mark(str(record.current_replicas), record.current_replicas),
            Mark("|", record.desired_replicas),
            END_MARK,
        ])

        if record.current_replicas >= record.maximum:
            style = "magenta"
        elif record.current_replicas > int(record.maximum * REPLICA_WARNING_RATIO):
            style = "yellow"
        else:
            style = "green"
        return Text(gauge, style=style)

    def rows(self, records: List[BoundsRecord]) -> List[DisplayRow]:
        return [
            DisplayRow(
                name=record.name,
                reference=record.reference,
                cpu=self.cpu_cell(record),
                scale=self.scale_cell(record),
            )
            for record in records
        ]

    def build(self, records: List[BoundsRecord]) -> Table:
        table = Table(box=None, show_header=True, show_edge=False, pad_edge=False)
        table.add_column("NAME", no_wrap=True)
        table.add_column("REFERENCE", no_wrap=True)
        table.add_column("CPU", no_wrap=True)
        table.add_column("SCALE", no_wrap=True)

        for row in self.rows(records):
            table.add_row(row.name, row.reference, row.cpu, row.scale)
        return table

    def print(self, records: List[BoundsRecord], console: Optional[Console] = None):
        (console or make_console()).print(self.build(records))
