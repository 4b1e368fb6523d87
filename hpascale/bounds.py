"""
Autoscaler Bounds
The minimum/maximum/CPU-target state of one HPA and the min <= max fix-up
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


class BoundField(Enum):
    """HPA field a strategy writes to"""
    CPU_TARGET = "cpu"
    MINIMUM = "min"
    MAXIMUM = "max"


@dataclass
class BoundsRecord:
    """Scale bounds plus observed state of one autoscaled workload"""
    name: str
    minimum: int
    maximum: int
    cpu_target: Optional[int] = None

    # Observed state, read only
    current_replicas: int = 0
    desired_replicas: int = 0
    current_cpu_utilization: Optional[int] = None

    namespace: str = ""
    reference: str = ""  # Kind/name of the scale target

    @property
    def replica_range(self) -> Tuple[int, int]:
        """(minimum, maximum) pair"""
        return self.minimum, self.maximum

    def __str__(self) -> str:
        return f"{self.minimum}/{self.maximum}"


def reconcile(record: BoundsRecord, target: BoundField) -> BoundsRecord:
    """
    Restore minimum <= maximum after a single-field update.

    Only the bound that was not just written is moved: raising the minimum
    drags the maximum up, lowering the maximum drags the minimum down.
    A single pass is enough because only one side can be out of order.

    Args:
        record: Record after the update of `target`
        target: Field the update wrote to

    Returns:
        The record with consistent bounds
    """
    if record.minimum <= record.maximum:
        return record

    if target == BoundField.MINIMUM:
        logger.debug(f"{record.name} - Raising maximum {record.maximum} -> {record.minimum} to match minimum")
        return replace(record, maximum=record.minimum)

    if target == BoundField.MAXIMUM:
        logger.debug(f"{record.name} - Lowering minimum {record.minimum} -> {record.maximum} to match maximum")
        return replace(record, minimum=record.maximum)

    return record
