"""
Batch Applicator
Apply one strategy to every selected HPA, attempting all records before reporting failures
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

from hpascale.bounds import BoundsRecord
from hpascale.strategy import Strategy, apply_strategy

logger = logging.getLogger(__name__)


class BatchError(Exception):
    """Combined error carrying every per-record failure of a batch"""

    def __init__(self, errors: List[Tuple[str, Exception]]):
        self.errors = errors
        details = "; ".join(f"{name}: {error}" for name, error in errors)
        super().__init__(f"{len(errors)} HPA update(s) failed: {details}")


@dataclass
class BatchOptions:
    """Options for one batch run"""
    dry_run: bool = False
    # Checked between records only
    stop_event: Optional[threading.Event] = None


@dataclass
class RecordOutcome:
    """Before/after bounds of one record and its error, if any"""
    name: str
    before: Tuple[int, int]
    after: Tuple[int, int]
    error: Optional[Exception] = None
    record: Optional[BoundsRecord] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    """Outcomes of a batch run"""
    outcomes: List[RecordOutcome] = field(default_factory=list)
    cancelled: bool = False

    @property
    def failures(self) -> List[RecordOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]

    @property
    def error(self) -> Optional[BatchError]:
        """Combined error, or None when every record succeeded"""
        failures = self.failures
        if not failures:
            return None
        return BatchError([(outcome.name, outcome.error) for outcome in failures])

    def raise_for_errors(self):
        error = self.error
        if error is not None:
            raise error


def apply_batch(strategy: Strategy,
                records: Iterable[BoundsRecord],
                persist: Callable[[BoundsRecord], None],
                options: Optional[BatchOptions] = None) -> BatchResult:
    """
    Apply `strategy` to each record in order and persist the result.

    A failing record never stops the batch; its error is kept in the result
    and the next record is attempted.

    Args:
        strategy: Resolved strategy, shared by all records
        records: Records to update
        persist: Called with each updated record unless running dry
        options: Dry-run flag and optional stop event

    Returns:
        BatchResult with one outcome per attempted record
    """
    options = options or BatchOptions()
    result = BatchResult()

    for record in records:
        if options.stop_event is not None and options.stop_event.is_set():
            logger.warning(f"Batch cancelled before {record.name}, remaining HPAs not updated")
            result.cancelled = True
            break

        result.outcomes.append(_apply_one(strategy, record, persist, options))

    if result.failures:
        logger.error(f"{len(result.failures)} of {len(result.outcomes)} HPA update(s) failed")
    return result


def _apply_one(strategy: Strategy,
               record: BoundsRecord,
               persist: Callable[[BoundsRecord], None],
               options: BatchOptions) -> RecordOutcome:
    before = record.replica_range

    try:
        updated = apply_strategy(strategy, record)
    except Exception as e:
        _log_update(record, record, options)
        logger.error(f"Failed to update HPA {record.name}: {e}")
        return RecordOutcome(record.name, before, before, error=e, record=record)

    _log_update(record, updated, options)

    outcome = RecordOutcome(record.name, before, updated.replica_range, record=updated)

    if options.dry_run:
        logger.info(f"[DRY RUN] Skipping API update of {record.name}")
        return outcome

    try:
        logger.debug("Updating via API")
        persist(updated)
        logger.debug("Updated")
    except Exception as e:
        logger.error(f"Failed to update HPA {record.name}: {e}")
        outcome.error = e

    return outcome


def _log_update(record: BoundsRecord, updated: BoundsRecord, options: BatchOptions):
    logger.info(
        f"Updating HPA {record.name}: {record} -> {updated}",
        extra={
            'hpa': record.name,
            'from': str(record),
            'to': str(updated),
            'dry_run': options.dry_run
        }
    )
