"""
Earnings lookup over the read-only demo dataset.

The dataset is a JSON list of driver records, loaded once at startup. Any
failure to read or validate it is fatal: the process must not serve turns
with a missing dataset.

The dataset holds a single period per driver, so the requested date range
is accepted but does not change the result.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, Union

from pydantic import ValidationError

from saathi.schemas.dialog_schema import DateRange
from saathi.schemas.earnings_schema import EarningsBreakdown, EarningsRecord, EarningsSummary

logger = logging.getLogger(__name__)


class DatasetLoadError(RuntimeError):
    """The earnings dataset could not be read or validated."""


def load_earnings_dataset(path: Union[str, Path]) -> list[EarningsRecord]:
    """Read and validate every record in the dataset file.

    Raises:
        DatasetLoadError: On a missing file, bad JSON, or an invalid record.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise DatasetLoadError(f"Cannot read earnings dataset {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DatasetLoadError(f"Earnings dataset {path} is not valid JSON: {exc}") from exc

    if not isinstance(raw, list):
        raise DatasetLoadError(
            f"Earnings dataset {path} must be a JSON list, got {type(raw).__name__}"
        )

    try:
        records = [EarningsRecord.model_validate(row) for row in raw]
    except ValidationError as exc:
        raise DatasetLoadError(f"Invalid record in earnings dataset {path}: {exc}") from exc

    logger.info("Loaded %d earnings records from %s", len(records), path)
    return records


def compute_breakdown(record: EarningsRecord) -> EarningsBreakdown:
    """net = gross - expenses - penalties + rewards. No clamping."""
    penalty = sum(p.amount for p in record.penalties)
    rewards = sum(r.amount for r in record.rewards)
    net = record.gross_earnings - record.expenses - penalty + rewards
    return EarningsBreakdown(
        gross=record.gross_earnings,
        expenses=record.expenses,
        penalty=penalty,
        rewards=rewards,
        net=net,
    )


class EarningsLookup:
    """Driver-id keyed access to earnings records."""

    def __init__(self, records: Iterable[EarningsRecord]) -> None:
        self._records: dict[str, EarningsRecord] = {}
        for record in records:
            if record.driver_id in self._records:
                raise DatasetLoadError(f"Duplicate driver_id in dataset: {record.driver_id}")
            self._records[record.driver_id] = record

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "EarningsLookup":
        return cls(load_earnings_dataset(path))

    def __len__(self) -> int:
        return len(self._records)

    def summarize(
        self, driver_id: str, date_range: DateRange = DateRange.TODAY
    ) -> EarningsSummary:
        """Return the breakdown for a driver, or found=False when unknown."""
        record = self._records.get(driver_id)
        if record is None:
            logger.info("No earnings record for driver %s", driver_id)
            return EarningsSummary(found=False)

        logger.debug("Earnings summary for %s (range: %s)", driver_id, date_range.value)
        return EarningsSummary(
            found=True,
            breakdown=compute_breakdown(record),
            reason=record.reason,
        )
