"""Aggregate statistics over boarding sequence results."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np

from sequencing.generator import ProcessingResult


@dataclass
class _RunSnapshot:
    label: str
    success: bool
    bookings: int
    warnings: int
    errors: int

    def as_dict(self) -> Dict:
        return {
            "label": self.label,
            "success": self.success,
            "bookings": self.bookings,
            "warnings": self.warnings,
            "errors": self.errors,
        }


@dataclass
class SequenceMetricsAccumulator:
    """Track booking counts and ranking seat numbers across runs."""

    runs: List[_RunSnapshot] = field(default_factory=list)
    _max_seats: List[int] = field(default_factory=list, init=False, repr=False)

    def record_result(self, result: ProcessingResult, *, label: str = "") -> None:
        sequence = result.sequence or []
        self.runs.append(
            _RunSnapshot(
                label=label,
                success=result.success,
                bookings=len(sequence),
                warnings=len(result.warnings),
                errors=0 if result.success else len(result.errors),
            )
        )
        self._max_seats.extend(entry.max_seat_number for entry in sequence)

    def seat_distribution(self) -> Dict:
        if not self._max_seats:
            return {"count": 0}
        # Seat numbers are unbounded ints; only the float summaries go through numpy.
        values = np.asarray(self._max_seats, dtype=np.float64)
        return {
            "count": int(values.size),
            "min": min(self._max_seats),
            "max": max(self._max_seats),
            "mean": float(values.mean()),
            "median": float(np.median(values)),
            "p90": float(np.percentile(values, 90)),
        }

    def as_dict(self) -> Dict:
        return {
            "runs": len(self.runs),
            "failed_runs": sum(1 for run in self.runs if not run.success),
            "bookings_sequenced": sum(run.bookings for run in self.runs),
            "warnings": sum(run.warnings for run in self.runs),
            "max_seat_numbers": self.seat_distribution(),
            "per_run": [run.as_dict() for run in self.runs],
        }
