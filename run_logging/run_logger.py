"""Structured event logging utilities for boarding sequence runs."""
from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

try:  # Optional dependency for Parquet output
    import pyarrow as pa  # type: ignore
    import pyarrow.parquet as pq  # type: ignore
except Exception:  # pragma: no cover - pyarrow is optional
    pa = None  # type: ignore
    pq = None  # type: ignore


@dataclass
class RunEvent:
    """Single line of a run log.

    Every event carries the full set of columns so that Parquet files keep one
    schema; fields that do not apply are ``None``.
    """

    timestamp: str
    run_id: str
    event: str
    source: Optional[str] = None
    sequence: Optional[int] = None
    booking_id: Optional[str] = None
    max_seat_number: Optional[int] = None
    seats: Optional[List[str]] = None
    message: Optional[str] = None

    def as_dict(self) -> Dict:
        return {
            "timestamp": self.timestamp,
            "run_id": self.run_id,
            "event": self.event,
            "source": self.source,
            "sequence": self.sequence,
            "booking_id": self.booking_id,
            "max_seat_number": self.max_seat_number,
            "seats": self.seats,
            "message": self.message,
        }


class _BaseWriter:
    """Sink for serialized ``RunEvent`` dictionaries."""

    def append(self, event: Dict[str, Any]) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def close(self) -> None:  # pragma: no cover - interface
        return None


class StdoutWriter(_BaseWriter):
    """One compact JSON object per run event, printed as it happens."""

    def append(self, event: Dict[str, Any]) -> None:
        print(json.dumps(event, separators=(",", ":")))


class JSONLWriter(_BaseWriter):
    """Appends run events to a JSON-lines file shared by every input of a run."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.path.open("a", encoding="utf-8")

    def append(self, event: Dict[str, Any]) -> None:
        self._handle.write(json.dumps(event) + "\n")
        self._handle.flush()

    def close(self) -> None:
        self._handle.close()


class ParquetWriter(_BaseWriter):
    def __init__(self, path: Path) -> None:
        if pq is None or pa is None:  # pragma: no cover - import-time guard
            raise RuntimeError("pyarrow is required for Parquet logging but is not installed")
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._schema = pa.schema(
            [
                ("timestamp", pa.string()),
                ("run_id", pa.string()),
                ("event", pa.string()),
                ("source", pa.string()),
                ("sequence", pa.int64()),
                ("booking_id", pa.string()),
                ("max_seat_number", pa.int64()),
                ("seats", pa.list_(pa.string())),
                ("message", pa.string()),
            ]
        )
        self._writer: Optional["pq.ParquetWriter"] = None

    def append(self, event: Dict[str, Any]) -> None:
        table = pa.Table.from_pylist([event], schema=self._schema)
        if self._writer is None:
            self._writer = pq.ParquetWriter(self.path, self._schema)
        self._writer.write_table(table)

    def close(self) -> None:
        if self._writer is not None:
            self._writer.close()
            self._writer = None


class RunLogger:
    """Facade that turns processing outcomes into append-only events."""

    def __init__(self, writer: _BaseWriter, run_id: str) -> None:
        self._writer = writer
        self.run_id = run_id

    def _emit(self, event: str, **fields: Any) -> None:
        record = RunEvent(
            timestamp=datetime.now(timezone.utc).isoformat(),
            run_id=self.run_id,
            event=event,
            **fields,
        )
        self._writer.append(record.as_dict())

    def log_entry(
        self,
        *,
        sequence: int,
        booking_id: str,
        max_seat_number: int,
        seats: List[str],
        source: Optional[str] = None,
    ) -> None:
        self._emit(
            "sequence",
            source=source,
            sequence=sequence,
            booking_id=booking_id,
            max_seat_number=max_seat_number,
            seats=list(seats),
        )

    def log_warning(self, message: str, *, source: Optional[str] = None) -> None:
        self._emit("warning", source=source, message=message)

    def log_error(self, message: str, *, source: Optional[str] = None) -> None:
        self._emit("error", source=source, message=message)

    def log_result(self, result: Any, *, source: Optional[str] = None) -> None:
        """Emit one event per ranked booking or error, then a summary line."""

        if result.success:
            for entry in result.sequence or []:
                self.log_entry(
                    sequence=entry.sequence,
                    booking_id=entry.booking_id,
                    max_seat_number=entry.max_seat_number,
                    seats=entry.seats,
                    source=source,
                )
            for message in result.warnings:
                self.log_warning(message, source=source)
            summary = f"sequenced {len(result.sequence or [])} bookings"
        else:
            for message in result.errors:
                self.log_error(message, source=source)
            summary = "no bookings sequenced"
        self._emit("summary", source=source, message=summary)

    def close(self) -> None:
        self._writer.close()


def create_logger(mode: str, *, destination: Optional[Path], run_id: str) -> RunLogger:
    """Factory that builds a logger for the requested mode."""

    normalized = mode.lower()
    if normalized == "stdout":
        writer: _BaseWriter = StdoutWriter()
    elif normalized == "jsonl":
        if not destination:
            raise ValueError("JSONL logging requires a destination path")
        writer = JSONLWriter(destination)
    elif normalized == "parquet":
        if not destination:
            raise ValueError("Parquet logging requires a destination path")
        writer = ParquetWriter(destination)
    else:
        raise ValueError(f"Unknown run log mode: {mode}")

    return RunLogger(writer, run_id=run_id)
