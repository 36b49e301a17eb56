"""Command line harness for turning booking files into boarding sequences."""
from __future__ import annotations

import argparse
import json
import sys
import uuid
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Set

from metrics.summary import SequenceMetricsAccumulator
from run_logging.run_logger import RunLogger, create_logger
from sequencing.generator import ProcessingResult, generate_boarding_sequence
from tabular.parser import parse_csv
from tabular.serializer import export_filename, export_to_csv, format_clipboard_text
from tabular.upload import ALLOWED_EXTENSIONS, MAX_UPLOAD_BYTES, UploadError, read_upload

EMPTY_UPLOAD = "No valid bookings found in the uploaded file"


# ---------------------------------------------------------------------------
# Configuration structures
# ---------------------------------------------------------------------------


@dataclass
class RunConfig:
    inputs: List[Path] = field(default_factory=list)
    output_dir: Optional[Path] = None
    concurrency: int = 1
    max_upload_bytes: int = MAX_UPLOAD_BYTES
    allowed_extensions: List[str] = field(default_factory=lambda: list(ALLOWED_EXTENSIONS))
    tsv: bool = False
    run_log_mode: Optional[str] = None
    run_log_path: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Dict) -> "RunConfig":
        run_log = data.get("run_log") or {}
        output_dir = data.get("output_dir")
        log_path = run_log.get("path")
        return cls(
            inputs=[Path(p) for p in data.get("inputs", [])],
            output_dir=Path(output_dir) if output_dir else None,
            concurrency=data.get("concurrency", 1),
            max_upload_bytes=data.get("max_upload_bytes", MAX_UPLOAD_BYTES),
            allowed_extensions=list(data.get("allowed_extensions", ALLOWED_EXTENSIONS)),
            tsv=data.get("tsv", False),
            run_log_mode=run_log.get("mode"),
            run_log_path=Path(log_path) if log_path else None,
        )

    def validate(self) -> None:
        if not self.inputs:
            raise ValueError("At least one input file is required")
        if self.max_upload_bytes <= 0:
            raise ValueError("max_upload_bytes must be positive")


@dataclass
class FileTask:
    task_id: int
    path: Path
    max_upload_bytes: int
    allowed_extensions: List[str]


@dataclass
class FileOutcome:
    task_id: int
    path: Path
    result: ProcessingResult


# ---------------------------------------------------------------------------
# Core run logic
# ---------------------------------------------------------------------------


def process_text(content: str) -> ProcessingResult:
    """Parse booking text and sequence it, reporting an empty file as a failure."""

    bookings = parse_csv(content)
    if not bookings:
        return ProcessingResult.failed([EMPTY_UPLOAD])
    return generate_boarding_sequence(bookings)


def _process_file(task: FileTask) -> FileOutcome:
    try:
        content = read_upload(
            task.path,
            max_bytes=task.max_upload_bytes,
            allowed_extensions=task.allowed_extensions,
        )
    except UploadError as exc:
        return FileOutcome(task.task_id, task.path, ProcessingResult.failed([str(exc)]))
    return FileOutcome(task.task_id, task.path, process_text(content))


def output_path_for(
    output_dir: Path,
    source: Path,
    *,
    multiple: bool,
    on: Optional[date] = None,
    task_id: Optional[int] = None,
) -> Path:
    name = export_filename(on)
    if multiple:
        # One export per input file on the same day.
        prefix = source.stem if task_id is None else f"{source.stem}-{task_id}"
        name = f"{prefix}-{name}"
    return output_dir / name


class SequenceRunner:
    def __init__(self, config: RunConfig):
        config.validate()
        self.config = config
        self.metrics = SequenceMetricsAccumulator()
        self._subscribers: List[Callable[[FileOutcome], None]] = []
        self._exported: Set[Path] = set()

    def subscribe(self, callback: Callable[[FileOutcome], None]) -> None:
        self._subscribers.append(callback)

    def _tasks(self) -> List[FileTask]:
        return [
            FileTask(
                task_id=index,
                path=path,
                max_upload_bytes=self.config.max_upload_bytes,
                allowed_extensions=self.config.allowed_extensions,
            )
            for index, path in enumerate(self.config.inputs)
        ]

    def _open_logger(self) -> Optional[RunLogger]:
        if not self.config.run_log_mode:
            return None
        destination = self.config.run_log_path
        if destination:
            destination = destination.expanduser()
        return create_logger(
            self.config.run_log_mode,
            destination=destination,
            run_id=uuid.uuid4().hex,
        )

    def _handle_outcome(self, outcome: FileOutcome, logger: Optional[RunLogger]) -> None:
        self.metrics.record_result(outcome.result, label=str(outcome.path))
        if logger is not None:
            logger.log_result(outcome.result, source=str(outcome.path))
        self._write_output(outcome)
        for callback in list(self._subscribers):
            callback(outcome)

    def _write_output(self, outcome: FileOutcome) -> None:
        if self.config.output_dir is None or not outcome.result.success:
            return
        multiple = len(self.config.inputs) > 1
        target = output_path_for(self.config.output_dir, outcome.path, multiple=multiple)
        suffix = outcome.task_id
        while target in self._exported:
            # Same name as an earlier export in this run.
            target = output_path_for(
                self.config.output_dir,
                outcome.path,
                multiple=multiple,
                task_id=suffix,
            )
            suffix += len(self.config.inputs)
        self._exported.add(target)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(export_to_csv(outcome.result.sequence or []), encoding="utf-8")

    def run(self) -> List[FileOutcome]:
        tasks = self._tasks()
        self._exported = set()
        outcomes: List[FileOutcome] = []
        logger = self._open_logger()
        try:
            if self.config.concurrency > 1 and len(tasks) > 1:
                with ProcessPoolExecutor(max_workers=self.config.concurrency) as pool:
                    for outcome in pool.map(_process_file, tasks):
                        self._handle_outcome(outcome, logger)
                        outcomes.append(outcome)
            else:
                for task in tasks:
                    outcome = _process_file(task)
                    self._handle_outcome(outcome, logger)
                    outcomes.append(outcome)
        finally:
            if logger is not None:
                logger.close()
        return outcomes


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Back-to-front boarding sequence generator")
    parser.add_argument("inputs", type=Path, nargs="*", help="CSV or TXT booking files")
    parser.add_argument("--config", type=Path, help="Optional JSON config file", default=None)
    parser.add_argument("--output-dir", type=Path, help="Directory for exported CSV files", default=None)
    parser.add_argument("--concurrency", type=int, help="Process pool size", default=None)
    parser.add_argument("--max-upload-bytes", type=int, help="Reject files larger than this", default=None)
    parser.add_argument("--tsv", action="store_true", help="Print Seq/Booking_ID pairs tab-separated")
    parser.add_argument(
        "--run-log-mode",
        choices=["stdout", "jsonl", "parquet"],
        help="Where to stream structured run logs",
        default=None,
    )
    parser.add_argument(
        "--run-log-path",
        type=Path,
        help="Destination file for JSONL or Parquet logs",
        default=None,
    )
    return parser.parse_args(argv)


def _load_config_from_file(config_path: Optional[Path]) -> Dict:
    if not config_path:
        return {}
    return json.loads(config_path.read_text())


def _build_run_config(args: argparse.Namespace) -> RunConfig:
    config = RunConfig.from_dict(_load_config_from_file(args.config))

    if args.inputs:
        config.inputs = list(args.inputs)
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.concurrency:
        config.concurrency = args.concurrency
    if args.max_upload_bytes:
        config.max_upload_bytes = args.max_upload_bytes
    if args.tsv:
        config.tsv = True
    if args.run_log_mode:
        config.run_log_mode = args.run_log_mode
    if args.run_log_path:
        config.run_log_path = args.run_log_path
    config.concurrency = max(1, config.concurrency)
    return config


def _print_outcome(outcome: FileOutcome, *, tsv: bool) -> None:
    result = outcome.result
    print(f"== {outcome.path}")
    if result.success:
        sequence = result.sequence or []
        if tsv:
            print(format_clipboard_text(sequence))
        else:
            for entry in sequence:
                print(f"{entry.sequence:>4}  {entry.booking_id}  max={entry.max_seat_number}  {';'.join(entry.seats)}")
        for message in result.warnings:
            print(f"warning: {message}")
    else:
        for message in result.errors:
            print(f"error: {message}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    config = _build_run_config(args)
    runner = SequenceRunner(config)
    runner.subscribe(lambda outcome: _print_outcome(outcome, tsv=config.tsv))

    outcomes = runner.run()
    print(json.dumps(runner.metrics.as_dict(), indent=2))
    return 0 if all(outcome.result.success for outcome in outcomes) else 1


if __name__ == "__main__":
    sys.exit(main())
