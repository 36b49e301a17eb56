"""Exporters for a generated boarding sequence."""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Iterable, List, Optional

from sequencing.generator import BoardingSequenceEntry

CSV_HEADERS = ("Seq", "Booking_ID", "Max_Seat_Number", "Seats")
CSV_MIME_TYPE = "text/csv"
SEAT_SEPARATOR = ";"


def _quote_row(cells: Iterable[str]) -> str:
    # Embedded quotes and commas are written as-is.
    return ",".join(f'"{cell}"' for cell in cells)


def export_to_csv(sequence: Iterable[BoardingSequenceEntry]) -> str:
    rows = [_quote_row(CSV_HEADERS)]
    for entry in sequence:
        rows.append(
            _quote_row(
                [
                    str(entry.sequence),
                    entry.booking_id,
                    str(entry.max_seat_number),
                    SEAT_SEPARATOR.join(entry.seats),
                ]
            )
        )
    return "\n".join(rows)


def load_sequence_csv(content: str) -> List[BoardingSequenceEntry]:
    """Read text produced by :func:`export_to_csv` back into entries."""

    entries: List[BoardingSequenceEntry] = []
    lines = [line.strip() for line in content.split("\n") if line.strip()]
    for index, line in enumerate(lines):
        cells = [cell.strip().strip('"') for cell in line.split(",")]
        if index == 0 and cells[0] == CSV_HEADERS[0]:
            continue
        if len(cells) != len(CSV_HEADERS):
            raise ValueError(f"Unexpected sequence row: {line}")
        seq, booking_id, max_seat, seats = cells
        entries.append(
            BoardingSequenceEntry(
                sequence=int(seq),
                booking_id=booking_id,
                max_seat_number=int(max_seat),
                seats=[seat for seat in seats.split(SEAT_SEPARATOR) if seat],
            )
        )
    return entries


def format_clipboard_text(sequence: Iterable[BoardingSequenceEntry]) -> str:
    """Tab-separated ``Seq``/``Booking_ID`` pairs for pasting into a sheet."""

    lines = ["Seq\tBooking_ID"]
    lines.extend(f"{entry.sequence}\t{entry.booking_id}" for entry in sequence)
    return "\n".join(lines)


def export_filename(on: Optional[date] = None) -> str:
    if on is None:
        on = datetime.now(timezone.utc).date()
    return f"boarding-sequence-{on.isoformat()}.csv"
