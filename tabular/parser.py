"""Comma-separated booking text to ``Booking`` records."""
from __future__ import annotations

from typing import List

from booking import Booking

HEADER_MARKERS = ("booking", "seat")


def _looks_like_header(line: str) -> bool:
    lowered = line.lower()
    return any(marker in lowered for marker in HEADER_MARKERS)


def parse_csv(content: str) -> List[Booking]:
    """Parse ``id,seat,seat,...`` lines into bookings.

    Blank lines are ignored and a first line mentioning "booking" or "seat" is
    treated as a header. Lines without an identifier or any seat are skipped
    without being reported.
    """

    lines = [line.strip() for line in content.split("\n")]
    lines = [line for line in lines if line]
    bookings: List[Booking] = []

    for index, line in enumerate(lines):
        if index == 0 and _looks_like_header(line):
            continue

        parts = [part.strip() for part in line.split(",")]
        if len(parts) < 2:
            continue

        booking_id = parts[0]
        seats = [seat for seat in parts[1:] if seat]
        if booking_id and seats:
            bookings.append(Booking(booking_id=booking_id, seats=seats))

    return bookings
