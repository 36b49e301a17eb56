"""Bookings typed in row by row."""
from __future__ import annotations

import re
from typing import Iterable, List, Tuple

from booking import Booking

_SEAT_SPLIT = re.compile(r"[,;\s]+")


def bookings_from_rows(rows: Iterable[Tuple[str, str]]) -> Tuple[List[Booking], List[str]]:
    """Turn ``(booking id, seats text)`` rows into bookings.

    Seats may be separated by commas, semicolons or whitespace. Completely
    blank rows are ignored; other incomplete rows produce a ``Row N`` message
    and are left out.
    """

    bookings: List[Booking] = []
    errors: List[str] = []

    for row_number, (booking_id, seats_input) in enumerate(rows, start=1):
        booking_id = (booking_id or "").strip()
        seats_input = (seats_input or "").strip()

        if not booking_id:
            if seats_input:
                errors.append(f"Row {row_number}: Booking ID is required")
            continue

        if not seats_input:
            errors.append(f"Row {row_number}: At least one seat is required")
            continue

        seats = [seat.strip() for seat in _SEAT_SPLIT.split(seats_input) if seat.strip()]
        if not seats:
            errors.append(f"Row {row_number}: No valid seats found")
            continue

        bookings.append(Booking(booking_id=booking_id, seats=seats))

    return bookings, errors
