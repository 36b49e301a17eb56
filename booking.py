"""Booking records and per-booking seat reduction."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from seats import normalize_seat


@dataclass(frozen=True)
class Booking:
    """A caller-supplied reservation: one identifier, raw seat tokens."""

    booking_id: str
    seats: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Booking":
        booking_id = data.get("Booking_ID", data.get("id")) or ""
        seats = data.get("seats") or []
        if isinstance(seats, str):
            seats = [seats]
        return cls(booking_id=str(booking_id), seats=[str(seat) for seat in seats])

    def as_dict(self) -> Dict:
        return {"Booking_ID": self.booking_id, "seats": list(self.seats)}


@dataclass(frozen=True)
class ProcessedBooking:
    booking_id: str
    seats: List[str]
    max_seat_number: int
    normalized_seats: List[str]


def process_booking(booking: Booking) -> Optional[ProcessedBooking]:
    """Reduce a booking to its farthest seat number.

    Malformed seat tokens are dropped without comment. Returns ``None`` when
    no token survives normalization.
    """

    normalized_seats: List[str] = []
    seat_numbers: List[int] = []
    for token in booking.seats:
        seat = normalize_seat(token)
        if seat is None:
            continue
        normalized_seats.append(seat.label)
        seat_numbers.append(seat.number)

    if not seat_numbers:
        return None

    return ProcessedBooking(
        booking_id=booking.booking_id,
        seats=list(booking.seats),
        max_seat_number=max(seat_numbers),
        normalized_seats=normalized_seats,
    )
