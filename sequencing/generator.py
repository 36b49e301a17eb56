"""Boarding order generation from raw bookings."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from booking import Booking, ProcessedBooking, process_booking

NO_VALID_BOOKINGS = "No valid bookings found"


@dataclass(frozen=True)
class BoardingSequenceEntry:
    """A processed booking with its 1-based boarding rank."""

    sequence: int
    booking_id: str
    max_seat_number: int
    seats: List[str]

    def as_dict(self) -> Dict:
        return {
            "sequence": self.sequence,
            "Booking_ID": self.booking_id,
            "maxSeatNumber": self.max_seat_number,
            "seats": list(self.seats),
        }


@dataclass(frozen=True)
class ProcessingResult:
    """Either a ranked sequence plus warnings, or a list of errors.

    Failed results never carry a sequence.
    """

    success: bool
    sequence: Optional[List[BoardingSequenceEntry]] = None
    errors: List[str] = field(default_factory=list)

    @classmethod
    def succeeded(
        cls, sequence: List[BoardingSequenceEntry], warnings: Iterable[str] = ()
    ) -> "ProcessingResult":
        return cls(success=True, sequence=list(sequence), errors=list(warnings))

    @classmethod
    def failed(cls, errors: Iterable[str]) -> "ProcessingResult":
        return cls(success=False, sequence=None, errors=list(errors))

    @property
    def warnings(self) -> List[str]:
        """Non-fatal messages of a successful run."""

        return list(self.errors) if self.success else []

    def as_dict(self) -> Dict:
        if not self.success:
            return {"success": False, "errors": list(self.errors)}
        return {
            "success": True,
            "sequence": [entry.as_dict() for entry in self.sequence or []],
            "warnings": list(self.errors),
        }


def _ranking_key(booking: ProcessedBooking):
    # Farthest seat first, then identifier by plain string comparison.
    return (-booking.max_seat_number, booking.booking_id)


def generate_boarding_sequence(bookings: Iterable[Booking]) -> ProcessingResult:
    """Rank bookings back-to-front and number them from 1.

    Bookings without an identifier or seats, and bookings whose seats all fail
    to normalize, are skipped and reported. The run only fails when nothing
    survives.
    """

    errors: List[str] = []
    processed: List[ProcessedBooking] = []

    for booking in bookings:
        if not booking.booking_id or not booking.seats:
            errors.append(
                f"Invalid booking: {booking.booking_id or 'Unknown ID'} - missing ID or seats"
            )
            continue

        result = process_booking(booking)
        if result is None:
            errors.append(f"Booking {booking.booking_id}: No valid seats found")
            continue
        processed.append(result)

    if not processed:
        return ProcessingResult.failed(errors or [NO_VALID_BOOKINGS])

    ordered = sorted(processed, key=_ranking_key)
    sequence = [
        BoardingSequenceEntry(
            sequence=index,
            booking_id=booking.booking_id,
            max_seat_number=booking.max_seat_number,
            seats=list(booking.normalized_seats),
        )
        for index, booking in enumerate(ordered, start=1)
    ]
    return ProcessingResult.succeeded(sequence, warnings=errors)
