"""Seat token normalization helpers."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

# Row letters followed by seat digits, nothing else. Tokens are uppercased first.
_SEAT_PATTERN = re.compile(r"([A-Z]+)([0-9]+)")


@dataclass(frozen=True)
class NormalizedSeat:
    row: str
    number: int

    @property
    def label(self) -> str:
        return f"{self.row}{self.number}"

    def __str__(self) -> str:
        return self.label

    def __repr__(self) -> str:
        return str(self)


def normalize_seat(token: str) -> Optional[NormalizedSeat]:
    """Parse a raw seat token such as ``" b02 "`` into ``NormalizedSeat("B", 2)``.

    Returns ``None`` for anything that is not letters followed by a positive
    number. Leading zeros are dropped from the number.
    """

    cleaned = token.strip().upper()
    match = _SEAT_PATTERN.fullmatch(cleaned)
    if not match:
        return None

    row, digits = match.groups()
    number = int(digits, 10)
    if number <= 0:
        return None
    return NormalizedSeat(row=row, number=number)
