import pytest

from booking import Booking
from sequencing.generator import NO_VALID_BOOKINGS, generate_boarding_sequence


def test_farthest_seat_boards_first():
    result = generate_boarding_sequence(
        [
            Booking("120", ["A1", "A2"]),
            Booking("121", ["C20", "C21", "C22"]),
            Booking("100", ["B15"]),
        ]
    )

    assert result.success
    assert [(e.sequence, e.booking_id, e.max_seat_number) for e in result.sequence] == [
        (1, "121", 22),
        (2, "100", 15),
        (3, "120", 2),
    ]
    assert result.sequence[0].seats == ["C20", "C21", "C22"]
    assert result.warnings == []


def test_ties_break_on_identifier_as_text_not_number():
    result = generate_boarding_sequence(
        [
            Booking("9", ["A5"]),
            Booking("120", ["B5"]),
            Booking("100", ["C5"]),
        ]
    )

    # "100" < "120" < "9" when compared as strings.
    assert [e.booking_id for e in result.sequence] == ["100", "120", "9"]


def test_duplicate_identifiers_keep_input_order():
    result = generate_boarding_sequence(
        [Booking("A", ["A3", "B1"]), Booking("A", ["C3"])]
    )

    assert [e.seats for e in result.sequence] == [["A3", "B1"], ["C3"]]


def test_rejected_bookings_become_warnings_and_ranks_stay_contiguous():
    result = generate_boarding_sequence(
        [
            Booking("", ["A1"]),
            Booking("1", ["A4"]),
            Booking("2", []),
            Booking("3", ["XX", "0A"]),
            Booking("4", ["B9"]),
            Booking("5", ["C1"]),
        ]
    )

    assert result.success
    assert [e.sequence for e in result.sequence] == [1, 2, 3]
    assert [e.booking_id for e in result.sequence] == ["4", "1", "5"]
    assert result.warnings == [
        "Invalid booking: Unknown ID - missing ID or seats",
        "Invalid booking: 2 - missing ID or seats",
        "Booking 3: No valid seats found",
    ]


def test_batch_without_valid_bookings_fails_without_data():
    result = generate_boarding_sequence([Booking("", ["A1"])])

    assert not result.success
    assert result.sequence is None
    assert result.errors == ["Invalid booking: Unknown ID - missing ID or seats"]
    assert result.warnings == []
    assert result.as_dict() == {
        "success": False,
        "errors": ["Invalid booking: Unknown ID - missing ID or seats"],
    }


def test_empty_batch_uses_generic_message():
    result = generate_boarding_sequence([])

    assert not result.success
    assert result.errors == [NO_VALID_BOOKINGS]


def test_success_result_as_dict():
    result = generate_boarding_sequence([Booking("9", ["a07"]), Booking("8", ["?"])])

    assert result.as_dict() == {
        "success": True,
        "sequence": [
            {"sequence": 1, "Booking_ID": "9", "maxSeatNumber": 7, "seats": ["A7"]},
        ],
        "warnings": ["Booking 8: No valid seats found"],
    }


def test_input_bookings_are_not_modified():
    bookings = [Booking("2", ["b02"]), Booking("1", ["A10"])]
    generate_boarding_sequence(bookings)

    assert bookings == [Booking("2", ["b02"]), Booking("1", ["A10"])]


@pytest.mark.parametrize("count", [1, 5, 40])
def test_ranks_cover_one_to_n(count):
    bookings = [Booking(str(i), [f"A{(i * 7) % 13 + 1}"]) for i in range(count)]
    result = generate_boarding_sequence(bookings)

    assert sorted(e.sequence for e in result.sequence) == list(range(1, count + 1))
    seat_numbers = [e.max_seat_number for e in result.sequence]
    assert seat_numbers == sorted(seat_numbers, reverse=True)


def test_mixed_case_ties_compare_by_code_point():
    result = generate_boarding_sequence([Booking("a", ["A4"]), Booking("B", ["C4"])])

    # Uppercase letters sort before lowercase ones.
    assert [e.booking_id for e in result.sequence] == ["B", "a"]
