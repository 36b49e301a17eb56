import pytest

from booking import Booking
from tabular.manual import bookings_from_rows
from tabular.upload import UploadError, read_upload


def test_read_upload_returns_text(tmp_path):
    path = tmp_path / "bookings.CSV"
    path.write_text("1,A1\n", encoding="utf-8")

    assert read_upload(path) == "1,A1\n"


def test_read_upload_rejects_other_extensions(tmp_path):
    path = tmp_path / "bookings.xlsx"
    path.write_text("1,A1\n", encoding="utf-8")

    with pytest.raises(UploadError, match="CSV or TXT"):
        read_upload(path)


def test_read_upload_enforces_size_cap(tmp_path):
    path = tmp_path / "bookings.txt"
    path.write_text("1,A1\n" * 10, encoding="utf-8")

    with pytest.raises(UploadError, match="File size"):
        read_upload(path, max_bytes=20)


def test_read_upload_reports_missing_file(tmp_path):
    with pytest.raises(UploadError, match="Error reading file"):
        read_upload(tmp_path / "missing.csv")


def test_upload_error_is_a_value_error():
    assert issubclass(UploadError, ValueError)


def test_manual_rows_split_on_commas_semicolons_and_spaces():
    bookings, errors = bookings_from_rows(
        [
            (" 120 ", "A1, A2"),
            ("121", "C20;C21  C22"),
        ]
    )

    assert bookings == [
        Booking("120", ["A1", "A2"]),
        Booking("121", ["C20", "C21", "C22"]),
    ]
    assert errors == []


def test_manual_rows_report_incomplete_rows():
    bookings, errors = bookings_from_rows(
        [
            ("", ""),
            ("", "A1"),
            ("7", "   "),
            ("8", ", ;"),
            ("9", "B2"),
        ]
    )

    assert bookings == [Booking("9", ["B2"])]
    assert errors == [
        "Row 2: Booking ID is required",
        "Row 3: At least one seat is required",
        "Row 4: No valid seats found",
    ]
