"""Text adapters around the boarding sequence generator."""

from .manual import bookings_from_rows
from .parser import parse_csv
from .serializer import (
    CSV_MIME_TYPE,
    export_filename,
    export_to_csv,
    format_clipboard_text,
    load_sequence_csv,
)
from .upload import UploadError, read_upload

__all__ = [
    "CSV_MIME_TYPE",
    "UploadError",
    "bookings_from_rows",
    "export_filename",
    "export_to_csv",
    "format_clipboard_text",
    "load_sequence_csv",
    "parse_csv",
    "read_upload",
]
