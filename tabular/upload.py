"""Checks applied to uploaded booking files before they are parsed."""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

MAX_UPLOAD_BYTES = 5 * 1024 * 1024
ALLOWED_EXTENSIONS = (".csv", ".txt")


class UploadError(ValueError):
    """Raised when an uploaded file cannot be handed to the parser."""


def _describe_size(num_bytes: int) -> str:
    megabytes, remainder = divmod(num_bytes, 1024 * 1024)
    if megabytes and not remainder:
        return f"{megabytes}MB"
    return f"{num_bytes} bytes"


def read_upload(
    path: Path,
    *,
    max_bytes: int = MAX_UPLOAD_BYTES,
    allowed_extensions: Sequence[str] = ALLOWED_EXTENSIONS,
) -> str:
    """Return the text of ``path`` or raise :class:`UploadError`.

    The extension is checked first, then the size, then the file is decoded
    as UTF-8 with undecodable bytes replaced.
    """

    path = Path(path)
    if not path.name.lower().endswith(tuple(ext.lower() for ext in allowed_extensions)):
        raise UploadError("Please upload a CSV or TXT file")

    try:
        size = path.stat().st_size
        if size > max_bytes:
            raise UploadError(f"File size must be less than {_describe_size(max_bytes)}")
        return path.read_bytes().decode("utf-8", errors="replace")
    except OSError as exc:
        raise UploadError("Error reading file") from exc
