"""Stable identifiers for records that have no native key.

An identifier is the file path and the record's anchor line joined by a
colon. Decoding splits on the last colon, so paths may contain colons as long
as the line number is the final field.
"""

from __future__ import annotations

from typing import Tuple

from .errors import InvalidFormatError


def encode(path: str, line: int) -> str:
    return f"{path}:{line}"


def decode(record_id: str) -> Tuple[str, int]:
    """Split ``record_id`` into ``(path, line)``."""
    path, sep, number = record_id.rpartition(":")
    if not sep or not path or not number:
        raise InvalidFormatError(f"Invalid repository ID: {record_id!r}")
    if not number.isdigit() or not number.isascii():
        raise InvalidFormatError(f"Invalid line number in repository ID: {record_id!r}")
    return path, int(number)
