"""Minimal text transformations behind toggle, add, edit and delete.

Every function takes the current file content and returns the new content.
Only the addressed record changes; every other line is passed through with
its original terminator.
"""

from __future__ import annotations

from pathlib import Path
import re
from typing import List

from .errors import InvalidFormatError, NotFoundError
from .lines import (
    COMMENT,
    SourceEntry,
    classify_line,
    desktop_entry_keys,
    line_body,
    line_ending,
    newline_of,
    parse_entry,
    split_lines,
)
from .stanza import find_stanza

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


def _line_record(lines: List[str], index: int) -> None:
    if index >= len(lines) or classify_line(lines[index]) is None:
        raise NotFoundError(f"No repository entry at line {index}")


def toggle_line(text: str, index: int, enabled: bool) -> str:
    lines = split_lines(text)
    _line_record(lines, index)
    body, ending = line_body(lines[index]), line_ending(lines[index])
    stripped = body.lstrip()
    commented = stripped.startswith(COMMENT)

    if enabled and commented:
        indent = body[: len(body) - len(stripped)]
        rest = stripped.lstrip(COMMENT)
        if rest.startswith(" "):
            rest = rest[1:]
        body = indent + rest
    elif not enabled and not commented:
        body = f"{COMMENT} {body}"

    lines[index] = body + ending
    return "".join(lines)


def enabled_line(enabled: bool) -> str:
    return f"Enabled: {'yes' if enabled else 'no'}"


def toggle_stanza(text: str, anchor: int, enabled: bool) -> str:
    lines = split_lines(text)
    stanza = find_stanza(lines, anchor)
    replacement = enabled_line(enabled)

    found = False
    for index in range(stanza.start, stanza.end):
        line = lines[index]
        if line[0] in " \t":
            continue
        name, sep, _ = line.strip().partition(":")
        if sep and name.strip().lower() == "enabled":
            lines[index] = replacement + line_ending(line)
            found = True

    if not found:
        lines.insert(stanza.start, replacement + newline_of(lines))
    return "".join(lines)


def delete_line(text: str, index: int) -> str:
    lines = split_lines(text)
    _line_record(lines, index)
    del lines[index]
    return "".join(lines)


def delete_stanza(text: str, anchor: int) -> str:
    """Drop the stanza and the blank line that closes it."""
    lines = split_lines(text)
    stanza = find_stanza(lines, anchor)
    del lines[stanza.start:stanza.end + 1]
    return "".join(lines)


def validate_source_line(repo_line: str) -> SourceEntry:
    trimmed = repo_line.strip()
    if not trimmed.startswith(("deb ", "deb-src ")):
        raise InvalidFormatError("Repository line must start with 'deb' or 'deb-src'")
    entry = parse_entry(trimmed) if "\n" not in trimmed else None
    if entry is None:
        raise InvalidFormatError("Invalid repository format. Expected: deb URI suite [components...]")
    return entry


def source_file_stem(uri: str) -> str:
    """Derive a file-system safe name from a repository URI."""
    stem = _SCHEME_RE.sub("", uri).replace("/", "-").replace(".", "-")
    stem = "".join(char for char in stem if char.isascii() and (char.isalnum() or char == "-"))
    return stem or "repository"


def sanitize_name(name: str) -> str:
    stem = name.lower().replace(" ", "-")
    stem = "".join(char for char in stem if char.isascii() and (char.isalnum() or char == "-"))
    return stem or "app"


def unique_path(directory: Path, stem: str, suffix: str, millis: int, separator: str = "_") -> Path:
    """``directory/stem+suffix``, or a timestamped name if that is taken."""
    candidate = directory / f"{stem}{suffix}"
    if candidate.exists():
        candidate = directory / f"{stem}{separator}{millis}{suffix}"
    return candidate


def _single_line(value: str, what: str) -> str:
    if "\n" in value or "\r" in value:
        raise InvalidFormatError(f"{what} must be a single line")
    return value


def render_desktop_entry(name: str, exec_line: str) -> str:
    _single_line(name, "Name")
    _single_line(exec_line, "Exec")
    return f"[Desktop Entry]\nType=Application\nName={name}\nExec={exec_line}\nHidden=false\n"


def _set_key(lines: List[str], key: str, value: str) -> None:
    last_key_index = None
    found = False
    for index, current, _ in list(desktop_entry_keys(lines)):
        last_key_index = index
        if current == key:
            lines[index] = f"{key}={value}" + line_ending(lines[index])
            found = True
    if found:
        return

    newline = newline_of(lines)
    position = len(lines) if last_key_index is None else last_key_index + 1
    if position > 0 and not line_ending(lines[position - 1]):
        lines[position - 1] += newline
    lines.insert(position, f"{key}={value}{newline}")


def toggle_hidden(text: str, enabled: bool) -> str:
    lines = split_lines(text)
    _set_key(lines, "Hidden", "false" if enabled else "true")
    return "".join(lines)


def edit_desktop_entry(text: str, name: str, exec_line: str) -> str:
    lines = split_lines(text)
    _set_key(lines, "Name", _single_line(name, "Name"))
    _set_key(lines, "Exec", _single_line(exec_line, "Exec"))
    return "".join(lines)
