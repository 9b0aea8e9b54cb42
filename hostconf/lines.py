"""Parsers for one-record-per-line formats.

Covers traditional APT ``sources.list`` files and the subset of XDG desktop
entries used by autostart. Lines keep their terminators so that the mutator
can rebuild a file byte for byte.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Dict, Iterator, List, Optional, Tuple

from .locator import encode
from .records import RepositoryRecord

COMMENT = "#"
DESKTOP_ENTRY_GROUP = "[Desktop Entry]"

_ENTRY_RE = re.compile(r"^(?P<type>deb|deb-src)(?:\s+\[(?P<options>[^\]]*)\])?\s+(?P<rest>\S.*)$")


@dataclass
class SourceEntry:
    type: str
    options: str
    uri: str
    suite: str
    components: str


def split_lines(text: str) -> List[str]:
    """Split ``text`` into lines, keeping the ``\\n`` terminators."""
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def line_body(line: str) -> str:
    return line.rstrip("\r\n")


def line_ending(line: str) -> str:
    return line[len(line_body(line)):]


def newline_of(lines: List[str]) -> str:
    """The terminator used by the file, ``\\n`` when it has none."""
    for line in lines:
        ending = line_ending(line)
        if ending:
            return ending
    return "\n"


def parse_entry(text: str) -> Optional[SourceEntry]:
    """Parse an uncommented one-line entry, or return None if it is not one."""
    match = _ENTRY_RE.match(text.strip())
    if not match:
        return None
    tokens = match.group("rest").split()
    if len(tokens) < 2:
        return None
    return SourceEntry(
        type=match.group("type"),
        options=(match.group("options") or "").strip(),
        uri=tokens[0],
        suite=tokens[1],
        components=" ".join(tokens[2:]),
    )


def classify_line(line: str) -> Optional[Tuple[bool, SourceEntry]]:
    """Return ``(enabled, entry)`` for a source line, None for anything else."""
    stripped = line.strip()
    if not stripped:
        return None
    enabled = True
    if stripped.startswith(COMMENT):
        stripped = stripped.lstrip(COMMENT).strip()
        if not stripped.startswith("deb"):
            return None
        enabled = False
    elif not stripped.startswith("deb"):
        return None
    entry = parse_entry(stripped)
    if entry is None:
        return None
    return enabled, entry


def parse_traditional(text: str, file_path: str) -> List[RepositoryRecord]:
    records: List[RepositoryRecord] = []
    for index, line in enumerate(split_lines(text)):
        classified = classify_line(line)
        if classified is None:
            continue
        enabled, entry = classified
        records.append(
            RepositoryRecord(
                id=encode(file_path, index),
                file_path=file_path,
                anchor_line=index,
                types=entry.type,
                uris=entry.uri,
                suites=entry.suite,
                components=entry.components,
                enabled=enabled,
                original_text=line_body(line),
                options=entry.options,
            )
        )
    return records


def desktop_entry_keys(lines: List[str]) -> Iterator[Tuple[int, str, str]]:
    """Yield ``(index, key, value)`` for the main group of a desktop entry.

    Keys before the first group header count as part of the main group.
    Other groups such as ``[Desktop Action ...]`` are skipped.
    """
    in_main = True
    for index, line in enumerate(lines):
        body = line_body(line)
        stripped = body.strip()
        if stripped.startswith("["):
            in_main = stripped == DESKTOP_ENTRY_GROUP
            continue
        if not in_main or not stripped or stripped.startswith(COMMENT):
            continue
        key, sep, value = body.partition("=")
        if sep:
            yield index, key, value


def parse_desktop_entry(text: str) -> Dict[str, Optional[str]]:
    """Return ``name``, ``exec`` and ``hidden`` for a desktop entry.

    Key prefixes are case-sensitive; the first occurrence wins.
    """
    found: Dict[str, Optional[str]] = {"name": None, "exec": None, "hidden": None}
    for _, key, value in desktop_entry_keys(split_lines(text)):
        if key == "Name" and found["name"] is None:
            found["name"] = value
        elif key == "Exec" and found["exec"] is None:
            found["exec"] = value
        elif key == "Hidden" and found["hidden"] is None:
            found["hidden"] = value.strip()
    return found


def is_hidden(value: Optional[str]) -> bool:
    return value is not None and value.lower() == "true"
