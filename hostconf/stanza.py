"""DEB822 paragraph parser for ``*.sources`` files.

A paragraph runs from its first non-blank line to the next blank line (or end
of file). Its anchor, the line used in record identifiers, is that first
non-blank line whatever order the fields come in. Comment lines and
continuation lines (leading whitespace) stay inside the paragraph but carry
no fields of their own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .errors import NotFoundError
from .lines import COMMENT, line_body, split_lines
from .locator import encode
from .records import RepositoryRecord

TRUE_VALUES = ("yes", "true")


@dataclass
class Stanza:
    start: int
    # Index of the closing blank line, or len(lines) at end of file.
    end: int
    fields: Dict[str, str] = field(default_factory=dict)

    @property
    def has_uris(self) -> bool:
        return bool(self.fields.get("uris"))

    @property
    def enabled(self) -> bool:
        value = self.fields.get("enabled")
        if value is None:
            return True
        return value.lower() in TRUE_VALUES


def iter_stanzas(lines: List[str]) -> Iterator[Stanza]:
    current: Optional[Stanza] = None
    for index, line in enumerate(lines):
        stripped = line.strip()
        if not stripped:
            if current is not None:
                current.end = index
                yield current
                current = None
            continue
        if current is None:
            current = Stanza(start=index, end=len(lines))
        if line[0] in " \t" or stripped.startswith(COMMENT):
            continue
        name, sep, value = stripped.partition(":")
        if sep:
            current.fields.setdefault(name.strip().lower(), value.strip())
    if current is not None:
        yield current


def parse_deb822(text: str, file_path: str) -> List[RepositoryRecord]:
    lines = split_lines(text)
    records: List[RepositoryRecord] = []
    for stanza in iter_stanzas(lines):
        if not stanza.has_uris:
            continue
        records.append(
            RepositoryRecord(
                id=encode(file_path, stanza.start),
                file_path=file_path,
                anchor_line=stanza.start,
                types=stanza.fields.get("types", ""),
                uris=stanza.fields["uris"],
                suites=stanza.fields.get("suites", ""),
                components=stanza.fields.get("components", ""),
                enabled=stanza.enabled,
                original_text=line_body("".join(lines[stanza.start:stanza.end])),
            )
        )
    return records


def find_stanza(lines: List[str], anchor: int) -> Stanza:
    """Return the repository stanza anchored at ``anchor``."""
    for stanza in iter_stanzas(lines):
        if stanza.start == anchor and stanza.has_uris:
            return stanza
        if stanza.start > anchor:
            break
    raise NotFoundError(f"No repository starts at line {anchor}")
