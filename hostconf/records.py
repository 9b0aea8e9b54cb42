"""Record types returned by the list operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class RepositoryRecord:
    id: str
    file_path: str
    anchor_line: int
    types: str
    uris: str
    suites: str
    components: str
    enabled: bool
    original_text: str
    options: str = ""


@dataclass
class StartupRecord:
    file: str
    name: Optional[str]
    exec: Optional[str]
    enabled: bool
    file_path: str


@dataclass
class Acknowledgment:
    success: bool = True
    file: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
