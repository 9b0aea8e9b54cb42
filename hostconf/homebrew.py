"""Homebrew taps, the macOS counterpart of package sources."""

from __future__ import annotations

import json
import logging
import shutil
from typing import Any, Dict, List

from .base import RepositoryBackend
from .errors import InvalidFormatError, IOFailureError, NotFoundError, UnsupportedOperationError
from .host import HostContext
from .records import Acknowledgment, RepositoryRecord

logger = logging.getLogger(__name__)


class HomebrewTaps(RepositoryBackend):
    def __init__(self, ctx: HostContext) -> None:
        self.ctx = ctx

    def brew(self) -> str:
        for candidate in self.ctx.layout.brew_candidates:
            if candidate.exists():
                return str(candidate)
        found = shutil.which("brew")
        if found:
            return found
        raise NotFoundError("Homebrew not found. Install it from https://brew.sh")

    def _run(self, *args: str) -> str:
        command = [self.brew(), *args]
        try:
            result = self.ctx.runner(command)
        except OSError as exc:
            raise IOFailureError(f"Failed to run brew {args[0]}: {exc}") from exc
        if result.returncode != 0:
            raise IOFailureError(f"brew {args[0]} failed: {(result.stderr or '').strip()}")
        return result.stdout or ""

    def list(self) -> List[RepositoryRecord]:
        output = self._run("tap-info", "--json=v2", "--installed")
        try:
            parsed = json.loads(output)
        except ValueError as exc:
            raise IOFailureError(f"Failed to parse brew output: {exc}") from exc
        taps = parsed.get("taps") if isinstance(parsed, dict) else None
        return [_tap_record(tap) for tap in taps or [] if isinstance(tap, dict)]

    def toggle(self, record_id: str, enabled: bool) -> Acknowledgment:
        raise UnsupportedOperationError("Homebrew taps cannot be toggled. Use Remove to delete a tap.")

    def add(self, repo_line: str) -> Acknowledgment:
        tap_name = repo_line.strip()
        if not tap_name:
            raise InvalidFormatError("Tap name cannot be empty")
        if len(tap_name.split()) != 1:
            raise InvalidFormatError(f"Invalid tap name: {tap_name!r}")
        self._run("tap", tap_name)
        logger.info("tapped %s", tap_name)
        return Acknowledgment()

    def delete(self, record_id: str) -> Acknowledgment:
        self._run("untap", record_id)
        logger.info("untapped %s", record_id)
        return Acknowledgment()


def _tap_record(tap: Dict[str, Any]) -> RepositoryRecord:
    name = str(tap.get("name") or "")
    return RepositoryRecord(
        id=name,
        file_path=str(tap.get("path") or ""),
        anchor_line=0,
        types="tap",
        uris=str(tap.get("remote") or ""),
        suites=str(len(tap.get("formula_names") or [])),
        components=str(len(tap.get("cask_tokens") or [])),
        enabled=True,
        original_text=name,
    )
