"""XDG autostart entries under ``~/.config/autostart``.

These files belong to the user, so they are written directly without the
elevation helper.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from . import mutator
from .base import StartupBackend
from .errors import InvalidFormatError, IOFailureError, NotFoundError
from .formats import SourceFormat, has_format
from .host import HostContext
from .installer import read_text, write_text
from .lines import is_hidden, parse_desktop_entry
from .records import Acknowledgment, StartupRecord

logger = logging.getLogger(__name__)

DESKTOP_SUFFIX = ".desktop"


def entry_path(directory: Path, file: str, missing: str) -> Path:
    """Resolve a bare file name inside ``directory``."""
    if not file or file in (".", "..") or Path(file).name != file:
        raise InvalidFormatError(f"Invalid file name: {file!r}")
    path = directory / file
    if not path.is_file():
        raise NotFoundError(missing)
    return path


class XdgAutostart(StartupBackend):
    def __init__(self, ctx: HostContext) -> None:
        self.ctx = ctx

    @property
    def directory(self) -> Path:
        return self.ctx.layout.autostart_dir

    def list(self) -> List[StartupRecord]:
        if not self.directory.is_dir():
            return []
        apps: List[StartupRecord] = []
        for path in sorted(self.directory.iterdir()):
            if not has_format(path, self.ctx.platform, SourceFormat.DESKTOP_ENTRY):
                continue
            try:
                entry = parse_desktop_entry(read_text(path))
            except IOFailureError as exc:
                logger.debug("skipping %s: %s", path, exc)
                continue
            apps.append(
                StartupRecord(
                    file=path.name,
                    name=entry["name"],
                    exec=entry["exec"],
                    enabled=not is_hidden(entry["hidden"]),
                    file_path=str(path),
                )
            )
        return apps

    def _path(self, file: str) -> Path:
        return entry_path(self.directory, file, "Desktop file not found")

    def toggle(self, file: str, enabled: bool) -> Acknowledgment:
        path = self._path(file)
        text = read_text(path)
        new_text = mutator.toggle_hidden(text, enabled)
        if new_text != text:
            write_text(path, new_text)
            logger.info("%s %s", "enabled" if enabled else "disabled", path)
        return Acknowledgment()

    def add(self, name: str, exec_line: str) -> Acknowledgment:
        content = mutator.render_desktop_entry(name, exec_line)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise IOFailureError(f"Failed to create {self.directory}: {exc}") from exc
        target = mutator.unique_path(self.directory, mutator.sanitize_name(name), DESKTOP_SUFFIX, self.ctx.clock())
        write_text(target, content)
        logger.info("created %s", target)
        return Acknowledgment(file=target.name)

    def edit(self, file: str, name: str, exec_line: str) -> Acknowledgment:
        path = self._path(file)
        write_text(path, mutator.edit_desktop_entry(read_text(path), name, exec_line))
        logger.info("updated %s", path)
        return Acknowledgment()

    def delete(self, file: str) -> Acknowledgment:
        path = self._path(file)
        try:
            path.unlink()
        except OSError as exc:
            raise IOFailureError(f"Failed to delete {path}: {exc}") from exc
        logger.info("deleted %s", path)
        return Acknowledgment()
