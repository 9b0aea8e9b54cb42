"""APT package sources: ``sources.list`` and ``sources.list.d``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from . import mutator
from .base import RepositoryBackend
from .errors import InvalidFormatError, IOFailureError, NotFoundError
from .formats import SourceFormat, detect_format, is_apt_source
from .host import HostContext
from .installer import STAGE_ADD, STAGE_DELETE, STAGE_UPDATE, ElevatedInstaller, FileInstaller, read_text
from .lines import parse_traditional
from .locator import decode
from .records import Acknowledgment, RepositoryRecord
from .stanza import parse_deb822

logger = logging.getLogger(__name__)


class AptSources(RepositoryBackend):
    def __init__(self, ctx: HostContext, installer: Optional[FileInstaller] = None) -> None:
        self.ctx = ctx
        self.installer = installer or ElevatedInstaller.from_context(ctx)

    def source_files(self) -> List[Path]:
        layout = self.ctx.layout
        files: List[Path] = []
        if layout.sources_list.is_file():
            files.append(layout.sources_list)
        if layout.sources_dir.is_dir():
            files.extend(path for path in sorted(layout.sources_dir.iterdir()) if is_apt_source(path))
        return files

    def list(self) -> List[RepositoryRecord]:
        records: List[RepositoryRecord] = []
        for path in self.source_files():
            try:
                text = read_text(path)
            except IOFailureError as exc:
                logger.debug("skipping %s: %s", path, exc)
                continue
            records.extend(self._parse(path, text))
        return records

    def _parse(self, path: Path, text: str) -> List[RepositoryRecord]:
        if detect_format(path, self.ctx.platform) is SourceFormat.DEB822:
            return parse_deb822(text, str(path))
        return parse_traditional(text, str(path))

    def _load(self, record_id: str) -> Tuple[Path, int, SourceFormat, str]:
        file_path, line = decode(record_id)
        path = Path(file_path)
        layout = self.ctx.layout
        if path != layout.sources_list and path.parent != layout.sources_dir:
            raise NotFoundError(f"Not an APT source file: {file_path}")
        if not path.is_file():
            raise NotFoundError("Repository file not found")
        source_format = detect_format(path, self.ctx.platform)
        if source_format not in (SourceFormat.TRADITIONAL, SourceFormat.DEB822):
            raise InvalidFormatError(f"Not an APT source file: {file_path}")
        return path, line, source_format, read_text(path)

    def toggle(self, record_id: str, enabled: bool) -> Acknowledgment:
        path, line, source_format, text = self._load(record_id)
        if source_format is SourceFormat.DEB822:
            new_text = mutator.toggle_stanza(text, line, enabled)
        else:
            new_text = mutator.toggle_line(text, line, enabled)

        if new_text == text:
            logger.info("%s already %s", record_id, "enabled" if enabled else "disabled")
            return Acknowledgment()
        self.installer.install(new_text, path, STAGE_UPDATE, "Failed to update repository")
        return Acknowledgment()

    def add(self, repo_line: str) -> Acknowledgment:
        entry = mutator.validate_source_line(repo_line)
        target = mutator.unique_path(
            self.ctx.layout.sources_dir,
            mutator.source_file_stem(entry.uri),
            ".list",
            self.ctx.clock(),
        )
        self.installer.install(f"{repo_line.strip()}\n", target, STAGE_ADD, "Failed to add repository")
        return Acknowledgment(file=target.name)

    def delete(self, record_id: str) -> Acknowledgment:
        path, line, source_format, text = self._load(record_id)
        if source_format is SourceFormat.TRADITIONAL:
            new_text = mutator.delete_line(text, line)
        else:
            new_text = mutator.delete_stanza(text, line)
        if not new_text.strip():
            self.installer.remove(path, "Failed to delete repository file")
            return Acknowledgment()
        self.installer.install(new_text, path, STAGE_DELETE, "Failed to update repository file")
        return Acknowledgment()
