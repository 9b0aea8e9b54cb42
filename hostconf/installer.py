"""Install new content over root-owned files through an elevation helper.

Content is staged in a fixed temporary file (one name per operation kind)
and copied into place by a single helper invocation such as
``pkexec cp <staged> <target>``. The staged file is always removed
afterwards. Two writes of the same kind must not run at the same time.
"""

from __future__ import annotations

import abc
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import ElevationFailedError, IOFailureError
from .host import HostContext, Runner

logger = logging.getLogger(__name__)

STAGE_UPDATE = "apt_repo_temp"
STAGE_ADD = "apt_repo_add_temp"
STAGE_DELETE = "apt_repo_del_temp"


class FileInstaller(abc.ABC):
    """Capability to replace or remove a protected file."""

    @abc.abstractmethod
    def install(self, content: str, target: Path, stage: str, failure: str) -> None:
        ...

    @abc.abstractmethod
    def remove(self, target: Path, failure: str) -> None:
        ...


class ElevatedInstaller(FileInstaller):
    def __init__(self, runner: Runner, helper: Optional[Sequence[str]], temp_dir: Path) -> None:
        self.runner = runner
        self.helper: List[str] = list(helper or [])
        self.temp_dir = temp_dir

    @classmethod
    def from_context(cls, ctx: HostContext) -> "ElevatedInstaller":
        return cls(ctx.runner, ctx.elevation_helper, ctx.layout.temp_dir)

    def install(self, content: str, target: Path, stage: str, failure: str) -> None:
        staged = self.temp_dir / stage
        try:
            write_text(staged, content)
            self._run(["cp", str(staged), str(target)], failure)
        finally:
            try:
                staged.unlink()
            except FileNotFoundError:
                pass
            except OSError as exc:
                logger.warning("could not remove staged file %s: %s", staged, exc)
        logger.info("installed %s", target)

    def remove(self, target: Path, failure: str) -> None:
        self._run(["rm", str(target)], failure)
        logger.info("removed %s", target)

    def _run(self, command: List[str], failure: str) -> None:
        argv = self.helper + command
        try:
            result = self.runner(argv)
        except OSError as exc:
            raise IOFailureError(f"{failure}: {exc}") from exc
        if result.returncode != 0:
            raise ElevationFailedError(f"{failure}: {(result.stderr or '').strip()}")


def read_text(path: Path) -> str:
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise IOFailureError(f"Failed to read {path}: {exc}") from exc


def write_text(path: Path, content: str) -> None:
    """Write ``content`` exactly, without newline translation."""
    try:
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
    except OSError as exc:
        raise IOFailureError(f"Failed to write {path}: {exc}") from exc
