"""LaunchAgent property lists under ``~/Library/LaunchAgents``.

Each agent is read, changed and written back as a whole dictionary. After a
change launchd is told to load or unload the agent. That notification is
best effort: its failure is logged and returned as a warning, never raised.
"""

from __future__ import annotations

import logging
from pathlib import Path
import plistlib
from typing import Any, Dict, List, Optional, Tuple
from xml.parsers.expat import ExpatError

from . import mutator
from .autostart import entry_path
from .base import StartupBackend
from .errors import InvalidFormatError, IOFailureError
from .formats import SourceFormat, has_format
from .host import HostContext, Runner
from .records import Acknowledgment, StartupRecord

logger = logging.getLogger(__name__)

PLIST_SUFFIX = ".plist"
LABEL_PREFIX = "com.user."
_BINARY_HEADER = b"bplist00"


class ServiceNotifier:
    """Tell launchd about a changed agent."""

    def __init__(self, runner: Runner) -> None:
        self.runner = runner

    def notify(self, action: str, path: Path, persist: bool = False) -> Optional[str]:
        """Run ``launchctl <action>``; return a warning message on failure."""
        argv = ["launchctl", action]
        if persist:
            argv.append("-w")
        argv.append(str(path))
        try:
            result = self.runner(argv)
        except OSError as exc:
            message = f"launchctl {action} failed: {exc}"
        else:
            if result.returncode == 0:
                return None
            message = f"launchctl {action} failed: {(result.stderr or '').strip()}"
        logger.warning(message)
        return message


def load_plist(path: Path) -> Tuple[Dict[str, Any], Any]:
    """Return the agent dictionary and the format it was stored in."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise IOFailureError(f"Failed to read plist: {exc}") from exc
    fmt = plistlib.FMT_BINARY if data.startswith(_BINARY_HEADER) else plistlib.FMT_XML
    try:
        value = plistlib.loads(data)
    except (plistlib.InvalidFileException, ExpatError, ValueError) as exc:
        raise InvalidFormatError(f"Failed to read plist: {exc}") from exc
    if not isinstance(value, dict):
        raise InvalidFormatError("Unexpected plist format")
    return value, fmt


def dump_plist(path: Path, value: Dict[str, Any], fmt: Any = plistlib.FMT_XML) -> None:
    try:
        path.write_bytes(plistlib.dumps(value, fmt=fmt))
    except (OSError, TypeError, OverflowError) as exc:
        raise IOFailureError(f"Failed to write plist: {exc}") from exc


def agent_program(agent: Dict[str, Any]) -> Optional[str]:
    arguments = agent.get("ProgramArguments")
    if isinstance(arguments, list) and arguments and isinstance(arguments[0], str):
        return arguments[0]
    program = agent.get("Program")
    return program if isinstance(program, str) else None


def agent_enabled(agent: Dict[str, Any]) -> bool:
    return not bool(agent.get("Disabled", False)) and bool(agent.get("RunAtLoad", False))


class LaunchAgents(StartupBackend):
    def __init__(self, ctx: HostContext, notifier: Optional[ServiceNotifier] = None) -> None:
        self.ctx = ctx
        self.notifier = notifier or ServiceNotifier(ctx.runner)

    @property
    def directory(self) -> Path:
        return self.ctx.layout.launch_agents_dir

    def list(self) -> List[StartupRecord]:
        if not self.directory.is_dir():
            return []
        apps: List[StartupRecord] = []
        for path in sorted(self.directory.iterdir()):
            if not has_format(path, self.ctx.platform, SourceFormat.PROPERTY_LIST):
                continue
            try:
                agent, _ = load_plist(path)
            except (IOFailureError, InvalidFormatError) as exc:
                logger.debug("skipping %s: %s", path, exc)
                continue
            label = agent.get("Label")
            apps.append(
                StartupRecord(
                    file=path.name,
                    name=label if isinstance(label, str) else None,
                    exec=agent_program(agent),
                    enabled=agent_enabled(agent),
                    file_path=str(path),
                )
            )
        return apps

    def _path(self, file: str) -> Path:
        return entry_path(self.directory, file, "Plist file not found")

    def _notify(self, ack: Acknowledgment, action: str, path: Path, persist: bool = False) -> None:
        warning = self.notifier.notify(action, path, persist=persist)
        if warning:
            ack.warnings.append(warning)

    def toggle(self, file: str, enabled: bool) -> Acknowledgment:
        path = self._path(file)
        agent, fmt = load_plist(path)
        agent["Disabled"] = not enabled
        if enabled:
            agent["RunAtLoad"] = True
        dump_plist(path, agent, fmt)
        logger.info("%s %s", "enabled" if enabled else "disabled", path)

        ack = Acknowledgment()
        self._notify(ack, "load" if enabled else "unload", path, persist=True)
        return ack

    def add(self, name: str, exec_line: str) -> Acknowledgment:
        label = LABEL_PREFIX + mutator.sanitize_name(name)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise IOFailureError(f"Failed to create {self.directory}: {exc}") from exc
        target = mutator.unique_path(self.directory, label, PLIST_SUFFIX, self.ctx.clock(), separator="-")
        dump_plist(target, {"Label": label, "ProgramArguments": [exec_line], "RunAtLoad": True})
        logger.info("created %s", target)

        ack = Acknowledgment(file=target.name)
        self._notify(ack, "load", target)
        return ack

    def edit(self, file: str, name: str, exec_line: str) -> Acknowledgment:
        path = self._path(file)
        ack = Acknowledgment()
        self._notify(ack, "unload", path)

        agent, fmt = load_plist(path)
        agent["Label"] = LABEL_PREFIX + mutator.sanitize_name(name)
        agent["ProgramArguments"] = [exec_line]
        dump_plist(path, agent, fmt)
        logger.info("updated %s", path)

        self._notify(ack, "load", path)
        return ack

    def delete(self, file: str) -> Acknowledgment:
        path = self._path(file)
        ack = Acknowledgment()
        self._notify(ack, "unload", path)
        try:
            path.unlink()
        except OSError as exc:
            raise IOFailureError(f"Failed to delete {path}: {exc}") from exc
        logger.info("deleted %s", path)
        return ack
