"""Caller-owned host state shared by one command invocation."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
import subprocess
import tempfile
import time
from typing import Callable, List, Optional, Sequence, Tuple

import psutil

from .formats import Platform

logger = logging.getLogger(__name__)

Runner = Callable[[Sequence[str]], "subprocess.CompletedProcess[str]"]


def detect_platform() -> Platform:
    if psutil.MACOS:
        return Platform.MACOS
    if psutil.LINUX:
        return Platform.LINUX
    return Platform.OTHER


def running_as_root() -> bool:
    try:
        return psutil.Process().uids().effective == 0
    except (AttributeError, psutil.Error):
        # uids() is POSIX only
        return False


def run_command(argv: Sequence[str]) -> "subprocess.CompletedProcess[str]":
    """Run ``argv`` to completion and capture its output.

    There is no timeout: elevation prompts wait for the user.
    """
    logger.debug("running %s", " ".join(argv))
    return subprocess.run(list(argv), capture_output=True, text=True, check=False)


def epoch_millis() -> int:
    return int(time.time() * 1000)


@dataclass
class HostLayout:
    sources_list: Path = Path("/etc/apt/sources.list")
    sources_dir: Path = Path("/etc/apt/sources.list.d")
    autostart_dir: Path = field(default_factory=lambda: Path.home() / ".config" / "autostart")
    launch_agents_dir: Path = field(default_factory=lambda: Path.home() / "Library" / "LaunchAgents")
    brew_candidates: Tuple[Path, ...] = (Path("/opt/homebrew/bin/brew"), Path("/usr/local/bin/brew"))
    temp_dir: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))

    @classmethod
    def rooted(cls, root: Path) -> "HostLayout":
        """Re-base the system-wide paths under ``root``."""
        default = cls()
        return cls(
            sources_list=root / default.sources_list.relative_to("/"),
            sources_dir=root / default.sources_dir.relative_to("/"),
            autostart_dir=default.autostart_dir,
            launch_agents_dir=default.launch_agents_dir,
            brew_candidates=tuple(root / path.relative_to("/") for path in default.brew_candidates),
            temp_dir=default.temp_dir,
        )


@dataclass
class HostContext:
    """Everything a backend needs from the host.

    One context is built per command and passed down explicitly; nothing is
    cached between calls.
    """

    platform: Platform
    layout: HostLayout
    runner: Runner = run_command
    elevation_helper: Optional[List[str]] = None
    clock: Callable[[], int] = epoch_millis

    @classmethod
    def for_host(cls, layout: Optional[HostLayout] = None, helper: str = "pkexec") -> "HostContext":
        elevation = None if running_as_root() else [helper]
        return cls(platform=detect_platform(), layout=layout or HostLayout(), elevation_helper=elevation)
