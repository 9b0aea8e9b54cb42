"""Select the backend implementation for the running platform."""

from __future__ import annotations

from typing import Optional

from .apt import AptSources
from .autostart import XdgAutostart
from .base import RepositoryBackend, StartupBackend
from .errors import UnsupportedOperationError
from .formats import Platform
from .homebrew import HomebrewTaps
from .host import HostContext
from .installer import FileInstaller
from .launchd import LaunchAgents, ServiceNotifier


def repository_backend(ctx: HostContext, installer: Optional[FileInstaller] = None) -> RepositoryBackend:
    if ctx.platform is Platform.LINUX:
        return AptSources(ctx, installer)
    if ctx.platform is Platform.MACOS:
        return HomebrewTaps(ctx)
    raise UnsupportedOperationError(f"Package sources are not supported on {ctx.platform.value}")


def startup_backend(ctx: HostContext, notifier: Optional[ServiceNotifier] = None) -> StartupBackend:
    if ctx.platform is Platform.LINUX:
        return XdgAutostart(ctx)
    if ctx.platform is Platform.MACOS:
        return LaunchAgents(ctx, notifier)
    raise UnsupportedOperationError(f"Startup entries are not supported on {ctx.platform.value}")
