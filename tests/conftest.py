import subprocess
from pathlib import Path

import pytest

from hostconf.formats import Platform
from hostconf.host import HostContext, HostLayout
from hostconf.installer import FileInstaller, write_text

NOW_MILLIS = 1700000000000


class FakeRunner:
    def __init__(self, returncode=0, stdout="", stderr=""):
        self.calls = []
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr

    def __call__(self, argv):
        self.calls.append(list(argv))
        return subprocess.CompletedProcess(list(argv), self.returncode, self.stdout, self.stderr)


class RecordingInstaller(FileInstaller):
    """Applies installs directly and remembers what was asked."""

    def __init__(self):
        self.operations = []

    def install(self, content, target, stage, failure):
        self.operations.append(("install", Path(target), stage))
        write_text(Path(target), content)

    def remove(self, target, failure):
        self.operations.append(("remove", Path(target)))
        Path(target).unlink()


def make_layout(root: Path) -> HostLayout:
    (root / "etc" / "apt" / "sources.list.d").mkdir(parents=True)
    (root / "tmp").mkdir()
    return HostLayout(
        sources_list=root / "etc" / "apt" / "sources.list",
        sources_dir=root / "etc" / "apt" / "sources.list.d",
        autostart_dir=root / "home" / ".config" / "autostart",
        launch_agents_dir=root / "home" / "Library" / "LaunchAgents",
        brew_candidates=(root / "opt" / "homebrew" / "bin" / "brew",),
        temp_dir=root / "tmp",
    )


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def layout(tmp_path):
    return make_layout(tmp_path)


@pytest.fixture
def linux_ctx(layout, runner):
    return HostContext(platform=Platform.LINUX, layout=layout, runner=runner, clock=lambda: NOW_MILLIS)


@pytest.fixture
def macos_ctx(layout, runner):
    return HostContext(platform=Platform.MACOS, layout=layout, runner=runner, clock=lambda: NOW_MILLIS)


@pytest.fixture
def installer():
    return RecordingInstaller()
