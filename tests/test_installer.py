import pytest

from hostconf.errors import ElevationFailedError, IOFailureError
from hostconf.installer import STAGE_UPDATE, ElevatedInstaller, FileInstaller, read_text, write_text


def test_install_stages_copies_and_cleans_up(tmp_path, runner):
    seen = []
    staged = tmp_path / STAGE_UPDATE

    def recording_runner(argv):
        seen.append(staged.read_text())
        return runner(argv)

    installer = ElevatedInstaller(recording_runner, ["pkexec"], tmp_path)
    installer.install("deb http://example.com stable main\n", tmp_path / "target.list", STAGE_UPDATE, "Failed")

    assert runner.calls == [["pkexec", "cp", str(staged), str(tmp_path / "target.list")]]
    assert seen == ["deb http://example.com stable main\n"]
    assert not staged.exists()


def test_install_failure_carries_stderr_and_still_cleans_up(tmp_path, runner):
    runner.returncode = 126
    runner.stderr = "Request dismissed\n"
    installer = ElevatedInstaller(runner, ["pkexec"], tmp_path)

    with pytest.raises(ElevationFailedError) as excinfo:
        installer.install("content", tmp_path / "target.list", STAGE_UPDATE, "Failed to update repository")

    assert str(excinfo.value) == "Failed to update repository: Request dismissed"
    assert not (tmp_path / STAGE_UPDATE).exists()


def test_spawn_failure_is_io_failure(tmp_path):
    def missing_helper(argv):
        raise FileNotFoundError("pkexec")

    installer = ElevatedInstaller(missing_helper, ["pkexec"], tmp_path)
    with pytest.raises(IOFailureError):
        installer.install("content", tmp_path / "target.list", STAGE_UPDATE, "Failed")
    assert not (tmp_path / STAGE_UPDATE).exists()


def test_remove_without_helper_when_root(tmp_path, runner):
    ElevatedInstaller(runner, None, tmp_path).remove(tmp_path / "gone.sources", "Failed")
    assert runner.calls == [["rm", str(tmp_path / "gone.sources")]]


def test_text_helpers_keep_line_terminators(tmp_path):
    path = tmp_path / "crlf.list"
    write_text(path, "deb http://a stable main\r\n")
    assert path.read_bytes() == b"deb http://a stable main\r\n"
    assert read_text(path) == "deb http://a stable main\r\n"

    with pytest.raises(IOFailureError):
        read_text(tmp_path / "missing.list")


def test_installer_without_remove_cannot_be_created():
    class InstallOnly(FileInstaller):
        def install(self, content, target, stage, failure):
            pass

    with pytest.raises(TypeError):
        InstallOnly()
