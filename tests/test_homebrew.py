import json

import pytest

from hostconf.errors import InvalidFormatError, IOFailureError, NotFoundError, UnsupportedOperationError
from hostconf.homebrew import HomebrewTaps

TAP_INFO = {
    "taps": [
        {
            "name": "homebrew/cask-fonts",
            "remote": "https://github.com/Homebrew/homebrew-cask-fonts",
            "path": "/opt/homebrew/Library/Taps/homebrew/homebrew-cask-fonts",
            "formula_names": [],
            "cask_tokens": ["font-a", "font-b"],
        },
        {"name": "acme/tools", "remote": None, "path": "/taps/acme", "formula_names": ["one"]},
    ]
}


@pytest.fixture
def brew(layout):
    path = layout.brew_candidates[0]
    path.parent.mkdir(parents=True)
    path.write_text("#!/bin/sh\n")
    return str(path)


def test_list_taps(macos_ctx, runner, brew):
    runner.stdout = json.dumps(TAP_INFO)

    records = HomebrewTaps(macos_ctx).list()

    assert runner.calls == [[brew, "tap-info", "--json=v2", "--installed"]]
    assert [(r.id, r.types, r.uris, r.suites, r.components, r.enabled) for r in records] == [
        ("homebrew/cask-fonts", "tap", "https://github.com/Homebrew/homebrew-cask-fonts", "0", "2", True),
        ("acme/tools", "tap", "", "1", "0", True),
    ]
    assert records[0].anchor_line == 0


def test_bad_brew_output(macos_ctx, runner, brew):
    runner.stdout = "not json"
    with pytest.raises(IOFailureError):
        HomebrewTaps(macos_ctx).list()


def test_tap_and_untap(macos_ctx, runner, brew):
    backend = HomebrewTaps(macos_ctx)
    assert backend.add("  acme/tools ").success
    assert backend.delete("acme/tools").success
    assert runner.calls == [[brew, "tap", "acme/tools"], [brew, "untap", "acme/tools"]]


def test_tap_failure_reports_stderr(macos_ctx, runner, brew):
    runner.returncode = 1
    runner.stderr = "Error: Invalid tap name\n"
    with pytest.raises(IOFailureError, match="Invalid tap name"):
        HomebrewTaps(macos_ctx).add("bogus")


def test_toggle_is_unsupported(macos_ctx, runner):
    with pytest.raises(UnsupportedOperationError):
        HomebrewTaps(macos_ctx).toggle("acme/tools", False)
    assert runner.calls == []


def test_empty_tap_name(macos_ctx, brew):
    with pytest.raises(InvalidFormatError):
        HomebrewTaps(macos_ctx).add("   ")


def test_missing_brew(macos_ctx, monkeypatch):
    monkeypatch.setattr("hostconf.homebrew.shutil.which", lambda name: None)
    with pytest.raises(NotFoundError):
        HomebrewTaps(macos_ctx).list()
