from hostconf.lines import classify_line, parse_desktop_entry, parse_traditional, split_lines
from hostconf.stanza import parse_deb822

TRADITIONAL = """\
# See sources.list(5)
deb http://deb.debian.org/debian bookworm main contrib
# deb-src http://deb.debian.org/debian bookworm main

#deb http://security.debian.org bookworm-security main
deb [arch=amd64 signed-by=/usr/share/keyrings/x.gpg] https://example.com/apt stable main
deb http://broken.example.com
# debian mirrors are listed below
"""

DEB822 = """\
Types: deb
URIs: http://deb.debian.org/debian
Suites: bookworm bookworm-updates
Components: main

Enabled: no
Types: deb deb-src
URIs: http://security.debian.org
Suites: bookworm-security
Components: main
"""


def test_split_lines_keeps_terminators():
    assert split_lines("a\nb\r\nc") == ["a\n", "b\r\n", "c"]
    assert split_lines("a\n") == ["a\n"]
    assert split_lines("") == []


def test_traditional_records():
    records = parse_traditional(TRADITIONAL, "/etc/apt/sources.list")
    assert [record.anchor_line for record in records] == [1, 2, 4, 5]
    assert [record.enabled for record in records] == [True, False, False, True]

    first = records[0]
    assert first.id == "/etc/apt/sources.list:1"
    assert first.types == "deb"
    assert first.uris == "http://deb.debian.org/debian"
    assert first.suites == "bookworm"
    assert first.components == "main contrib"
    assert first.original_text == "deb http://deb.debian.org/debian bookworm main contrib"

    assert records[1].types == "deb-src"
    assert records[3].options == "arch=amd64 signed-by=/usr/share/keyrings/x.gpg"
    assert records[3].uris == "https://example.com/apt"


def test_short_and_prose_lines_are_skipped():
    assert classify_line("deb http://broken.example.com") is None
    assert classify_line("# debian mirrors are listed below") is None
    assert classify_line("   ") is None


def test_parsing_is_idempotent():
    assert parse_traditional(TRADITIONAL, "/x.list") == parse_traditional(TRADITIONAL, "/x.list")
    assert parse_deb822(DEB822, "/x.sources") == parse_deb822(DEB822, "/x.sources")


def test_deb822_records():
    records = parse_deb822(DEB822, "/etc/apt/sources.list.d/debian.sources")
    assert len(records) == 2

    first, second = records
    assert first.anchor_line == 0
    assert first.enabled is True
    assert first.suites == "bookworm bookworm-updates"
    assert first.original_text.startswith("Types: deb\n")
    assert not first.original_text.endswith("\n")

    assert second.anchor_line == 5
    assert second.enabled is False
    assert second.types == "deb deb-src"


def test_deb822_anchor_is_first_line_of_paragraph_regardless_of_field_order():
    text = "\n\nURIs: http://a\nTypes: deb\nSuites: s\n\n\n# mirror\nTypes: deb\nURIs: http://b\nSuites: s"
    records = parse_deb822(text, "/x.sources")
    assert [record.anchor_line for record in records] == [2, 7]
    assert records[1].uris == "http://b"


def test_deb822_first_field_occurrence_wins_and_paragraph_without_uris_is_dropped():
    text = "Types: deb\nURIs: http://first\nURIs: http://second\nSuites: s\n\nTypes: deb\nSuites: s\n"
    records = parse_deb822(text, "/x.sources")
    assert len(records) == 1
    assert records[0].uris == "http://first"


def test_deb822_enabled_values():
    for value, expected in [("yes", True), ("Yes", True), ("true", True), ("no", False), ("false", False)]:
        text = f"Types: deb\nURIs: http://a\nSuites: s\nEnabled: {value}\n"
        assert parse_deb822(text, "/x.sources")[0].enabled is expected


def test_desktop_entry_fields():
    text = "[Desktop Entry]\nName=Syncthing\nExec=syncthing -no-browser\nHidden=True\n"
    assert parse_desktop_entry(text) == {"name": "Syncthing", "exec": "syncthing -no-browser", "hidden": "True"}


def test_desktop_entry_ignores_other_groups_and_case_mismatched_keys():
    text = "[Desktop Entry]\nname=lower\nName=Real\n\n[Desktop Action New]\nName=Action\nExec=other\n"
    entry = parse_desktop_entry(text)
    assert entry["name"] == "Real"
    assert entry["exec"] is None
    assert entry["hidden"] is None
