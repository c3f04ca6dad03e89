"""
Tests for the pacman.conf multilib transform and its file wrapper.
"""

import textwrap
from pathlib import Path

import pytest

from steam_installer.core.errors import ConfigurationEditVerificationError
from steam_installer.core.services.pacman_conf import (
    MultilibState,
    enable_multilib,
    ensure_multilib,
    multilib_state,
)

COMMENTED = textwrap.dedent("""\
    [options]
    HoldPkg     = pacman glibc
    Architecture = auto

    [core]
    Include = /etc/pacman.d/mirrorlist

    #[multilib-testing]
    #Include = /etc/pacman.d/mirrorlist

    #[multilib]
    #Include = /etc/pacman.d/mirrorlist
""")

ENABLED = COMMENTED.replace(
    "#[multilib]\n#Include = /etc/pacman.d/mirrorlist",
    "[multilib]\nInclude = /etc/pacman.d/mirrorlist",
)

NO_SECTION = textwrap.dedent("""\
    [options]
    Architecture = auto

    [core]
    Include = /etc/pacman.d/mirrorlist
""")


# ── Pure transform ──────────────────────────────────────────────────


class TestMultilibState:
    def test_commented(self):
        assert multilib_state(COMMENTED) == MultilibState.COMMENTED

    def test_enabled(self):
        assert multilib_state(ENABLED) == MultilibState.ENABLED

    def test_absent(self):
        assert multilib_state(NO_SECTION) == MultilibState.ABSENT

    def test_header_without_include_is_absent(self):
        assert multilib_state("#[multilib]\nServer = http://example\n") == MultilibState.ABSENT

    def test_half_commented_is_commented(self):
        text = "[multilib]\n#Include = /etc/pacman.d/mirrorlist\n"
        assert multilib_state(text) == MultilibState.COMMENTED

    def test_testing_section_not_confused(self):
        text = "[multilib-testing]\nInclude = /etc/pacman.d/mirrorlist\n"
        assert multilib_state(text) == MultilibState.ABSENT

    @pytest.mark.parametrize("text", [
        "[multilib]\nInclude=/etc/pacman.d/mirrorlist\n",
        "[multilib]\nSigLevel = PackageRequired\nInclude = /etc/pacman.d/mirrorlist\n",
        "[multilib]\nServer = https://mirror.example/$repo/os/$arch\n",
    ])
    def test_active_header_in_other_layouts_is_enabled(self, text):
        assert multilib_state(text) == MultilibState.ENABLED

    def test_leftover_commented_copy_with_active_section(self):
        text = (
            "#[multilib]\n#Include = /etc/pacman.d/mirrorlist\n\n"
            "[multilib]\nInclude = /etc/pacman.d/mirrorlist\n"
        )
        assert multilib_state(text) == MultilibState.ENABLED
        assert enable_multilib(text) == text


class TestEnableMultilib:
    def test_uncomments_both_lines(self):
        assert enable_multilib(COMMENTED) == ENABLED

    def test_leaves_testing_section_commented(self):
        result = enable_multilib(COMMENTED)
        assert "#[multilib-testing]" in result

    def test_enabled_text_unchanged(self):
        assert enable_multilib(ENABLED) == ENABLED

    def test_absent_text_unchanged(self):
        assert enable_multilib(NO_SECTION) == NO_SECTION

    def test_half_commented_fixed(self):
        text = "[multilib]\n#Include = /etc/pacman.d/mirrorlist\n"
        assert enable_multilib(text) == "[multilib]\nInclude = /etc/pacman.d/mirrorlist\n"

    def test_keeps_indentation_and_missing_final_newline(self):
        text = "  #[multilib]\n  #Include = /etc/pacman.d/mirrorlist"
        assert enable_multilib(text) == "  [multilib]\n  Include = /etc/pacman.d/mirrorlist"


# ── File wrapper ────────────────────────────────────────────────────


class TestEnsureMultilib:
    def test_enables_commented_section(self, tmp_path: Path):
        conf = tmp_path / "pacman.conf"
        conf.write_text(COMMENTED)

        assert ensure_multilib(conf) == MultilibState.COMMENTED
        assert conf.read_text() == ENABLED

    def test_already_enabled_is_noop(self, tmp_path: Path, monkeypatch):
        conf = tmp_path / "pacman.conf"
        conf.write_text(ENABLED)

        def _no_write(self, *args, **kwargs):
            raise AssertionError("pacman.conf must not be rewritten")

        monkeypatch.setattr(Path, "write_text", _no_write)

        assert ensure_multilib(conf) == MultilibState.ENABLED

    @pytest.mark.parametrize("text", [
        "[multilib]\nInclude=/etc/pacman.d/mirrorlist\n",
        "[multilib]\nSigLevel = PackageRequired\nInclude = /etc/pacman.d/mirrorlist\n",
    ])
    def test_enabled_in_other_layouts_is_noop(self, tmp_path: Path, text):
        conf = tmp_path / "pacman.conf"
        conf.write_text(text)

        assert ensure_multilib(conf) == MultilibState.ENABLED
        assert conf.read_text() == text

    def test_missing_section_left_unchanged(self, tmp_path: Path, caplog):
        conf = tmp_path / "pacman.conf"
        conf.write_text(NO_SECTION)

        assert ensure_multilib(conf) == MultilibState.ABSENT
        assert conf.read_text() == NO_SECTION
        assert "No commented [multilib] section" in caplog.text

    def test_non_utf8_bytes_preserved(self, tmp_path: Path):
        conf = tmp_path / "pacman.conf"
        conf.write_bytes(
            b"# Maintainer: Jos\xe9\n#[multilib]\n#Include = /etc/pacman.d/mirrorlist\n"
        )

        assert ensure_multilib(conf) == MultilibState.COMMENTED
        assert conf.read_bytes() == (
            b"# Maintainer: Jos\xe9\n[multilib]\nInclude = /etc/pacman.d/mirrorlist\n"
        )

    def test_non_utf8_enabled_file_is_noop(self, tmp_path: Path):
        raw = b"# caf\xe9\n[multilib]\nInclude = /etc/pacman.d/mirrorlist\n"
        conf = tmp_path / "pacman.conf"
        conf.write_bytes(raw)

        assert ensure_multilib(conf) == MultilibState.ENABLED
        assert conf.read_bytes() == raw

    def test_missing_file_is_fatal(self, tmp_path: Path):
        with pytest.raises(ConfigurationEditVerificationError):
            ensure_multilib(tmp_path / "absent.conf")

    def test_unverifiable_write_is_fatal(self, tmp_path: Path, monkeypatch):
        conf = tmp_path / "pacman.conf"
        conf.write_text(COMMENTED)

        # Simulate a write that silently did not take effect.
        monkeypatch.setattr(Path, "write_text", lambda self, *a, **k: 0)

        with pytest.raises(ConfigurationEditVerificationError) as exc:
            ensure_multilib(conf)
        assert "manually uncomment [multilib]" in exc.value.remedy
