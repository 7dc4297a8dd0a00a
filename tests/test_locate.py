"""Tests for developer directory and Xcode application locators."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from apple_sdk import locate
from apple_sdk.errors import AppleSdkError, XcodeSelectRunError, XcodeSelectStatusError


def _completed(returncode: int, stdout: bytes = b"") -> MagicMock:
    result = MagicMock()
    result.returncode = returncode
    result.stdout = stdout
    return result


# =============================================================================
# default_developer_directory
# =============================================================================

class TestDefaultDeveloperDirectory:
    def test_env_override_wins(self):
        """DEVELOPER_DIR bypasses xcode-select."""
        with patch("apple_sdk.locate.subprocess.run") as run:
            path = locate.default_developer_directory({"DEVELOPER_DIR": "/opt/Xcode/Developer"})
        assert path == Path("/opt/Xcode/Developer")
        run.assert_not_called()

    def test_env_override_from_os_environ(self, monkeypatch):
        """os.environ is consulted by default."""
        monkeypatch.setenv("DEVELOPER_DIR", "/custom/dev")
        assert locate.default_developer_directory() == Path("/custom/dev")

    def test_env_value_used_verbatim(self):
        """The DEVELOPER_DIR value is not trimmed."""
        path = locate.default_developer_directory({"DEVELOPER_DIR": "/with space/dev "})
        assert str(path) == "/with space/dev "

    def test_xcode_select_output_is_stripped(self):
        """xcode-select output is stripped of whitespace."""
        result = _completed(0, b"  /Applications/Xcode.app/Contents/Developer\n")
        with patch("apple_sdk.locate.subprocess.run", return_value=result) as run:
            path = locate.default_developer_directory({})
        assert path == Path("/Applications/Xcode.app/Contents/Developer")
        args, kwargs = run.call_args
        assert args[0] == ["xcode-select", "--print-path"]
        assert kwargs["stderr"] is subprocess.DEVNULL

    def test_xcode_select_not_runnable(self):
        """Failure to start xcode-select raises XcodeSelectRunError."""
        with patch("apple_sdk.locate.subprocess.run", side_effect=FileNotFoundError("xcode-select")):
            with pytest.raises(XcodeSelectRunError) as exc:
                locate.default_developer_directory({})
        assert isinstance(exc.value.cause, FileNotFoundError)

    def test_xcode_select_bad_status(self):
        """A non-zero exit raises XcodeSelectStatusError."""
        with patch("apple_sdk.locate.subprocess.run", return_value=_completed(2)):
            with pytest.raises(XcodeSelectStatusError) as exc:
                locate.default_developer_directory({})
        assert exc.value.returncode == 2
        assert isinstance(exc.value, AppleSdkError)


# =============================================================================
# Fixed-location locators
# =============================================================================

class TestFixedLocations:
    def test_default_xcode_present(self, tmp_path):
        """The default Xcode developer directory is returned when present."""
        app = tmp_path / "Xcode.app"
        (app / "Contents" / "Developer").mkdir(parents=True)
        assert locate.default_xcode_developer_directory(app) == app / "Contents" / "Developer"

    def test_default_xcode_absent(self, tmp_path):
        """A missing default Xcode yields None."""
        assert locate.default_xcode_developer_directory(tmp_path / "Xcode.app") is None

    def test_command_line_tools_present(self, tmp_path):
        """The Command Line Tools SDKs directory is returned when present."""
        (tmp_path / "SDKs").mkdir()
        assert locate.command_line_tools_sdks_directory(tmp_path) == tmp_path / "SDKs"

    def test_command_line_tools_absent(self, tmp_path):
        """A missing Command Line Tools install yields None."""
        assert locate.command_line_tools_sdks_directory(tmp_path) is None


# =============================================================================
# Xcode application discovery
# =============================================================================

class TestFindXcodeApps:
    def test_default_app_sorts_first(self, tmp_path):
        """Xcode.app sorts first, the rest lexically."""
        for name in ["XcodeBeta.app", "Xcode-rc1.app", "Xcode.app"]:
            (tmp_path / name).mkdir()
        apps = locate.find_xcode_apps(tmp_path)
        assert [a.name for a in apps] == ["Xcode.app", "Xcode-rc1.app", "XcodeBeta.app"]

    def test_filters_non_xcode_entries(self, tmp_path):
        """Only Xcode*.app entries are returned."""
        for name in ["Xcode_15.2.app", "Safari.app", "Xcode-notes.txt", "MyXcode.app"]:
            (tmp_path / name).mkdir()
        apps = locate.find_xcode_apps(tmp_path)
        assert [a.name for a in apps] == ["Xcode_15.2.app"]

    def test_without_default_app(self, tmp_path):
        """Without Xcode.app entries sort lexically."""
        for name in ["Xcode_15.app", "Xcode_14.app"]:
            (tmp_path / name).mkdir()
        assert [a.name for a in locate.find_xcode_apps(tmp_path)] == ["Xcode_14.app", "Xcode_15.app"]

    def test_missing_directory_is_empty(self, tmp_path):
        """A missing applications directory yields no apps."""
        assert locate.find_xcode_apps(tmp_path / "Applications") == []

    def test_developer_directories_skip_missing(self, tmp_path):
        """Apps without Contents/Developer are dropped."""
        good = tmp_path / "Xcode.app"
        (good / "Contents" / "Developer").mkdir(parents=True)
        bad = tmp_path / "XcodeBroken.app"
        bad.mkdir()
        assert locate.xcode_developer_directories([good, bad]) == [good / "Contents" / "Developer"]

    def test_system_scan_uses_applications_dir(self, tmp_path, monkeypatch):
        """System scans look in SYSTEM_APPLICATIONS_DIR."""
        (tmp_path / "Xcode.app" / "Contents" / "Developer").mkdir(parents=True)
        monkeypatch.setattr(locate, "SYSTEM_APPLICATIONS_DIR", str(tmp_path))
        assert locate.find_system_xcode_applications() == [tmp_path / "Xcode.app"]
        assert locate.find_system_xcode_developer_directories() == [
            tmp_path / "Xcode.app" / "Contents" / "Developer"
        ]
