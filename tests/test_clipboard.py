"""Tests for clipboard backends."""

import logging
import subprocess
import sys

import pytest
from copypage.clipboard import (
    Clipboard,
    CommandClipboard,
    TkClipboard,
    default_commands,
)
from copypage.errors import ClipboardUnavailableError
from copypage.models import ClipboardConfig


class TestDefaultCommands:
    """Tests for platform command selection."""

    def test_macos(self):
        """Test pbcopy on macOS."""
        assert default_commands("darwin") == [["pbcopy"]]

    def test_windows(self):
        """Test clip on Windows."""
        assert default_commands("win32") == [["clip"]]

    def test_linux_prefers_wayland(self):
        """Test the Linux command order."""
        commands = default_commands("linux")

        assert commands[0] == ["wl-copy"]
        assert ["xclip", "-selection", "clipboard"] in commands

    def test_unknown_platform(self):
        """Test that unknown platforms have no commands."""
        assert default_commands("sunos5") == []


class TestCommandClipboard:
    """Tests for CommandClipboard."""

    def test_runs_installed_command(self, monkeypatch):
        """Test that text is piped to the first installed command."""
        calls = []
        monkeypatch.setattr("copypage.clipboard.shutil.which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr(
            "copypage.clipboard.subprocess.run",
            lambda command, **kwargs: calls.append((command, kwargs)),
        )

        CommandClipboard(commands=[["fakecopy", "--in"]], timeout=3.0).write("hello")

        assert len(calls) == 1
        command, kwargs = calls[0]
        assert command == ["fakecopy", "--in"]
        assert kwargs["input"] == "hello".encode("utf-16" if sys.platform == "win32" else "utf-8")
        assert kwargs["check"] is True
        assert kwargs["timeout"] == 3.0

    def test_skips_missing_commands(self, monkeypatch):
        """Test that commands not on PATH are skipped."""
        calls = []
        monkeypatch.setattr(
            "copypage.clipboard.shutil.which",
            lambda name: "/usr/bin/second" if name == "second" else None,
        )
        monkeypatch.setattr(
            "copypage.clipboard.subprocess.run",
            lambda command, **kwargs: calls.append(command),
        )

        CommandClipboard(commands=[["first"], ["second"]]).write("text")

        assert calls == [["second"]]

    def test_tries_next_command_on_failure(self, monkeypatch):
        """Test fallthrough when a command exits with an error."""
        calls = []

        def fake_run(command, **kwargs):
            calls.append(command[0])
            if command[0] == "first":
                raise subprocess.CalledProcessError(1, command)

        monkeypatch.setattr("copypage.clipboard.shutil.which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr("copypage.clipboard.subprocess.run", fake_run)

        CommandClipboard(commands=[["first"], ["second"]]).write("text")

        assert calls == ["first", "second"]

    def test_no_command_installed(self, monkeypatch):
        """Test the error when nothing is installed."""
        monkeypatch.setattr("copypage.clipboard.shutil.which", lambda name: None)

        with pytest.raises(ClipboardUnavailableError, match="No clipboard command installed"):
            CommandClipboard(commands=[["first"]]).write("text")

    def test_all_commands_fail(self, monkeypatch):
        """Test the error when every command fails."""

        def fake_run(command, **kwargs):
            raise subprocess.TimeoutExpired(command, 1.0)

        monkeypatch.setattr("copypage.clipboard.shutil.which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr("copypage.clipboard.subprocess.run", fake_run)

        with pytest.raises(ClipboardUnavailableError, match="first, second"):
            CommandClipboard(commands=[["first"], ["second"]]).write("text")


class TestTkClipboard:
    """Tests for the Tk fallback."""

    def test_missing_tkinter(self, monkeypatch):
        """Test that a missing tkinter reports the backend as unavailable."""
        monkeypatch.setitem(sys.modules, "tkinter", None)

        with pytest.raises(ClipboardUnavailableError, match="tkinter"):
            TkClipboard().write("text")


class TestClipboard:
    """Tests for the backend chain."""

    def test_first_backend_wins(self, recording_backend):
        """Test that the first working backend receives the text."""
        second = type(recording_backend)(name="second")

        assert Clipboard([recording_backend, second]).write("text") is True
        assert recording_backend.texts == ["text"]
        assert second.texts == []

    def test_falls_back(self, failing_backend, recording_backend):
        """Test fallback to the next backend."""
        assert Clipboard([failing_backend, recording_backend]).write("text") is True
        assert recording_backend.texts == ["text"]

    def test_all_fail(self, failing_backend, caplog):
        """Test that failure is reported as False and logged."""
        with caplog.at_level(logging.WARNING, logger="copypage.clipboard"):
            assert Clipboard([failing_backend]).write("text") is False

        assert "Could not copy to clipboard" in caplog.text

    def test_no_backends(self):
        """Test an empty chain."""
        assert Clipboard([]).write("text") is False

    def test_from_config(self):
        """Test the default backend chain."""
        clipboard = Clipboard.from_config(ClipboardConfig())

        assert [backend.name for backend in clipboard.backends] == ["command", "tk"]

    def test_from_config_without_fallback(self):
        """Test disabling the Tk fallback."""
        clipboard = Clipboard.from_config(ClipboardConfig(fallback=False))

        assert [backend.name for backend in clipboard.backends] == ["command"]
