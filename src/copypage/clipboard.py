"""System clipboard access with a legacy fallback."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from typing import Optional, Protocol, Sequence

from .errors import ClipboardUnavailableError
from .models.config import ClipboardConfig

logger = logging.getLogger(__name__)

# Clipboard commands tried in order, per platform
CLIPBOARD_COMMANDS: dict[str, list[list[str]]] = {
    "darwin": [["pbcopy"]],
    "win32": [["clip"]],
    "linux": [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ],
}


class ClipboardBackend(Protocol):
    """A single way of placing text on the clipboard."""

    name: str

    def write(self, text: str) -> None:
        """
        Place ``text`` on the clipboard.

        Raises:
            ClipboardUnavailableError: If this backend cannot be used
        """
        ...


def default_commands(platform: Optional[str] = None) -> list[list[str]]:
    platform = platform or sys.platform
    if platform.startswith("linux") or platform.startswith("freebsd"):
        platform = "linux"
    return [list(command) for command in CLIPBOARD_COMMANDS.get(platform, [])]


class CommandClipboard:
    """
    Writes to the clipboard through the platform's clipboard command.

    The first installed command that exits cleanly wins.
    """

    name = "command"

    def __init__(
        self,
        commands: Optional[Sequence[Sequence[str]]] = None,
        timeout: float = 5.0,
    ):
        self._commands = [list(c) for c in commands] if commands is not None else default_commands()
        self._timeout = timeout
        # clip.exe reads UTF-16 from a pipe
        self._encoding = "utf-16" if sys.platform == "win32" else "utf-8"

    def write(self, text: str) -> None:
        tried = []
        for command in self._commands:
            if shutil.which(command[0]) is None:
                continue
            tried.append(command[0])
            try:
                subprocess.run(
                    command,
                    input=text.encode(self._encoding),
                    check=True,
                    capture_output=True,
                    timeout=self._timeout,
                )
                logger.debug(f"Copied {len(text)} chars with {command[0]}")
                return
            except (OSError, subprocess.SubprocessError) as e:
                logger.debug(f"Clipboard command {command[0]} failed: {e}")

        if not tried:
            raise ClipboardUnavailableError("No clipboard command installed")
        raise ClipboardUnavailableError(f"Clipboard commands failed: {', '.join(tried)}")


class TkClipboard:
    """Legacy fallback: a hidden Tk window owns the clipboard selection."""

    name = "tk"

    def write(self, text: str) -> None:
        try:
            import tkinter
        except ImportError as e:
            raise ClipboardUnavailableError("tkinter is not available") from e

        try:
            root = tkinter.Tk()
        except tkinter.TclError as e:
            raise ClipboardUnavailableError(f"Cannot open Tk display: {e}") from e

        try:
            root.withdraw()
            root.clipboard_clear()
            root.clipboard_append(text)
            root.update()
        except tkinter.TclError as e:
            raise ClipboardUnavailableError(f"Tk clipboard write failed: {e}") from e
        finally:
            root.destroy()


class Clipboard:
    """
    Tries clipboard backends in order until one accepts the text.

    Failures never propagate: ``write`` reports success as a boolean.

    Example:
        clipboard = Clipboard.from_config(ClipboardConfig())
        if clipboard.write(markdown):
            print("Copied!")
    """

    def __init__(self, backends: Sequence[ClipboardBackend]):
        self._backends = list(backends)

    @classmethod
    def from_config(cls, config: ClipboardConfig) -> Clipboard:
        backends: list[ClipboardBackend] = [CommandClipboard(timeout=config.timeout)]
        if config.fallback:
            backends.append(TkClipboard())
        return cls(backends)

    @property
    def backends(self) -> list[ClipboardBackend]:
        return list(self._backends)

    def write(self, text: str) -> bool:
        for backend in self._backends:
            try:
                backend.write(text)
                return True
            except ClipboardUnavailableError as e:
                logger.info(f"Clipboard backend {backend.name!r} unavailable: {e}")

        logger.warning("Could not copy to clipboard: no backend available")
        return False
