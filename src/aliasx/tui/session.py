"""Terminal session for the interactive pickers (POSIX terminals).

Entering the session puts stdin into cbreak mode and opens Rich's alternate
screen; leaving restores both, on every exit path::

    with TerminalSession() as session:
        session.draw(renderable)
        key = session.read_key()
"""

from __future__ import annotations

import codecs
import os
import select
import sys
import termios
import tty
from collections import deque
from typing import IO, Any

from rich.console import Console, RenderableType
from rich.live import Live
from rich.text import Text

from aliasx import log
from aliasx.errors import NoTerminal
from aliasx.tui.keys import ESCAPE, Key, decode_keys, split_incomplete


# Seconds to wait for the rest of an escape sequence after a lone ESC.
ESCAPE_TIMEOUT = 0.05


class TerminalSession:
    def __init__(self, console: Console | None = None, stdin: IO[Any] | None = None) -> None:
        self.console = console or log.console
        self._fd = (stdin or sys.stdin).fileno()
        self._saved_attrs: list[Any] | None = None
        self._live: Live | None = None
        self._pending: deque[Key] = deque()
        self._partial = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="ignore")

    def __enter__(self) -> TerminalSession:
        try:
            self._saved_attrs = termios.tcgetattr(self._fd)
        except termios.error as e:
            raise NoTerminal() from e
        tty.setcbreak(self._fd)
        try:
            self._live = Live(
                Text(""),
                console=self.console,
                screen=True,
                auto_refresh=False,
                transient=True,
            )
            self._live.start()
        except BaseException:
            self._restore_terminal()
            raise
        return self

    def __exit__(self, *exc_info: object) -> None:
        try:
            if self._live is not None:
                self._live.stop()
        finally:
            self._live = None
            self._restore_terminal()

    def _restore_terminal(self) -> None:
        if self._saved_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None

    @property
    def height(self) -> int:
        return self.console.size.height

    def draw(self, renderable: RenderableType) -> None:
        if self._live is None:
            raise RuntimeError("terminal session is not active")
        self._live.update(renderable, refresh=True)

    def _input_ready(self, timeout: float) -> bool:
        ready, _, _ = select.select([self._fd], [], [], timeout)
        return bool(ready)

    def read_key(self) -> Key:
        """Block until the next key event."""
        while not self._pending:
            if self._partial and not self._input_ready(ESCAPE_TIMEOUT):
                # Nothing followed: a bare Escape press.
                self._pending.extend(decode_keys(self._partial))
                self._partial = ""
                break
            try:
                data = os.read(self._fd, 64)
            except KeyboardInterrupt:
                return ESCAPE
            if not data:
                return ESCAPE
            text, self._partial = split_incomplete(self._partial + self._decoder.decode(data))
            self._pending.extend(decode_keys(text))
        return self._pending.popleft()
