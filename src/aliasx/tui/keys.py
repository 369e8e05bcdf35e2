"""Key events decoded from raw terminal input."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class KeyKind(str, Enum):
    CHAR = "char"
    BACKSPACE = "backspace"
    UP = "up"
    DOWN = "down"
    TAB = "tab"
    BACKTAB = "backtab"
    ENTER = "enter"
    ESCAPE = "escape"
    OTHER = "other"


@dataclass(frozen=True)
class Key:
    kind: KeyKind
    char: str = ""

    @classmethod
    def of(cls, char: str) -> Key:
        return cls(KeyKind.CHAR, char)


UP = Key(KeyKind.UP)
DOWN = Key(KeyKind.DOWN)
TAB = Key(KeyKind.TAB)
BACKTAB = Key(KeyKind.BACKTAB)
ENTER = Key(KeyKind.ENTER)
ESCAPE = Key(KeyKind.ESCAPE)
BACKSPACE = Key(KeyKind.BACKSPACE)
OTHER = Key(KeyKind.OTHER)

_ESCAPE_SEQUENCES: dict[str, Key] = {
    "\x1b[A": UP,
    "\x1bOA": UP,
    "\x1b[B": DOWN,
    "\x1bOB": DOWN,
    "\x1b[Z": BACKTAB,
}

_CONTROL_KEYS: dict[str, Key] = {
    "\r": ENTER,
    "\n": ENTER,
    "\t": TAB,
    "\x7f": BACKSPACE,
    "\x08": BACKSPACE,
    "\x03": ESCAPE,  # Ctrl-C
}


def _sequence_length(buf: str) -> int:
    """Length of the escape sequence at the start of *buf* (which starts with ESC)."""
    if len(buf) == 1:
        return 1
    if buf[1] == "O" and len(buf) >= 3:
        return 3
    if buf[1] != "[":
        return 1
    # CSI: parameters and intermediates until a final byte in @..~
    for i in range(2, len(buf)):
        if "\x40" <= buf[i] <= "\x7e":
            return i + 1
    return len(buf)


def split_incomplete(buf: str) -> tuple[str, str]:
    """Split *buf* into decodable input and a trailing escape sequence still missing bytes.

    ``"a\\x1b"`` gives ``("a", "\\x1b")``; a lone ESC is ambiguous until the
    next read shows whether a sequence follows.
    """
    start = buf.rfind("\x1b")
    if start == -1:
        return buf, ""
    tail = buf[start:]
    if len(tail) == 1:
        return buf[:start], tail
    if tail[1] == "O" and len(tail) == 2:
        return buf[:start], tail
    if tail[1] == "[" and not any("\x40" <= c <= "\x7e" for c in tail[2:]):
        return buf[:start], tail
    return buf, ""


def decode_keys(buf: str) -> list[Key]:
    """Split a chunk of raw terminal input into key events."""
    keys: list[Key] = []
    i = 0
    while i < len(buf):
        ch = buf[i]
        if ch == "\x1b":
            length = _sequence_length(buf[i:])
            seq = buf[i:i + length]
            if length == 1:
                keys.append(ESCAPE)
            else:
                keys.append(_ESCAPE_SEQUENCES.get(seq, OTHER))
            i += length
            continue
        if ch in _CONTROL_KEYS:
            keys.append(_CONTROL_KEYS[ch])
        elif ch.isprintable():
            keys.append(Key.of(ch))
        else:
            keys.append(OTHER)
        i += 1
    return keys
