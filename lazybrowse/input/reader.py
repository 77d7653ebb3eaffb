"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Printable characters come back as themselves; everything else is a named
token such as ``UP``, ``PGDN`` or ``CTRL_L``. An empty string means the
read timed out.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CSI_FINAL_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS = {
    "1": "HOME",
    "3": "DELETE",
    "4": "END",
    "5": "PGUP",
    "6": "PGDN",
    "7": "HOME",
    "8": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _decode_utf8_tail(fd: int, first: bytes) -> str:
    """Complete a multi-byte UTF-8 character that started with ``first``."""
    lead = first[0]
    if lead >= 0xF0:
        remaining = 3
    elif lead >= 0xE0:
        remaining = 2
    elif lead >= 0xC0:
        remaining = 1
    else:
        remaining = 0
    data = first
    for _ in range(remaining):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def _read_csi(fd: int) -> str:
    params = b""
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return "ESC"
        if part in _CSI_FINAL_KEYS:
            return _CSI_FINAL_KEYS[part]
        if part == b"~":
            key = params.decode("ascii", errors="replace").split(";", 1)[0]
            return _CSI_TILDE_KEYS.get(key, "ESC")
        params += part
        if len(params) > 16:
            return "ESC"


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``.

    With ``timeout_ms`` set, returns ``""`` when nothing arrives in time.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in {b"\x08", b"\x7f"}:
        return "BACKSPACE"
    if ch == b"\t":
        return "TAB"
    if ch == b"\r":
        return "ENTER_CR"
    if ch == b"\n":
        return "ENTER_LF"
    if b"\x01" <= ch <= b"\x1a":
        return "CTRL_" + chr(ord(ch) + 0x40)

    if ch != b"\x1b":
        if ch[0] >= 0x80:
            return _decode_utf8_tail(fd, ch)
        return ch.decode("utf-8", errors="replace")

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return "ESC"
        return _CSI_FINAL_KEYS.get(final, "ESC")
    if seq in {b"<", b">"}:
        return "ALT_" + seq.decode("ascii")
    _PENDING_BYTES.append(seq)
    return "ESC"


__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "read_key",
]
