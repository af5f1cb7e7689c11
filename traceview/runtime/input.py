"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens
(``UP``, ``PAGE_DOWN``, ``ENTER``, ``ESC``, or the typed character).
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25

_SINGLE_BYTE_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS: dict[bytes, str] = {
    b"1": "HOME",
    b"7": "HOME",
    b"4": "END",
    b"8": "END",
    b"3": "DELETE",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
}


def _utf8_sequence_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


class KeyReader:
    """Decode key tokens from one input descriptor.

    Bytes read ahead while disambiguating a lone ``ESC`` are kept per reader,
    so several readers never share pending input.
    """

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._pending: list[bytes] = []

    def _read_ready_byte(self, timeout_ms: int) -> bytes | None:
        if self._pending:
            return self._pending.pop(0)
        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
        ch = os.read(self.fd, 1)
        if not ch:
            return None
        return ch

    def read_key(self, timeout_ms: int | None = None) -> str:
        """Return the next key token, or ``""`` on timeout/EOF."""
        if self._pending:
            ch = self._pending.pop(0)
        else:
            if timeout_ms is not None:
                ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
                if not ready:
                    return ""
            ch = os.read(self.fd, 1)
            if not ch:
                return ""

        named = _SINGLE_BYTE_KEYS.get(ch)
        if named is not None:
            return named
        if ch != b"\x1b":
            return self._decode_text(ch)
        return self._decode_escape()

    def _decode_text(self, lead: bytes) -> str:
        raw = lead
        for _ in range(_utf8_sequence_length(lead[0]) - 1):
            nxt = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if nxt is None:
                break
            raw += nxt
        return raw.decode("utf-8", errors="replace")

    def _decode_escape(self) -> str:
        seq = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return "ESC"
        if seq == b"O":
            # SS3 form used by some terminals for Home/End and arrows.
            final = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if final is None:
                return "ESC"
            return _CSI_FINAL_KEYS.get(final, "ESC")
        if seq != b"[":
            self._pending.append(seq)
            return "ESC"

        params = b""
        while True:
            part = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                return "ESC"
            if part in _CSI_FINAL_KEYS:
                return _CSI_FINAL_KEYS[part]
            if part == b"~":
                # Modifiers arrive as ``5;2~``; only the key number matters.
                return _CSI_TILDE_KEYS.get(params.split(b";")[0], "ESC")
            if b"@" <= part <= b"~":
                return "ESC"
            params += part
            if len(params) > 16:
                return "ESC"
