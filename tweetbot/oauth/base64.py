"""
Standard padded base64 encoding used for nonces and HMAC digests.
"""

from __future__ import annotations

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"


def encode(data: bytes) -> str:
    """Encode ``data`` as padded base64 (RFC 4648 alphabet)."""

    buffer = bytearray(data)
    padding = 0
    while len(buffer) % 3 != 0:
        buffer.append(0x00)
        padding += 1

    symbols: list[str] = []
    for offset in range(0, len(buffer), 3):
        group = (buffer[offset] << 16) | (buffer[offset + 1] << 8) | buffer[offset + 2]
        symbols.append(ALPHABET[(group >> 18) & 0x3F])
        symbols.append(ALPHABET[(group >> 12) & 0x3F])
        symbols.append(ALPHABET[(group >> 6) & 0x3F])
        symbols.append(ALPHABET[group & 0x3F])

    if padding:
        del symbols[-padding:]
    return "".join(symbols) + "=" * padding
