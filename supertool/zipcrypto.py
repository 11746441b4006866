"""Traditional PKWARE ("ZipCrypto") stream cipher used by encrypted zip entries."""

from __future__ import annotations

import random

_MASK32 = 0xFFFFFFFF
_INITIAL_KEYS = (305419896, 591751049, 878082192)
RAND_HEAD_LEN = 12


def _build_crc_table() -> tuple[int, ...]:
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            c = (c >> 1) ^ 0xEDB88320 if c & 1 else c >> 1
        table.append(c)
    return tuple(table)


_CRC_TABLE = _build_crc_table()


def _crc32_byte(crc: int, byte: int) -> int:
    return _CRC_TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)


def _as_bytes(value: str | bytes) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)


class ZipCrypto:
    """Key state of the traditional zip cipher, initialised from a password."""

    def __init__(self, password: str | bytes) -> None:
        self._keys = list(_INITIAL_KEYS)
        for byte in _as_bytes(password):
            self.update_keys(byte)

    @property
    def keys(self) -> tuple[int, int, int]:
        return tuple(self._keys)  # type: ignore[return-value]

    def stream_byte(self) -> int:
        """Return the next byte of the pseudo-random key stream."""
        temp = (self._keys[2] & 0xFFFF) | 2
        return ((temp * (temp ^ 1)) >> 8) & 0xFF

    def update_keys(self, c: int) -> int:
        """Mix one plain-text byte into the keys and return it."""
        k0, k1, k2 = self._keys
        k0 = _crc32_byte(k0, c)
        k1 = (k1 + (k0 & 0xFF)) & _MASK32
        k1 = (k1 * 134775813 + 1) & _MASK32
        k2 = _crc32_byte(k2, k1 >> 24)
        self._keys = [k0, k1, k2]
        return c

    def encrypt(self, data: bytes) -> bytes:
        out = bytearray()
        for byte in data:
            stream = self.stream_byte()
            self.update_keys(byte)
            out.append(stream ^ byte)
        return bytes(out)

    def decrypt(self, data: bytes) -> bytes:
        out = bytearray()
        for byte in data:
            plain = byte ^ self.stream_byte()
            self.update_keys(plain)
            out.append(plain)
        return bytes(out)


def make_header(password: str | bytes, crc: int, seed: int | None = None) -> bytes:
    """Build the 12-byte encryption header whose last two bytes carry the CRC's high word."""
    rng = random.Random(seed)
    noise = bytes(rng.randrange(256) for _ in range(RAND_HEAD_LEN - 2))
    scrambled = ZipCrypto(password).encrypt(noise)
    check = bytes([(crc >> 16) & 0xFF, (crc >> 24) & 0xFF])
    return ZipCrypto(password).encrypt(scrambled + check)