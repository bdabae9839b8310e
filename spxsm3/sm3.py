"""The SM3 hash function and the MGF1 mask generator built on it."""

from __future__ import annotations

import struct

BLOCK_BYTES = 64
OUTPUT_BYTES = 32

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF

_IV = (
    0x7380166F,
    0x4914B2B9,
    0x172442D7,
    0xDA8A0600,
    0xA96F30BC,
    0x163138AA,
    0xE38DEE4D,
    0xB0FB0E4E,
)


def _rotl(x: int, n: int) -> int:
    n %= 32
    return ((x << n) | (x >> (32 - n))) & _MASK32


def _p0(x: int) -> int:
    return x ^ _rotl(x, 9) ^ _rotl(x, 17)


def _p1(x: int) -> int:
    return x ^ _rotl(x, 15) ^ _rotl(x, 23)


_T_ROT = tuple(_rotl(0x79CC4519 if j < 16 else 0x7A879D8A, j) for j in range(64))


def _compress(state: list[int], block: bytes) -> list[int]:
    """Run the SM3 compression function over one 64-byte block."""
    w = list(struct.unpack(">16I", block))
    for i in range(16, 68):
        w.append(
            _p1(w[i - 16] ^ w[i - 9] ^ _rotl(w[i - 3], 15))
            ^ _rotl(w[i - 13], 7)
            ^ w[i - 6]
        )
    w_prime = [x ^ y for x, y in zip(w, w[4:68])]

    a, b, c, d, e, f, g, h = state
    for j in range(64):
        a12 = _rotl(a, 12)
        ss1 = _rotl((a12 + e + _T_ROT[j]) & _MASK32, 7)
        ss2 = ss1 ^ a12
        if j < 16:
            ff = a ^ b ^ c
            gg = e ^ f ^ g
        else:
            ff = (a & b) | (a & c) | (b & c)
            gg = (e & f) | (~e & g)
        tt1 = (ff + d + ss2 + w_prime[j]) & _MASK32
        tt2 = (gg + h + ss1 + w[j]) & _MASK32
        d = c
        c = _rotl(b, 9)
        b = a
        a = tt1
        h = g
        g = _rotl(f, 19)
        f = e
        e = _p0(tt2)

    return [x ^ y for x, y in zip(state, (a, b, c, d, e, f, g, h))]


class SM3:
    """Incremental SM3 hash object with a hashlib-like interface."""

    name = "sm3"
    digest_size = OUTPUT_BYTES
    block_size = BLOCK_BYTES

    def __init__(self, data: bytes | bytearray | memoryview = b"") -> None:
        self._state = list(_IV)
        self._buffer = bytearray()
        self._length = 0
        if data:
            self.update(data)

    def update(self, data: bytes | bytearray | memoryview) -> None:
        """Feed more bytes into the hash."""
        chunk = memoryview(data).cast("B")
        self._length += len(chunk)
        self._buffer += chunk
        full = len(self._buffer) - len(self._buffer) % BLOCK_BYTES
        for start in range(0, full, BLOCK_BYTES):
            self._state = _compress(
                self._state, bytes(self._buffer[start:start + BLOCK_BYTES])
            )
        del self._buffer[:full]

    def digest(self) -> bytes:
        """Return the 32-byte digest of everything fed so far."""
        state = list(self._state)
        tail = bytes(self._buffer) + b"\x80"
        tail += b"\x00" * ((56 - len(tail)) % BLOCK_BYTES)
        tail += ((self._length * 8) & _MASK64).to_bytes(8, "big")
        for start in range(0, len(tail), BLOCK_BYTES):
            state = _compress(state, tail[start:start + BLOCK_BYTES])
        return struct.pack(">8I", *state)

    def hexdigest(self) -> str:
        return self.digest().hex()

    def copy(self) -> SM3:
        """Return an independent hash object with the same state."""
        clone = SM3()
        clone._state = list(self._state)
        clone._buffer = bytearray(self._buffer)
        clone._length = self._length
        return clone


def sm3(data: bytes | bytearray | memoryview) -> bytes:
    """One-shot SM3 digest."""
    return SM3(data).digest()


def mgf1(seed: bytes | bytearray | memoryview, outlen: int) -> bytes:
    """MGF1 over SM3: SM3(seed || counter) blocks, truncated to outlen bytes."""
    if outlen < 0:
        raise ValueError("outlen must not be negative")
    seed = bytes(seed)
    blocks = -(-outlen // OUTPUT_BYTES)
    out = b"".join(sm3(seed + i.to_bytes(4, "big")) for i in range(blocks))
    return out[:outlen]