"""Random byte sources: the operating system, and the AES-256 CTR DRBG and
seed expander used to produce reproducible known-answer tests."""

from __future__ import annotations

import os

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

SEED_MATERIAL_BYTES = 48
_AES_BLOCK = 16
_MAX_EXPANDER_LEN = 0x100000000


def _aes256_ecb(key: bytes, block: bytes) -> bytes:
    encryptor = Cipher(algorithms.AES(key), modes.ECB()).encryptor()
    return encryptor.update(block) + encryptor.finalize()


def _increment(counter: bytearray, start: int = 0) -> None:
    """Big-endian increment of counter[start:], wrapping around."""
    for i in reversed(range(start, len(counter))):
        if counter[i] == 0xFF:
            counter[i] = 0
        else:
            counter[i] += 1
            return


def system_random_bytes(length: int) -> bytes:
    """Return `length` bytes from the operating system's CSPRNG."""
    if length < 0:
        raise ValueError("length must not be negative")
    return os.urandom(length)


class SeedExpander:
    """AES-256 based XOF expanding a 32-byte seed and 8-byte diversifier."""

    def __init__(self, seed: bytes, diversifier: bytes, maxlen: int) -> None:
        if len(seed) != 32:
            raise ValueError("seed must be 32 bytes")
        if len(diversifier) != 8:
            raise ValueError("diversifier must be 8 bytes")
        if not 0 <= maxlen < _MAX_EXPANDER_LEN:
            raise ValueError("maxlen must be below 2**32")
        self.length_remaining = maxlen
        self._key = bytes(seed)
        self._ctr = bytearray(bytes(diversifier) + maxlen.to_bytes(4, "big") + bytes(4))
        self._buffer = bytes(_AES_BLOCK)
        self._pos = _AES_BLOCK

    def read(self, length: int) -> bytes:
        """Return the next `length` bytes of the expanded stream."""
        if length < 0:
            raise ValueError("length must not be negative")
        if length >= self.length_remaining:
            raise ValueError("requested length exceeds what remains under maxlen")
        self.length_remaining -= length

        out = bytearray()
        while True:
            available = _AES_BLOCK - self._pos
            if length <= available:
                out += self._buffer[self._pos:self._pos + length]
                self._pos += length
                return bytes(out)
            out += self._buffer[self._pos:]
            length -= available
            self._buffer = _aes256_ecb(self._key, bytes(self._ctr))
            self._pos = 0
            _increment(self._ctr, 12)


class CtrDrbg:
    """AES-256 CTR DRBG without derivation function, seeded with 48 bytes."""

    def __init__(
        self,
        entropy_input: bytes,
        personalization_string: bytes | None = None,
    ) -> None:
        if len(entropy_input) != SEED_MATERIAL_BYTES:
            raise ValueError(f"entropy_input must be {SEED_MATERIAL_BYTES} bytes")
        seed_material = bytes(entropy_input)
        if personalization_string is not None:
            if len(personalization_string) != SEED_MATERIAL_BYTES:
                raise ValueError(
                    f"personalization_string must be {SEED_MATERIAL_BYTES} bytes"
                )
            seed_material = bytes(
                a ^ b for a, b in zip(seed_material, personalization_string)
            )
        self._key = bytes(32)
        self._v = bytearray(_AES_BLOCK)
        self._update(seed_material)
        self.reseed_counter = 1

    def _update(self, provided_data: bytes | None) -> None:
        blocks = []
        for _ in range(3):
            _increment(self._v)
            blocks.append(_aes256_ecb(self._key, bytes(self._v)))
        temp = b"".join(blocks)
        if provided_data is not None:
            temp = bytes(a ^ b for a, b in zip(temp, provided_data))
        self._key = temp[:32]
        self._v = bytearray(temp[32:])

    def random_bytes(self, length: int) -> bytes:
        """Generate `length` pseudorandom bytes and advance the state."""
        if length < 0:
            raise ValueError("length must not be negative")
        blocks = []
        for _ in range(-(-length // _AES_BLOCK)):
            _increment(self._v)
            blocks.append(_aes256_ecb(self._key, bytes(self._v)))
        self._update(None)
        self.reseed_counter += 1
        return b"".join(blocks)[:length]