"""Keyed hash context: PRF, tweakable hash and message hashing with SM3."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from .address import Address
from .params import ParameterSet
from .sm3 import BLOCK_BYTES, SM3, mgf1, sm3

SM3_ADDR_BYTES = 22


class ThashVariant(Enum):
    """Construction of the tweakable hash function."""

    SIMPLE = "simple"
    ROBUST = "robust"


class MessageHash(NamedTuple):
    digest: bytes
    tree: int
    leaf_idx: int


class SpxContext:
    """Seeds of a key together with the SM3 state precomputed over PK.seed."""

    def __init__(
        self,
        params: ParameterSet,
        pub_seed: bytes,
        sk_seed: bytes | None = None,
        variant: ThashVariant = ThashVariant.SIMPLE,
    ) -> None:
        if len(pub_seed) != params.n:
            raise ValueError(f"pub_seed must be {params.n} bytes")
        if sk_seed is not None and len(sk_seed) != params.n:
            raise ValueError(f"sk_seed must be {params.n} bytes")
        self.params = params
        self.pub_seed = bytes(pub_seed)
        self.sk_seed = None if sk_seed is None else bytes(sk_seed)
        self.variant = ThashVariant(variant)
        block = self.pub_seed + bytes(BLOCK_BYTES - params.n)
        self._seeded = SM3(block)

    def prf_addr(self, addr: Address) -> bytes:
        """PRF(PK.seed, SK.seed, ADDR)."""
        if self.sk_seed is None:
            raise ValueError("context holds no secret seed")
        h = self._seeded.copy()
        h.update(bytes(addr)[:SM3_ADDR_BYTES] + self.sk_seed)
        return h.digest()[: self.params.n]

    def thash(self, data: bytes, addr: Address) -> bytes:
        """Tweakable hash of a whole number of n-byte blocks."""
        n = self.params.n
        if len(data) % n != 0:
            raise ValueError(f"input length must be a multiple of {n}")
        addr_bytes = bytes(addr)[:SM3_ADDR_BYTES]
        data = bytes(data)
        if self.variant is ThashVariant.ROBUST:
            bitmask = mgf1(self.pub_seed + addr_bytes, len(data))
            data = bytes(x ^ m for x, m in zip(data, bitmask))
        h = self._seeded.copy()
        h.update(addr_bytes + data)
        return h.digest()[:n]

    def gen_message_random(self, sk_prf: bytes, optrand: bytes, message: bytes) -> bytes:
        """R = HMAC-SM3(SK.prf, optrand || M), truncated to n bytes."""
        n = self.params.n
        if len(sk_prf) != n or len(optrand) != n:
            raise ValueError(f"sk_prf and optrand must be {n} bytes")
        key = bytes(sk_prf) + bytes(BLOCK_BYTES - n)
        inner = SM3(bytes(k ^ 0x36 for k in key))
        inner.update(bytes(optrand))
        inner.update(bytes(message))
        outer = SM3(bytes(k ^ 0x5C for k in key))
        outer.update(inner.digest())
        return outer.digest()[:n]

    def hash_message(self, r: bytes, pk: bytes, message: bytes) -> MessageHash:
        """Derive the FORS message digest, tree index and leaf index."""
        p = self.params
        if len(r) != p.n:
            raise ValueError(f"R must be {p.n} bytes")
        if len(pk) != p.pk_bytes:
            raise ValueError(f"public key must be {p.pk_bytes} bytes")
        seed = sm3(bytes(r) + bytes(pk) + bytes(message))
        buf = mgf1(bytes(r) + bytes(pk[: p.n]) + seed, p.digest_bytes)

        digest = buf[: p.fors_msg_bytes]
        tree_start = p.fors_msg_bytes
        leaf_start = tree_start + p.tree_bytes
        if p.d == 1:
            tree = 0
        else:
            tree = int.from_bytes(buf[tree_start:leaf_start], "big")
            tree &= (1 << p.tree_bits) - 1
        leaf_idx = int.from_bytes(buf[leaf_start:leaf_start + p.leaf_bytes], "big")
        leaf_idx &= (1 << p.leaf_bits) - 1
        return MessageHash(digest, tree, leaf_idx)