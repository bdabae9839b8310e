"""WOTS+ chains, checksums and leaf generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from .address import Address, AddressType
from .params import ParameterSet
from .utils import ull_to_bytes

if TYPE_CHECKING:
    from .hashing import SpxContext

_MASK32 = 0xFFFFFFFF
NO_SIGN_LEAF = _MASK32


@dataclass
class LeafInfo:
    """State for generating WOTS leaves, and optionally one signature.

    When the generated leaf index equals `wots_sign_leaf`, the chain values
    at `wots_steps` are stored in `wots_sig`.
    """

    leaf_addr: Address = field(default_factory=Address)
    pk_addr: Address = field(default_factory=Address)
    wots_steps: Sequence[int] = field(default_factory=list)
    wots_sign_leaf: int = NO_SIGN_LEAF
    wots_sig: bytes | None = None


def base_w(data: bytes, out_len: int, params: ParameterSet) -> list[int]:
    """Split bytes into base-w digits, most significant first."""
    logw = params.wots_logw
    needed = (out_len * logw + 7) // 8
    if len(data) < needed:
        raise ValueError(f"need {needed} bytes for {out_len} digits, got {len(data)}")
    mask = params.wots_w - 1
    digits = []
    source = iter(data)
    total = 0
    bits = 0
    for _ in range(out_len):
        if bits == 0:
            total = next(source)
            bits = 8
        bits -= logw
        digits.append((total >> bits) & mask)
    return digits


def _checksum(msg_base_w: Sequence[int], params: ParameterSet) -> list[int]:
    w = params.wots_w
    csum = sum(w - 1 - digit for digit in msg_base_w[: params.wots_len1])
    csum_bits = params.wots_len2 * params.wots_logw
    csum <<= (8 - csum_bits % 8) % 8
    csum_bytes = ull_to_bytes(csum, (csum_bits + 7) // 8)
    return base_w(csum_bytes, params.wots_len2, params)


def chain_lengths(msg: bytes, params: ParameterSet) -> list[int]:
    """Chain lengths for an n-byte message: its base-w digits plus checksum."""
    lengths = base_w(msg, params.wots_len1, params)
    return lengths + _checksum(lengths, params)


def _gen_chain(
    ctx: SpxContext, value: bytes, start: int, steps: int, addr: Address
) -> bytes:
    for i in range(start, min(start + steps, ctx.params.wots_w)):
        addr.set_hash(i)
        value = ctx.thash(value, addr)
    return value


def wots_pk_from_sig(
    ctx: SpxContext, sig: bytes, msg: bytes, addr: Address
) -> bytes:
    """Recompute the WOTS public key from a signature over an n-byte message."""
    p = ctx.params
    n = p.n
    if len(sig) != p.wots_bytes:
        raise ValueError(f"WOTS signature must be {p.wots_bytes} bytes")
    lengths = chain_lengths(msg, p)
    parts = []
    for i, length in enumerate(lengths):
        addr.set_chain(i)
        parts.append(
            _gen_chain(ctx, bytes(sig[i * n:(i + 1) * n]), length, p.wots_w - 1 - length, addr)
        )
    return b"".join(parts)


def wots_gen_leaf(ctx: SpxContext, leaf_idx: int, info: LeafInfo) -> bytes:
    """Generate the WOTS leaf at `leaf_idx`, signing too if it is the chosen leaf."""
    p = ctx.params
    signing = (leaf_idx & _MASK32) == (info.wots_sign_leaf & _MASK32)
    if signing and len(info.wots_steps) < p.wots_len:
        raise ValueError(f"wots_steps must hold {p.wots_len} chain lengths")

    leaf_addr = info.leaf_addr
    pk_addr = info.pk_addr
    leaf_addr.set_keypair(leaf_idx)
    pk_addr.set_keypair(leaf_idx)

    pk_parts = []
    sig_parts = []
    top = p.wots_w - 1
    for i in range(p.wots_len):
        target = info.wots_steps[i] if signing else None
        leaf_addr.set_chain(i)
        leaf_addr.set_hash(0)
        leaf_addr.set_type(AddressType.WOTSPRF)
        node = ctx.prf_addr(leaf_addr)
        leaf_addr.set_type(AddressType.WOTS)
        for k in range(p.wots_w):
            if k == target:
                sig_parts.append(node)
            if k == top:
                break
            leaf_addr.set_hash(k)
            node = ctx.thash(node, leaf_addr)
        pk_parts.append(node)

    if signing:
        info.wots_sig = b"".join(sig_parts)
    return ctx.thash(b"".join(pk_parts), pk_addr)