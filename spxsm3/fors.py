"""FORS few-time signatures over the message digest."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from .address import Address, AddressType
from .params import ParameterSet
from .utils import compute_root, treehash_x1

if TYPE_CHECKING:
    from .hashing import SpxContext


class ForsSignature(NamedTuple):
    sig: bytes
    pk: bytes


def message_to_indices(m: bytes, params: ParameterSet) -> list[int]:
    """Read m as fors_trees little-endian bit fields of fors_height bits each."""
    needed = params.fors_msg_bytes
    if len(m) < needed:
        raise ValueError(f"FORS message must hold at least {needed} bytes, got {len(m)}")
    bits = int.from_bytes(bytes(m[:needed]), "little")
    height = params.fors_height
    mask = (1 << height) - 1
    return [(bits >> (i * height)) & mask for i in range(params.fors_trees)]


def fors_sign(ctx: SpxContext, m: bytes, fors_addr: Address) -> ForsSignature:
    """Sign a FORS message digest; return the signature and the FORS public key."""
    p = ctx.params
    indices = message_to_indices(m, p)

    tree_addr = Address()
    tree_addr.copy_keypair_from(fors_addr)
    leaf_addr = Address()
    leaf_addr.copy_keypair_from(fors_addr)
    pk_addr = Address()
    pk_addr.copy_keypair_from(fors_addr)
    pk_addr.set_type(AddressType.FORSPK)

    def gen_leaf(c: SpxContext, addr_idx: int) -> bytes:
        leaf_addr.set_tree_index(addr_idx)
        leaf_addr.set_type(AddressType.FORSPRF)
        sk = c.prf_addr(leaf_addr)
        leaf_addr.set_type(AddressType.FORSTREE)
        return c.thash(sk, leaf_addr)

    parts: list[bytes] = []
    roots: list[bytes] = []
    for i, index in enumerate(indices):
        idx_offset = i << p.fors_height

        tree_addr.set_tree_height(0)
        tree_addr.set_tree_index(index + idx_offset)
        tree_addr.set_type(AddressType.FORSPRF)
        parts.append(ctx.prf_addr(tree_addr))
        tree_addr.set_type(AddressType.FORSTREE)

        root, auth_path = treehash_x1(
            ctx, index, idx_offset, p.fors_height, gen_leaf, tree_addr
        )
        parts.append(auth_path)
        roots.append(root)

    pk = ctx.thash(b"".join(roots), pk_addr)
    return ForsSignature(b"".join(parts), pk)


def fors_pk_from_sig(
    ctx: SpxContext, sig: bytes, m: bytes, fors_addr: Address
) -> bytes:
    """Derive the FORS public key from a signature and message digest."""
    p = ctx.params
    n = p.n
    if len(sig) != p.fors_bytes:
        raise ValueError(f"FORS signature must be {p.fors_bytes} bytes, got {len(sig)}")
    indices = message_to_indices(m, p)

    tree_addr = Address()
    tree_addr.copy_keypair_from(fors_addr)
    tree_addr.set_type(AddressType.FORSTREE)
    pk_addr = Address()
    pk_addr.copy_keypair_from(fors_addr)
    pk_addr.set_type(AddressType.FORSPK)

    sig = bytes(sig)
    chunk = (p.fors_height + 1) * n
    roots: list[bytes] = []
    for i, index in enumerate(indices):
        idx_offset = i << p.fors_height
        part = sig[i * chunk:(i + 1) * chunk]

        tree_addr.set_tree_height(0)
        tree_addr.set_tree_index(index + idx_offset)
        leaf = ctx.thash(part[:n], tree_addr)

        roots.append(
            compute_root(
                ctx, leaf, index, idx_offset, part[n:], p.fors_height, tree_addr
            )
        )

    return ctx.thash(b"".join(roots), pk_addr)