"""Signing with one hypertree layer: a WOTS signature plus its Merkle path."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from .address import Address, AddressType
from .utils import treehash_x1
from .wots import NO_SIGN_LEAF, LeafInfo, chain_lengths, wots_gen_leaf

if TYPE_CHECKING:
    from .hashing import SpxContext


class MerkleSignature(NamedTuple):
    sig: bytes
    root: bytes


def merkle_sign(
    ctx: SpxContext,
    root: bytes,
    wots_addr: Address,
    tree_addr: Address,
    idx_leaf: int,
) -> MerkleSignature:
    """Sign `root` with the WOTS key at `idx_leaf` of the subtree.

    Returns the WOTS signature followed by the authentication path, and the
    root of this subtree. `tree_addr` gets its type set to HASHTREE.
    """
    p = ctx.params
    if len(root) != p.n:
        raise ValueError(f"root must be {p.n} bytes, got {len(root)}")

    info = LeafInfo(
        wots_steps=chain_lengths(bytes(root), p),
        wots_sign_leaf=idx_leaf,
    )
    tree_addr.set_type(AddressType.HASHTREE)
    info.pk_addr.set_type(AddressType.WOTSPK)
    info.leaf_addr.copy_subtree_from(wots_addr)
    info.pk_addr.copy_subtree_from(wots_addr)

    new_root, auth_path = treehash_x1(
        ctx,
        idx_leaf,
        0,
        p.tree_height,
        lambda c, idx: wots_gen_leaf(c, idx, info),
        tree_addr,
    )
    wots_sig = info.wots_sig if info.wots_sig is not None else bytes(p.wots_bytes)
    return MerkleSignature(wots_sig + auth_path, new_root)


def merkle_gen_root(ctx: SpxContext) -> bytes:
    """Compute the root node of the top-most subtree."""
    p = ctx.params
    top_tree_addr = Address()
    wots_addr = Address()
    top_tree_addr.set_layer(p.d - 1)
    wots_addr.set_layer(p.d - 1)
    return merkle_sign(
        ctx, bytes(p.n), wots_addr, top_tree_addr, NO_SIGN_LEAF
    ).root