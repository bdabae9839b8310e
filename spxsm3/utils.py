"""Byte conversions and Merkle tree helpers shared by FORS and the hypertree."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from .address import Address

if TYPE_CHECKING:
    from .hashing import SpxContext

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF

LeafGenerator = Callable[["SpxContext", int, Address], bytes]
LeafGeneratorX1 = Callable[["SpxContext", int], bytes]


def ull_to_bytes(value: int, length: int) -> bytes:
    """Big-endian encoding of the low `length` bytes of an unsigned 64-bit value."""
    if length < 0:
        raise ValueError("length must not be negative")
    value &= _MASK64
    return bytes((value >> (8 * (length - 1 - i))) & 0xFF for i in range(length))


def bytes_to_ull(data: bytes) -> int:
    """Interpret big-endian bytes as an unsigned 64-bit integer."""
    return int.from_bytes(bytes(data), "big") & _MASK64


def compute_root(
    ctx: SpxContext,
    leaf: bytes,
    leaf_idx: int,
    idx_offset: int,
    auth_path: bytes,
    tree_height: int,
    addr: Address,
) -> bytes:
    """Compute a Merkle root from a leaf and its authentication path.

    The address must be complete apart from tree height and tree index,
    which are overwritten while climbing the tree.
    """
    n = ctx.params.n
    if tree_height < 1:
        raise ValueError("tree_height must be at least 1")
    if len(leaf) != n:
        raise ValueError(f"leaf must be {n} bytes")
    if len(auth_path) < tree_height * n:
        raise ValueError(f"auth_path must hold {tree_height} nodes of {n} bytes")

    leaf_idx &= _MASK32
    idx_offset &= _MASK32
    node = bytes(leaf)
    for height in range(tree_height):
        sibling = bytes(auth_path[height * n:(height + 1) * n])
        pair = sibling + node if leaf_idx & 1 else node + sibling
        leaf_idx >>= 1
        idx_offset >>= 1
        addr.set_tree_height(height + 1)
        addr.set_tree_index(leaf_idx + idx_offset)
        node = ctx.thash(pair, addr)
    return node


def treehash(
    ctx: SpxContext,
    leaf_idx: int,
    idx_offset: int,
    tree_height: int,
    gen_leaf: LeafGenerator,
    tree_addr: Address,
) -> tuple[bytes, bytes]:
    """Build a Merkle tree with a node stack; return (root, auth_path).

    `gen_leaf(ctx, addr_idx, tree_addr)` returns the leaf at the given
    (offset) index.
    """
    n = ctx.params.n
    if tree_height < 0:
        raise ValueError("tree_height must not be negative")
    leaf_idx &= _MASK32
    auth = bytearray(tree_height * n)
    stack: list[tuple[bytes, int]] = []

    for idx in range(1 << tree_height):
        leaf = gen_leaf(ctx, idx + idx_offset, tree_addr)
        stack.append((leaf, 0))
        if (leaf_idx ^ 1) == idx and tree_height > 0:
            auth[0:n] = leaf

        while len(stack) >= 2 and stack[-1][1] == stack[-2][1]:
            height = stack[-1][1] + 1
            tree_idx = idx >> height
            tree_addr.set_tree_height(height)
            tree_addr.set_tree_index(tree_idx + (idx_offset >> height))
            right, _ = stack.pop()
            left, _ = stack.pop()
            node = ctx.thash(left + right, tree_addr)
            stack.append((node, height))
            if height < tree_height and ((leaf_idx >> height) ^ 1) == tree_idx:
                auth[height * n:(height + 1) * n] = node

    return stack[0][0], bytes(auth)


def treehash_x1(
    ctx: SpxContext,
    leaf_idx: int,
    idx_offset: int,
    tree_height: int,
    gen_leaf: LeafGeneratorX1,
    tree_addr: Address,
) -> tuple[bytes, bytes]:
    """Build a Merkle tree left to right; return (root, auth_path).

    `gen_leaf(ctx, addr_idx)` returns the leaf at the given (offset) index;
    any per-leaf state is carried by the callable itself.
    """
    n = ctx.params.n
    if tree_height < 0:
        raise ValueError("tree_height must not be negative")
    leaf_idx &= _MASK32
    auth = bytearray(tree_height * n)
    stack: list[bytes] = [b""] * tree_height
    max_idx = (1 << tree_height) - 1
    root = b""

    for idx in range(max_idx + 1):
        current = gen_leaf(ctx, idx + idx_offset)
        internal_idx_offset = idx_offset
        internal_idx = idx
        internal_leaf = leaf_idx
        height = 0
        while True:
            if height == tree_height:
                root = current
                break
            if (internal_idx ^ internal_leaf) == 1:
                auth[height * n:(height + 1) * n] = current
            if internal_idx & 1 == 0 and idx < max_idx:
                stack[height] = current
                break
            internal_idx_offset >>= 1
            tree_addr.set_tree_height(height + 1)
            tree_addr.set_tree_index(internal_idx // 2 + internal_idx_offset)
            current = ctx.thash(stack[height] + current, tree_addr)
            height += 1
            internal_idx >>= 1
            internal_leaf >>= 1

    return root, bytes(auth)