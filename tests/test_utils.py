import pytest

from spxsm3.address import Address, AddressType
from spxsm3.hashing import SpxContext
from spxsm3.params import SM3_TEST
from spxsm3.utils import (
    bytes_to_ull,
    compute_root,
    treehash,
    treehash_x1,
    ull_to_bytes,
)

N = SM3_TEST.n


@pytest.fixture
def ctx():
    return SpxContext(SM3_TEST, bytes(range(N)), bytes(range(N, 2 * N)))


def _tree_addr():
    addr = Address()
    addr.set_layer(2)
    addr.set_tree(7)
    addr.set_type(AddressType.HASHTREE)
    return addr


def _leaf(ctx, idx):
    addr = Address()
    addr.set_type(AddressType.WOTSPK)
    addr.set_keypair(idx)
    return ctx.thash(ull_to_bytes(idx, N), addr)


def test_ull_to_bytes_big_endian():
    assert ull_to_bytes(0x0102, 4) == b"\x00\x00\x01\x02"


def test_ull_to_bytes_truncates_high_bytes():
    assert ull_to_bytes(0x1234, 1) == b"\x34"


def test_ull_to_bytes_zero_length():
    assert ull_to_bytes(99, 0) == b""


def test_ull_to_bytes_negative_length():
    with pytest.raises(ValueError):
        ull_to_bytes(1, -1)


@pytest.mark.parametrize("value", [0, 1, 255, 0xDEADBEEF, 0xFFFFFFFFFFFFFFFF])
def test_bytes_round_trip(value):
    assert bytes_to_ull(ull_to_bytes(value, 8)) == value


def test_bytes_to_ull():
    assert bytes_to_ull(b"\x01\x00") == 256


@pytest.mark.parametrize("leaf_idx", range(8))
def test_treehash_variants_agree(ctx, leaf_idx):
    root_a, auth_a = treehash(
        ctx, leaf_idx, 0, 3, lambda c, i, a: _leaf(c, i), _tree_addr()
    )
    root_b, auth_b = treehash_x1(ctx, leaf_idx, 0, 3, _leaf, _tree_addr())
    assert root_a == root_b
    assert auth_a == auth_b
    assert len(auth_a) == 3 * N


@pytest.mark.parametrize("leaf_idx", range(8))
def test_compute_root_recovers_root(ctx, leaf_idx):
    root, auth = treehash_x1(ctx, leaf_idx, 0, 3, _leaf, _tree_addr())
    recomputed = compute_root(
        ctx, _leaf(ctx, leaf_idx), leaf_idx, 0, auth, 3, _tree_addr()
    )
    assert recomputed == root


def test_compute_root_with_offset(ctx):
    offset = 16
    root, auth = treehash_x1(ctx, 5, offset, 4, _leaf, _tree_addr())
    recomputed = compute_root(
        ctx, _leaf(ctx, 5 + offset), 5, offset, auth, 4, _tree_addr()
    )
    assert recomputed == root


def test_offset_changes_root(ctx):
    root_a, _ = treehash_x1(ctx, 0, 0, 2, _leaf, _tree_addr())
    root_b, _ = treehash_x1(ctx, 0, 4, 2, _leaf, _tree_addr())
    assert root_a != root_b
    assert len(root_a) == N


def test_wrong_leaf_gives_wrong_root(ctx):
    root, auth = treehash_x1(ctx, 2, 0, 3, _leaf, _tree_addr())
    bad = compute_root(ctx, _leaf(ctx, 3), 2, 0, auth, 3, _tree_addr())
    assert bad != root


def test_no_auth_path_index(ctx):
    root, auth = treehash_x1(ctx, 0xFFFFFFFF, 0, 3, _leaf, _tree_addr())
    reference, _ = treehash_x1(ctx, 0, 0, 3, _leaf, _tree_addr())
    assert root == reference
    assert auth == bytes(3 * N)


def test_height_zero_root_is_leaf(ctx):
    root, auth = treehash_x1(ctx, 0, 0, 0, _leaf, _tree_addr())
    assert root == _leaf(ctx, 0)
    assert auth == b""


def test_compute_root_rejects_short_auth_path(ctx):
    with pytest.raises(ValueError):
        compute_root(ctx, bytes(N), 0, 0, bytes(N), 3, _tree_addr())


def test_compute_root_rejects_zero_height(ctx):
    with pytest.raises(ValueError):
        compute_root(ctx, bytes(N), 0, 0, b"", 0, _tree_addr())


def test_compute_root_rejects_bad_leaf(ctx):
    with pytest.raises(ValueError):
        compute_root(ctx, bytes(N + 1), 0, 0, bytes(3 * N), 3, _tree_addr())