import pytest

from spxsm3.address import Address, AddressType


def test_new_address_is_zero():
    assert bytes(Address()) == bytes(32)


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        Address(bytes(31))


def test_address_type_values():
    assert [t.value for t in AddressType] == list(range(7))
    a = Address()
    for addr_type in AddressType:
        a.set_type(addr_type)
        assert bytes(a)[9] == addr_type.value
        assert a.type == addr_type
    a.set_type(AddressType.WOTS)
    assert bytes(a)[9] == 0
    a.set_type(AddressType.FORSPRF)
    assert bytes(a)[9] == 6


def test_layer_offset_and_truncation():
    a = Address()
    a.set_layer(21)
    assert bytes(a)[0] == 21
    a.set_layer(0x1FF)
    assert a.layer == 0xFF


def test_tree_is_big_endian_at_offset_one():
    a = Address()
    a.set_tree(0x0102030405060708)
    assert bytes(a)[1:9] == bytes([1, 2, 3, 4, 5, 6, 7, 8])
    assert a.tree == 0x0102030405060708
    assert bytes(a)[0] == 0 and bytes(a)[9:] == bytes(23)


def test_type_offset():
    a = Address()
    a.set_type(AddressType.FORSPK)
    assert bytes(a)[9] == 4
    assert a.type == AddressType.FORSPK


def test_keypair_field():
    a = Address()
    a.set_keypair(0xA1B2C3D4)
    assert bytes(a)[10:14] == bytes([0xA1, 0xB2, 0xC3, 0xD4])
    assert a.keypair == 0xA1B2C3D4


def test_chain_and_height_share_offset():
    a = Address()
    a.set_chain(7)
    assert a.tree_height == 7
    a.set_tree_height(3)
    assert a.chain == 3
    assert bytes(a)[17] == 3


def test_hash_offset():
    a = Address()
    a.set_hash(15)
    assert bytes(a)[21] == 15
    assert a.hash_index == 15


def test_tree_index_field():
    a = Address()
    a.set_tree_index(0x00010203)
    assert bytes(a)[18:22] == bytes([0, 1, 2, 3])
    assert a.tree_index == 0x00010203


def test_copy_subtree_only_copies_layer_and_tree():
    src = Address(bytes(range(1, 33)))
    dst = Address()
    dst.copy_subtree_from(src)
    assert bytes(dst)[:9] == bytes(src)[:9]
    assert bytes(dst)[9:] == bytes(23)


def test_copy_keypair_copies_layer_tree_and_keypair():
    src = Address(bytes(range(1, 33)))
    dst = Address(bytes([0xEE]) * 32)
    dst.copy_keypair_from(src)
    out = bytes(dst)
    assert out[:9] == bytes(src)[:9]
    assert out[9] == 0xEE
    assert out[10:14] == bytes(src)[10:14]
    assert out[14:] == bytes([0xEE]) * 18


def test_copy_is_independent():
    a = Address()
    a.set_layer(5)
    b = a.copy()
    assert a == b
    b.set_layer(6)
    assert a.layer == 5
    assert a != b


def test_roundtrip_through_bytes():
    a = Address()
    a.set_layer(2)
    a.set_tree(99)
    a.set_type(AddressType.HASHTREE)
    a.set_tree_height(4)
    a.set_tree_index(12)
    assert Address(bytes(a)) == a