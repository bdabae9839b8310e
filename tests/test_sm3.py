import pytest

from spxsm3.sm3 import SM3, mgf1, sm3


def test_standard_vector_abc():
    assert sm3(b"abc").hex() == (
        "66c7f0f462eeedd9d1f2d46bdc10e4e24167c4875cf2f7a2297da02b8f4ba8e0"
    )


def test_standard_vector_two_blocks():
    assert sm3(b"abcd" * 16).hex() == (
        "debe9ff92275b8a138604889c18e5a4d6fdb70e5387e5765293dcba39c0c5732"
    )


@pytest.mark.parametrize("length", [0, 1, 55, 56, 57, 63, 64, 65, 119, 120, 128, 200])
def test_incremental_matches_one_shot(length):
    data = bytes(i % 251 for i in range(length))
    h = SM3()
    for start in range(0, length, 7):
        h.update(data[start:start + 7])
    assert h.digest() == sm3(data)


def test_initial_data_equals_update():
    h = SM3()
    h.update(b"hello world")
    assert SM3(b"hello world").digest() == h.digest()


def test_digest_does_not_finalize():
    h = SM3(b"abc")
    first = h.digest()
    assert h.digest() == first
    h.update(b"def")
    assert h.digest() == sm3(b"abcdef")


def test_copy_is_independent():
    h = SM3(b"prefix")
    clone = h.copy()
    clone.update(b"-more")
    assert h.digest() == sm3(b"prefix")
    assert clone.digest() == sm3(b"prefix-more")


def test_hexdigest_matches_digest():
    h = SM3(b"abc")
    assert h.hexdigest() == h.digest().hex()
    assert len(h.digest()) == 32


def test_update_rejects_text():
    with pytest.raises(TypeError):
        SM3().update("abc")


def test_different_inputs_give_different_digests():
    assert sm3(b"a") != sm3(b"b")


@pytest.mark.parametrize("outlen", [0, 1, 16, 32, 33, 64, 100])
def test_mgf1_length(outlen):
    assert len(mgf1(b"seed", outlen)) == outlen


def test_mgf1_prefix_consistency():
    long = mgf1(b"seed", 100)
    assert mgf1(b"seed", 40) == long[:40]
    assert mgf1(b"seed", 32) == long[:32]


def test_mgf1_first_block_uses_zero_counter():
    assert mgf1(b"seed", 32) == sm3(b"seed\x00\x00\x00\x00")


def test_mgf1_negative_length():
    with pytest.raises(ValueError):
        mgf1(b"seed", -1)