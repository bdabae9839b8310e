import pytest

from spxsm3.rng import CtrDrbg, SeedExpander, system_random_bytes

ENTROPY = bytes(range(48))


def test_drbg_first_kat_seed():
    drbg = CtrDrbg(ENTROPY)
    expected = bytes.fromhex(
        "061550234D158C5EC95595FE04EF7A25767F2E24CC2BC479"
        "D09D86DC9ABCFDE7056A8C266F9EF97ED08541DBD2E1FFA1"
    )
    assert drbg.random_bytes(48) == expected


def test_drbg_is_deterministic():
    a = CtrDrbg(ENTROPY)
    b = CtrDrbg(ENTROPY)
    assert [a.random_bytes(33) for _ in range(3)] == [b.random_bytes(33) for _ in range(3)]


def test_drbg_reseed_counter_counts_calls():
    drbg = CtrDrbg(ENTROPY)
    assert drbg.reseed_counter == 1
    drbg.random_bytes(5)
    drbg.random_bytes(0)
    assert drbg.reseed_counter == 3


def test_zero_personalization_matches_none():
    assert CtrDrbg(ENTROPY, bytes(48)).random_bytes(32) == CtrDrbg(ENTROPY).random_bytes(32)


def test_personalization_changes_output():
    personal = bytes([1]) * 48
    assert CtrDrbg(ENTROPY, personal).random_bytes(32) != CtrDrbg(ENTROPY).random_bytes(32)


def test_longer_request_shares_prefix():
    assert CtrDrbg(ENTROPY).random_bytes(20)[:16] == CtrDrbg(ENTROPY).random_bytes(16)


def test_empty_request_still_advances_state():
    fresh = CtrDrbg(ENTROPY).random_bytes(16)
    drbg = CtrDrbg(ENTROPY)
    assert drbg.random_bytes(0) == b""
    assert drbg.random_bytes(16) != fresh


@pytest.mark.parametrize("entropy", [bytes(47), bytes(49), b""])
def test_drbg_rejects_bad_entropy_length(entropy):
    with pytest.raises(ValueError):
        CtrDrbg(entropy)


def test_drbg_rejects_bad_personalization_length():
    with pytest.raises(ValueError):
        CtrDrbg(ENTROPY, bytes(10))


def test_drbg_rejects_negative_length():
    with pytest.raises(ValueError):
        CtrDrbg(ENTROPY).random_bytes(-1)


def test_seed_expander_split_reads_match_whole_read():
    seed = bytes(range(32))
    div = bytes(range(8))
    whole = SeedExpander(seed, div, 1000).read(50)
    split = SeedExpander(seed, div, 1000)
    parts = split.read(3) + split.read(13) + split.read(0) + split.read(34)
    assert parts == whole
    assert len(whole) == 50


def test_seed_expander_diversifier_matters():
    seed = bytes(range(32))
    a = SeedExpander(seed, bytes(8), 100).read(32)
    b = SeedExpander(seed, bytes([1]) + bytes(7), 100).read(32)
    assert a != b


def test_seed_expander_length_limit():
    expander = SeedExpander(bytes(32), bytes(8), 10)
    assert len(expander.read(9)) == 9
    assert expander.length_remaining == 1
    with pytest.raises(ValueError):
        expander.read(1)


def test_seed_expander_rejects_full_request():
    with pytest.raises(ValueError):
        SeedExpander(bytes(32), bytes(8), 10).read(10)


def test_seed_expander_rejects_large_maxlen():
    with pytest.raises(ValueError):
        SeedExpander(bytes(32), bytes(8), 0x100000000)


@pytest.mark.parametrize("seed,div", [(bytes(31), bytes(8)), (bytes(32), bytes(7))])
def test_seed_expander_rejects_bad_lengths(seed, div):
    with pytest.raises(ValueError):
        SeedExpander(seed, div, 100)


def test_system_random_bytes_length():
    assert len(system_random_bytes(37)) == 37
    assert system_random_bytes(0) == b""


def test_system_random_bytes_negative():
    with pytest.raises(ValueError):
        system_random_bytes(-5)