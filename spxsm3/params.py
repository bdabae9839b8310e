"""SPHINCS+ parameter sets instantiated with the SM3 hash function."""

from __future__ import annotations

from dataclasses import dataclass

ADDR_BYTES = 32
SM3_OUTPUT_BYTES = 32


def _wots_len2(n: int, w: int) -> int:
    """Precomputed floor(log(len_1 * (w - 1)) / log(w)) + 1."""
    if w == 256:
        if n <= 1:
            return 1
        if n <= 256:
            return 2
    elif w == 16:
        if n <= 8:
            return 2
        if n <= 136:
            return 3
        if n <= 256:
            return 4
    raise ValueError(f"no precomputed WOTS len2 for n={n}, w={w}")


@dataclass(frozen=True)
class ParameterSet:
    """Sizes and tree shapes of one SPHINCS+ instance."""

    name: str
    n: int
    full_height: int
    d: int
    fors_height: int
    fors_trees: int
    wots_w: int = 16

    def __post_init__(self) -> None:
        if self.wots_w not in (16, 256):
            raise ValueError("wots_w must be 16 or 256")
        if self.n < 1:
            raise ValueError("n must be positive")
        if self.n > SM3_OUTPUT_BYTES:
            raise ValueError("n larger than the SM3 output size is not supported")
        if self.d < 1 or self.full_height % self.d != 0:
            raise ValueError("d must divide full_height")
        if self.tree_bits > 64:
            raise ValueError("64 bits cannot represent all subtrees")
        _wots_len2(self.n, self.wots_w)

    @property
    def addr_bytes(self) -> int:
        return ADDR_BYTES

    @property
    def wots_logw(self) -> int:
        return 8 if self.wots_w == 256 else 4

    @property
    def wots_len1(self) -> int:
        return 8 * self.n // self.wots_logw

    @property
    def wots_len2(self) -> int:
        return _wots_len2(self.n, self.wots_w)

    @property
    def wots_len(self) -> int:
        return self.wots_len1 + self.wots_len2

    @property
    def wots_bytes(self) -> int:
        return self.wots_len * self.n

    @property
    def wots_pk_bytes(self) -> int:
        return self.wots_bytes

    @property
    def tree_height(self) -> int:
        return self.full_height // self.d

    @property
    def fors_msg_bytes(self) -> int:
        return (self.fors_height * self.fors_trees + 7) // 8

    @property
    def fors_bytes(self) -> int:
        return (self.fors_height + 1) * self.fors_trees * self.n

    @property
    def fors_pk_bytes(self) -> int:
        return self.n

    @property
    def sig_bytes(self) -> int:
        return (
            self.n
            + self.fors_bytes
            + self.d * self.wots_bytes
            + self.full_height * self.n
        )

    @property
    def pk_bytes(self) -> int:
        return 2 * self.n

    @property
    def sk_bytes(self) -> int:
        return 2 * self.n + self.pk_bytes

    @property
    def seed_bytes(self) -> int:
        return 3 * self.n

    @property
    def tree_bits(self) -> int:
        return self.tree_height * (self.d - 1)

    @property
    def tree_bytes(self) -> int:
        return (self.tree_bits + 7) // 8

    @property
    def leaf_bits(self) -> int:
        return self.tree_height

    @property
    def leaf_bytes(self) -> int:
        return (self.leaf_bits + 7) // 8

    @property
    def digest_bytes(self) -> int:
        return self.fors_msg_bytes + self.tree_bytes + self.leaf_bytes


SM3_128F = ParameterSet("sphincs-SM3-128f", 16, 66, 22, 6, 33)
SM3_128S = ParameterSet("sphincs-SM3-128s", 16, 63, 7, 12, 14)
SM3_192F = ParameterSet("sphincs-SM3-192f", 24, 66, 22, 8, 33)
SM3_192S = ParameterSet("sphincs-SM3-192s", 24, 63, 7, 14, 17)
SM3_256F = ParameterSet("sphincs-SM3-256f", 32, 68, 17, 9, 35)
SM3_256S = ParameterSet("sphincs-SM3-256s", 32, 64, 8, 14, 22)
SM3_TEST = ParameterSet("sphincs-SM3-test", 16, 66, 22, 6, 33)

PARAMETER_SETS: dict[str, ParameterSet] = {
    p.name: p
    for p in (SM3_128F, SM3_128S, SM3_192F, SM3_192S, SM3_256F, SM3_256S, SM3_TEST)
}

DEFAULT_PARAMETER_SET = SM3_TEST


def get_parameter_set(name: str) -> ParameterSet:
    """Look up a named parameter set; raises ValueError if unknown."""
    try:
        return PARAMETER_SETS[name]
    except KeyError:
        known = ", ".join(sorted(PARAMETER_SETS))
        raise ValueError(f"unknown parameter set {name!r}; known: {known}") from None