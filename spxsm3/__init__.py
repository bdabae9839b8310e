"""SPHINCS+ hash-based signatures built on the SM3 hash function."""

__version__ = "0.1.0"

__all__ = [
    "address",
    "fors",
    "hashing",
    "merkle",
    "params",
    "rng",
    "sign",
    "sm3",
    "utils",
    "wots",
]