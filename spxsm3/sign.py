"""SPHINCS+ key generation, signing and verification over SM3."""

from __future__ import annotations

import hmac
from typing import Callable

from .address import Address, AddressType
from .fors import fors_pk_from_sig, fors_sign
from .hashing import SpxContext, ThashVariant
from .merkle import merkle_gen_root, merkle_sign
from .params import DEFAULT_PARAMETER_SET, ParameterSet, get_parameter_set
from .rng import system_random_bytes
from .utils import compute_root
from .wots import wots_pk_from_sig

ALGORITHM_NAME = "SPHINCS+"


class InvalidSignature(Exception):
    """Raised when a signature does not verify under the given public key."""


class Sphincs:
    """A SPHINCS+ instance.

    Secret keys are laid out as SK.seed || SK.prf || PK.seed || PK.root and
    public keys as PK.seed || PK.root.
    """

    def __init__(
        self,
        params: ParameterSet | str = DEFAULT_PARAMETER_SET,
        variant: ThashVariant = ThashVariant.SIMPLE,
        random_bytes: Callable[[int], bytes] = system_random_bytes,
    ) -> None:
        if isinstance(params, str):
            params = get_parameter_set(params)
        self.params = params
        self.variant = ThashVariant(variant)
        self.random_bytes = random_bytes

    @property
    def secret_key_bytes(self) -> int:
        return self.params.sk_bytes

    @property
    def public_key_bytes(self) -> int:
        return self.params.pk_bytes

    @property
    def signature_bytes(self) -> int:
        return self.params.sig_bytes

    @property
    def seed_bytes(self) -> int:
        return self.params.seed_bytes

    def seed_keypair(self, seed: bytes) -> tuple[bytes, bytes]:
        """Derive (pk, sk) from a seed of SK.seed || SK.prf || PK.seed."""
        p = self.params
        n = p.n
        if len(seed) != p.seed_bytes:
            raise ValueError(f"seed must be {p.seed_bytes} bytes")
        seed = bytes(seed)
        pub_seed = seed[2 * n:3 * n]
        ctx = SpxContext(p, pub_seed, seed[:n], self.variant)
        root = merkle_gen_root(ctx)
        return pub_seed + root, seed + root

    def keypair(self) -> tuple[bytes, bytes]:
        """Generate a fresh (pk, sk) pair from the random source."""
        return self.seed_keypair(self.random_bytes(self.params.seed_bytes))

    def signature(self, message: bytes, sk: bytes) -> bytes:
        """Return a detached signature of `message`."""
        p = self.params
        n = p.n
        if len(sk) != p.sk_bytes:
            raise ValueError(f"secret key must be {p.sk_bytes} bytes")
        sk = bytes(sk)
        message = bytes(message)
        sk_prf = sk[n:2 * n]
        pk = sk[2 * n:]
        ctx = SpxContext(p, pk[:n], sk[:n], self.variant)

        wots_addr = Address()
        tree_addr = Address()
        wots_addr.set_type(AddressType.WOTS)
        tree_addr.set_type(AddressType.HASHTREE)

        optrand = bytes(self.random_bytes(n))
        r = ctx.gen_message_random(sk_prf, optrand, message)
        mhash, tree, idx_leaf = ctx.hash_message(r, pk, message)

        wots_addr.set_tree(tree)
        wots_addr.set_keypair(idx_leaf)
        fors_sig, root = fors_sign(ctx, mhash, wots_addr)
        parts = [r, fors_sig]

        leaf_mask = (1 << p.tree_height) - 1
        for layer in range(p.d):
            tree_addr.set_layer(layer)
            tree_addr.set_tree(tree)
            wots_addr.copy_subtree_from(tree_addr)
            wots_addr.set_keypair(idx_leaf)

            layer_sig, root = merkle_sign(ctx, root, wots_addr, tree_addr, idx_leaf)
            parts.append(layer_sig)

            idx_leaf = tree & leaf_mask
            tree >>= p.tree_height

        return b"".join(parts)

    def verify(self, sig: bytes, message: bytes, pk: bytes) -> None:
        """Check a detached signature; raise InvalidSignature if it fails."""
        p = self.params
        n = p.n
        if len(pk) != p.pk_bytes:
            raise ValueError(f"public key must be {p.pk_bytes} bytes")
        if len(sig) != p.sig_bytes:
            raise InvalidSignature("signature has the wrong length")
        sig = bytes(sig)
        pk = bytes(pk)
        ctx = SpxContext(p, pk[:n], None, self.variant)

        wots_addr = Address()
        tree_addr = Address()
        wots_pk_addr = Address()
        wots_addr.set_type(AddressType.WOTS)
        tree_addr.set_type(AddressType.HASHTREE)
        wots_pk_addr.set_type(AddressType.WOTSPK)

        mhash, tree, idx_leaf = ctx.hash_message(sig[:n], pk, bytes(message))
        pos = n

        wots_addr.set_tree(tree)
        wots_addr.set_keypair(idx_leaf)
        root = fors_pk_from_sig(ctx, sig[pos:pos + p.fors_bytes], mhash, wots_addr)
        pos += p.fors_bytes

        leaf_mask = (1 << p.tree_height) - 1
        auth_bytes = p.tree_height * n
        for layer in range(p.d):
            tree_addr.set_layer(layer)
            tree_addr.set_tree(tree)
            wots_addr.copy_subtree_from(tree_addr)
            wots_addr.set_keypair(idx_leaf)
            wots_pk_addr.copy_keypair_from(wots_addr)

            wots_pk = wots_pk_from_sig(
                ctx, sig[pos:pos + p.wots_bytes], root, wots_addr
            )
            pos += p.wots_bytes
            leaf = ctx.thash(wots_pk, wots_pk_addr)

            root = compute_root(
                ctx, leaf, idx_leaf, 0, sig[pos:pos + auth_bytes],
                p.tree_height, tree_addr,
            )
            pos += auth_bytes

            idx_leaf = tree & leaf_mask
            tree >>= p.tree_height

        if not hmac.compare_digest(root, pk[n:]):
            raise InvalidSignature("root does not match the public key")

    def sign(self, message: bytes, sk: bytes) -> bytes:
        """Return the signature followed by the message."""
        message = bytes(message)
        return self.signature(message, sk) + message

    def open(self, signed_message: bytes, pk: bytes) -> bytes:
        """Verify a signed message and return the message it carries."""
        sig_bytes = self.params.sig_bytes
        signed_message = bytes(signed_message)
        if len(signed_message) < sig_bytes:
            raise InvalidSignature("signed message is shorter than a signature")
        message = signed_message[sig_bytes:]
        self.verify(signed_message[:sig_bytes], message, pk)
        return message