# spxsm3

spxsm3 implements SPHINCS+ stateless hash-based signatures that use the SM3 hash
function. It covers key generation, signing and verification. The building
blocks are also available as separate modules:

- `spxsm3.sm3`: the SM3 hash and MGF1.
- `spxsm3.address`: the 32-byte hash addresses.
- `spxsm3.hashing`: the keyed PRF, the tweakable hash and the message hash.
- `spxsm3.utils`: byte conversions and Merkle tree helpers.
- `spxsm3.wots`: WOTS+.
- `spxsm3.fors`: FORS.
- `spxsm3.merkle`: hypertree layers.
- `spxsm3.rng`: random sources, including a deterministic AES-256 CTR DRBG.

## Installation

```
pip install .
```

To install the test dependencies as well, use `pip install .[test]`.

## Parameter sets

`spxsm3.params.get_parameter_set(name)` returns a `ParameterSet` by name. An
unknown name raises `ValueError`. The available names are:

- `sphincs-SM3-128f`
- `sphincs-SM3-128s`
- `sphincs-SM3-192f`
- `sphincs-SM3-192s`
- `sphincs-SM3-256f`
- `sphincs-SM3-256s`
- `sphincs-SM3-test`

A `ParameterSet` holds the sizes derived from its parameters. Among them are
`pk_bytes`, `sk_bytes`, `sig_bytes`, `seed_bytes`, `wots_len`,
`fors_msg_bytes` and `tree_height`.

## Signing and verifying

```python
from spxsm3.params import get_parameter_set
from spxsm3.hashing import ThashVariant
from spxsm3.sign import Sphincs, InvalidSignature

scheme = Sphincs(get_parameter_set("sphincs-SM3-128f"), ThashVariant.SIMPLE)

pk, sk = scheme.keypair()

message = b"hello"
sig = scheme.signature(message, sk)
scheme.verify(sig, message, pk)          # raises InvalidSignature on failure

signed = scheme.sign(message, sk)        # signature followed by the message
assert scheme.open(signed, pk) == message
```

`Sphincs` also accepts a parameter set name in place of a `ParameterSet`. With
no arguments it uses `sphincs-SM3-test` and the simple tweakable hash.

Keys are laid out as follows:

- `sk = SK_SEED || SK_PRF || PUB_SEED || root`
- `pk = PUB_SEED || root`

`Sphincs.seed_keypair(seed)` derives a key pair from a seed of `3 * n` bytes.
The same seed always gives the same keys.

`verify` and `open` raise `InvalidSignature` when any of these holds:

- the signature has the wrong length;
- a signed message is shorter than a signature;
- the recomputed root does not match the public key.

Keys or seeds of the wrong length raise `ValueError`.

The sizes for the chosen parameter set are available as the properties
`secret_key_bytes`, `public_key_bytes`, `signature_bytes` and `seed_bytes`.

## Randomness

The `random_bytes` argument of `Sphincs` sets the source of randomness. The
scheme uses it for fresh key seeds and for the signing randomizer `optrand`. By
default it reads from the operating system through
`spxsm3.rng.system_random_bytes`. For reproducible output, pass the
`random_bytes` method of a `spxsm3.rng.CtrDrbg`:

```python
from spxsm3.rng import CtrDrbg

drbg = CtrDrbg(bytes(range(48)), None)
scheme = Sphincs(get_parameter_set("sphincs-SM3-128f"), ThashVariant.SIMPLE,
                 drbg.random_bytes)
```

`spxsm3.rng.SeedExpander(seed, diversifier, maxlen)` is an AES-256 based
expander:

- `seed` is 32 bytes.
- `diversifier` is 8 bytes.
- `maxlen` must be below `2**32`.

Its `read(length)` method returns the next bytes of the stream. It raises
`ValueError` once a request reaches the remaining allowance.

## SM3

```python
from spxsm3.sm3 import SM3, sm3, mgf1

sm3(b"abc").hex()
h = SM3(b"ab")
h.update(b"c")
h.hexdigest()
h2 = h.copy()
mgf1(b"seed", 40)     # SM3(seed || counter) blocks, truncated to 40 bytes
```

## Tweakable hash variants

`ThashVariant.SIMPLE` and `ThashVariant.ROBUST` select the tweakable hash
construction used by `spxsm3.hashing.SpxContext`. The robust variant masks its
input with MGF1 output that is keyed by the public seed and the address. A
signature made with one variant does not verify under the other.

## What is not included

This is a library only. It does not install a command-line program. It does
not write or read known-answer-test request and response files. It does not
include the threshold or multi-party signing protocols.