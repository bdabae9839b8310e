"""The 32-byte hash address structure, laid out for SM3 instances."""

from __future__ import annotations

from enum import IntEnum

ADDR_BYTES = 32

OFFSET_LAYER = 0
OFFSET_TREE = 1
OFFSET_TYPE = 9
OFFSET_KP_ADDR = 10
OFFSET_CHAIN_ADDR = 17
OFFSET_HASH_ADDR = 21
OFFSET_TREE_HGT = 17
OFFSET_TREE_INDEX = 18


class AddressType(IntEnum):
    """Domain-separation values stored in the type byte."""

    WOTS = 0
    WOTSPK = 1
    HASHTREE = 2
    FORSTREE = 3
    FORSPK = 4
    WOTSPRF = 5
    FORSPRF = 6


class Address:
    """Mutable hash address; setters truncate values like fixed-width fields."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes | bytearray | None = None) -> None:
        if data is None:
            self._data = bytearray(ADDR_BYTES)
        else:
            if len(data) != ADDR_BYTES:
                raise ValueError(f"address must be {ADDR_BYTES} bytes, got {len(data)}")
            self._data = bytearray(data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Address({bytes(self._data).hex()})"

    def copy(self) -> Address:
        return Address(self._data)

    def _set_byte(self, offset: int, value: int) -> None:
        self._data[offset] = value & 0xFF

    def _set_u32(self, offset: int, value: int) -> None:
        self._data[offset:offset + 4] = (value & 0xFFFFFFFF).to_bytes(4, "big")

    def _get_u32(self, offset: int) -> int:
        return int.from_bytes(self._data[offset:offset + 4], "big")

    def set_layer(self, layer: int) -> None:
        """Set the hypertree layer."""
        self._set_byte(OFFSET_LAYER, layer)

    def set_tree(self, tree: int) -> None:
        """Set the index of the tree within its layer."""
        self._data[OFFSET_TREE:OFFSET_TREE + 8] = (tree & 0xFFFFFFFFFFFFFFFF).to_bytes(
            8, "big"
        )

    def set_type(self, addr_type: int) -> None:
        self._set_byte(OFFSET_TYPE, int(addr_type))

    def copy_subtree_from(self, other: Address) -> None:
        """Copy the layer and tree fields from another address."""
        end = OFFSET_TREE + 8
        self._data[:end] = other._data[:end]

    def set_keypair(self, keypair: int) -> None:
        self._set_u32(OFFSET_KP_ADDR, keypair)

    def copy_keypair_from(self, other: Address) -> None:
        """Copy the layer, tree and key pair fields from another address."""
        self.copy_subtree_from(other)
        self._data[OFFSET_KP_ADDR:OFFSET_KP_ADDR + 4] = other._data[
            OFFSET_KP_ADDR:OFFSET_KP_ADDR + 4
        ]

    def set_chain(self, chain: int) -> None:
        self._set_byte(OFFSET_CHAIN_ADDR, chain)

    def set_hash(self, hash_index: int) -> None:
        self._set_byte(OFFSET_HASH_ADDR, hash_index)

    def set_tree_height(self, tree_height: int) -> None:
        self._set_byte(OFFSET_TREE_HGT, tree_height)

    def set_tree_index(self, tree_index: int) -> None:
        self._set_u32(OFFSET_TREE_INDEX, tree_index)

    @property
    def layer(self) -> int:
        return self._data[OFFSET_LAYER]

    @property
    def tree(self) -> int:
        return int.from_bytes(self._data[OFFSET_TREE:OFFSET_TREE + 8], "big")

    @property
    def type(self) -> int:
        return self._data[OFFSET_TYPE]

    @property
    def keypair(self) -> int:
        return self._get_u32(OFFSET_KP_ADDR)

    @property
    def chain(self) -> int:
        return self._data[OFFSET_CHAIN_ADDR]

    @property
    def hash_index(self) -> int:
        return self._data[OFFSET_HASH_ADDR]

    @property
    def tree_height(self) -> int:
        return self._data[OFFSET_TREE_HGT]

    @property
    def tree_index(self) -> int:
        return self._get_u32(OFFSET_TREE_INDEX)