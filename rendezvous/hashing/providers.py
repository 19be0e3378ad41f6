"""Pluggable 64-bit hash providers.

A provider hands out a fresh accumulator for every hash operation, so two
threads hashing different strings never share mutable state.
"""
import hashlib
from abc import ABC, abstractmethod
from typing import Dict, Protocol, Type, Union

import xxhash

from ..errors import UnknownHashProviderError

MASK64 = 0xFFFFFFFFFFFFFFFF

FNV64_OFFSET_BASIS = 0xCBF29CE484222325
FNV64_PRIME = 0x100000001B3

BytesLike = Union[str, bytes, bytearray, memoryview]


class Hasher64(Protocol):
    """Streaming 64-bit hash accumulator."""

    def update(self, data: bytes) -> None: ...

    def intdigest(self) -> int: ...


def to_bytes(value: BytesLike) -> bytes:
    """Normalize a key or node name to bytes (str is UTF-8 encoded).

    Raises:
        TypeError: If value is neither text nor bytes-like
    """
    if isinstance(value, str):
        return value.encode('utf-8')
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"Expected str or bytes-like value, got {type(value).__name__}")


class FNV1a64Hasher:
    """FNV-1a 64-bit accumulator."""

    def __init__(self):
        self._state = FNV64_OFFSET_BASIS

    def update(self, data: bytes) -> None:
        h = self._state
        for byte in data:
            h ^= byte
            h = (h * FNV64_PRIME) & MASK64
        self._state = h

    def intdigest(self) -> int:
        return self._state


class Blake2b64Hasher:
    """Adapts hashlib.blake2b with an 8-byte digest to the Hasher64 protocol."""

    def __init__(self):
        self._h = hashlib.blake2b(digest_size=8)  # 64-bit hash

    def update(self, data: bytes) -> None:
        self._h.update(data)

    def intdigest(self) -> int:
        return int.from_bytes(self._h.digest(), byteorder='big')


class HashProvider(ABC):
    """Strategy producing deterministic unsigned 64-bit hashes."""

    name: str = ""

    @abstractmethod
    def new(self) -> Hasher64:
        """Return a fresh, independent accumulator."""

    def hash(self, data: BytesLike) -> int:
        """Hash data to an unsigned 64-bit integer.

        Args:
            data: Text (UTF-8 encoded before hashing) or bytes-like value

        Returns:
            64-bit integer hash value
        """
        h = self.new()
        h.update(to_bytes(data))
        return h.intdigest() & MASK64

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FNV1a64Provider(HashProvider):
    """FNV-1a 64-bit, the default provider."""

    name = "fnv1a"

    def new(self) -> FNV1a64Hasher:
        return FNV1a64Hasher()


class XXHash64Provider(HashProvider):
    """XXH64 from the xxhash library."""

    name = "xxhash"

    def __init__(self, seed: int = 0):
        self.seed = seed

    def new(self):
        return xxhash.xxh64(seed=self.seed)

    def hash(self, data: BytesLike) -> int:
        # One-shot digest skips the streaming object
        return xxhash.xxh64_intdigest(to_bytes(data), seed=self.seed)

    def __repr__(self) -> str:
        return f"XXHash64Provider(seed={self.seed})"


class Blake2b64Provider(HashProvider):
    """BLAKE2b truncated to a 64-bit digest."""

    name = "blake2b"

    def new(self) -> Blake2b64Hasher:
        return Blake2b64Hasher()


HASH_PROVIDERS: Dict[str, Type[HashProvider]] = {
    FNV1a64Provider.name: FNV1a64Provider,
    XXHash64Provider.name: XXHash64Provider,
    Blake2b64Provider.name: Blake2b64Provider,
}

DEFAULT_HASH_PROVIDER = FNV1a64Provider.name


def get_hash_provider(name: str, seed: int = 0) -> HashProvider:
    """Build a hash provider by its registered name.

    Args:
        name: Provider name ("fnv1a", "xxhash" or "blake2b")
        seed: Seed for seeded providers (only xxhash uses it)

    Returns:
        New provider instance

    Raises:
        UnknownHashProviderError: If no provider has that name
    """
    try:
        provider_cls = HASH_PROVIDERS[name.lower()]
    except KeyError:
        raise UnknownHashProviderError(name, sorted(HASH_PROVIDERS)) from None

    if provider_cls is XXHash64Provider:
        return XXHash64Provider(seed=seed)
    return provider_cls()
