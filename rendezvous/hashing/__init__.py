from .providers import (
    DEFAULT_HASH_PROVIDER,
    HASH_PROVIDERS,
    MASK64,
    Blake2b64Provider,
    FNV1a64Provider,
    HashProvider,
    Hasher64,
    XXHash64Provider,
    get_hash_provider,
    to_bytes,
)

__all__ = [
    "DEFAULT_HASH_PROVIDER",
    "HASH_PROVIDERS",
    "MASK64",
    "Blake2b64Provider",
    "FNV1a64Provider",
    "HashProvider",
    "Hasher64",
    "XXHash64Provider",
    "get_hash_provider",
    "to_bytes",
]
