"""Weighted rendezvous hashing (Highest Random Weight).

Usage::

    from rendezvous import Ring

    ring = Ring()
    ring.add("cache-a")
    ring.add_with_weight("cache-b", 2.0)
    ring.lookup("user:42")
"""
from .config import RingConfig
from .coordinator import Node, Ring
from .errors import (
    ConfigError,
    EmptyRingError,
    InvalidWeightError,
    RendezvousError,
    UnknownHashProviderError,
)
from .hashing import (
    Blake2b64Provider,
    FNV1a64Provider,
    HashProvider,
    XXHash64Provider,
    get_hash_provider,
)
from .logging_config import configure_logging
from .metrics import RingMetrics

__version__ = "0.1.0"

__all__ = [
    "Blake2b64Provider",
    "ConfigError",
    "EmptyRingError",
    "FNV1a64Provider",
    "HashProvider",
    "InvalidWeightError",
    "Node",
    "RendezvousError",
    "Ring",
    "RingConfig",
    "RingMetrics",
    "UnknownHashProviderError",
    "XXHash64Provider",
    "configure_logging",
    "get_hash_provider",
]
