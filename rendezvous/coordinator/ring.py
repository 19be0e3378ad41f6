"""Rendezvous ring: weighted HRW key-to-node assignment."""
import math
from numbers import Real
from typing import TYPE_CHECKING, List, Optional

import structlog

from ..errors import EmptyRingError, InvalidWeightError
from ..hashing import FNV1a64Provider, HashProvider, get_hash_provider
from ..hashing.providers import BytesLike
from ..metrics.prometheus import RingMetrics
from .hrw_scoring import select_node
from .registry import DEFAULT_WEIGHT, Node, NodeRegistry

if TYPE_CHECKING:
    from ..config import RingConfig

logger = structlog.get_logger()


def validate_weight(weight) -> float:
    """Return weight as a float, rejecting non-finite and non-positive values.

    Raises:
        InvalidWeightError: If weight is not a finite number > 0
    """
    if isinstance(weight, bool) or not isinstance(weight, Real):
        raise InvalidWeightError(weight)
    weight = float(weight)
    if not math.isfinite(weight) or weight <= 0:
        raise InvalidWeightError(weight)
    return weight


def validate_name(name) -> str:
    """Reject node names that are not text.

    Raises:
        TypeError: If name is not a str
    """
    if not isinstance(name, str):
        raise TypeError(f"Node name must be str, got {type(name).__name__}")
    return name


class Ring:
    """A rendezvous group of named, weighted nodes.

    Every key maps to the node with the highest weighted score for that key.
    Removing a node only remaps the keys that node owned, and adding a node
    only takes keys from the others.

    Safe for concurrent use: membership changes are exclusive, lookups share
    the registry lock with each other.
    """

    def __init__(
        self,
        hash_provider: Optional[HashProvider] = None,
        *,
        default_weight: float = DEFAULT_WEIGHT,
        name: str = "default",
        metrics: Optional[RingMetrics] = None
    ):
        """Create an empty ring.

        Args:
            hash_provider: 64-bit hash strategy (default: FNV-1a)
            default_weight: Weight used by add()
            name: Ring name used in metrics labels and logs
            metrics: Optional Prometheus metrics sink

        Raises:
            InvalidWeightError: If default_weight is not finite and positive
        """
        self.hash_provider = hash_provider if hash_provider is not None else FNV1a64Provider()
        self.default_weight = validate_weight(default_weight)
        self.name = name
        self.metrics = metrics
        self._registry = NodeRegistry(
            self.hash_provider,
            default_weight=self.default_weight,
            on_change=self._record_membership_change if metrics is not None else None
        )

        logger.debug(
            "ring_initialized",
            ring=name,
            hash_provider=self.hash_provider.name,
            default_weight=self.default_weight
        )

    @classmethod
    def from_config(cls, config: "RingConfig", metrics: Optional[RingMetrics] = None) -> "Ring":
        """Build a ring from validated configuration.

        Raises:
            ConfigError: If the configuration is invalid
        """
        config.validate()
        return cls(
            get_hash_provider(config.hash_provider, seed=config.hash_seed),
            default_weight=config.default_weight,
            name=config.ring_name,
            metrics=metrics
        )

    def add(self, name: str) -> None:
        """Add a node with the default weight, or reset an existing node to it."""
        self.add_with_weight(name, None)

    def add_with_weight(self, name: str, weight: Optional[float]) -> None:
        """Add a node, or update the weight of an existing node.

        Args:
            name: Node name
            weight: Positive weight, or None for the default weight

        Raises:
            InvalidWeightError: If weight is not finite and positive
            TypeError: If name is not a str
        """
        validate_name(name)
        weight = self.default_weight if weight is None else validate_weight(weight)
        self._registry.upsert(name, weight)

    def remove(self, name: str) -> None:
        """Remove a node; removing an unknown name does nothing.

        Raises:
            TypeError: If name is not a str
        """
        validate_name(name)
        self._registry.delete(name)

    def _record_membership_change(self, op: str, node_count: int) -> None:
        # Called by the registry while it holds the write lock
        self.metrics.record_membership_change(self.name, op, node_count)

    def lookup(self, key: BytesLike) -> str:
        """Return the name of the node that owns key.

        Args:
            key: Text or bytes-like key

        Returns:
            Name of the highest-scoring node

        Raises:
            EmptyRingError: If the ring has no nodes
            TypeError: If key is not text or bytes-like
        """
        key_hash = self.hash_provider.hash(key)

        with self._registry.scan() as nodes:
            winner = select_node(key_hash, nodes)

        if winner is None:
            if self.metrics is not None:
                self.metrics.record_empty_ring_lookup(self.name)
            raise EmptyRingError(self.name)

        if self.metrics is not None:
            self.metrics.record_lookup(self.name)
        return winner.name

    def nodes(self) -> List[Node]:
        """Return a snapshot of all nodes sorted by name."""
        return self._registry.snapshot()

    def get(self, name: str) -> Optional[Node]:
        """Return the node registered under name, or None."""
        return self._registry.get(name)

    def weight(self, name: str) -> Optional[float]:
        """Return the weight of a node, or None if it is not registered."""
        node = self._registry.get(name)
        return node.weight if node is not None else None

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def __len__(self) -> int:
        return len(self._registry)

    def __repr__(self) -> str:
        return f"Ring(name={self.name}, nodes={len(self)}, hash_provider={self.hash_provider!r})"
