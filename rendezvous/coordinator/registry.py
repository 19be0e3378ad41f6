"""Node registry for rendezvous hashing."""
import dataclasses
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, ValuesView

import structlog

from ..hashing import HashProvider
from ..state.rw_lock import RWLock

logger = structlog.get_logger()

DEFAULT_WEIGHT = 1.0


@dataclass(frozen=True)
class Node:
    """One selectable destination."""
    name: str
    name_hash: int  # Computed once at insertion, kept across weight updates
    weight: float = DEFAULT_WEIGHT


class NodeRegistry:
    """Name-keyed node set guarded by a reader/writer lock."""

    def __init__(
        self,
        hash_provider: HashProvider,
        default_weight: float = DEFAULT_WEIGHT,
        on_change: Optional[Callable[[str, int], None]] = None
    ):
        """Initialize an empty registry.

        Args:
            hash_provider: Provider used to hash node names
            default_weight: Weight used when upsert() gets weight=None
            on_change: Called as on_change(op, node_count) with op "add",
                "update" or "remove", while the write lock is still held
        """
        self.hash_provider = hash_provider
        self.default_weight = default_weight
        self.on_change = on_change
        self._nodes: Dict[str, Node] = {}
        self._lock = RWLock()

    def upsert(self, name: str, weight: Optional[float] = None) -> bool:
        """Insert a node or update the weight of an existing one.

        An existing node keeps its name hash; only the weight changes.

        Args:
            name: Node name
            weight: New weight, or None for the default weight

        Returns:
            True if a node was inserted, False if an existing node was updated
        """
        if weight is None:
            weight = self.default_weight

        # Hashing is pure, so it runs outside the lock. A concurrent insert of
        # the same name produces the same hash.
        name_hash = self.hash_provider.hash(name)

        with self._lock.write_locked():
            existing = self._nodes.get(name)
            if existing is None:
                self._nodes[name] = Node(name=name, name_hash=name_hash, weight=weight)
                inserted = True
            else:
                self._nodes[name] = dataclasses.replace(existing, weight=weight)
                inserted = False

            if self.on_change is not None:
                self.on_change("add" if inserted else "update", len(self._nodes))

        if inserted:
            logger.debug("node_added", node=name, weight=weight, name_hash=name_hash)
        else:
            logger.debug("node_weight_updated", node=name, weight=weight)
        return inserted

    def delete(self, name: str) -> bool:
        """Remove a node; removing an absent name is a no-op.

        Returns:
            True if a node was removed
        """
        with self._lock.write_locked():
            removed = self._nodes.pop(name, None) is not None
            if removed and self.on_change is not None:
                self.on_change("remove", len(self._nodes))

        if removed:
            logger.debug("node_removed", node=name)
        return removed

    @contextmanager
    def scan(self) -> Iterator[ValuesView[Node]]:
        """Hold the shared lock and yield the current nodes for one scoring pass.

        The yielded view must not escape the with block.
        """
        with self._lock.read_locked():
            yield self._nodes.values()

    def snapshot(self) -> List[Node]:
        """Return the current nodes sorted by name."""
        with self._lock.read_locked():
            nodes = list(self._nodes.values())
        return sorted(nodes, key=lambda n: n.name)

    def get(self, name: str) -> Optional[Node]:
        with self._lock.read_locked():
            return self._nodes.get(name)

    def __contains__(self, name: object) -> bool:
        with self._lock.read_locked():
            return name in self._nodes

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._nodes)

    def __repr__(self) -> str:
        return f"NodeRegistry(nodes={len(self)}, hash_provider={self.hash_provider!r})"
