"""Prometheus metrics for rendezvous rings."""
from typing import Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge
import structlog

logger = structlog.get_logger()


class RingMetrics:
    """Prometheus collectors shared by one or more rings.

    Rings are told apart by the ``ring`` label. Create one instance per
    collector registry; registering twice on the same registry fails with
    a duplicate timeseries error from prometheus_client.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None, namespace: str = "rendezvous"):
        """Create and register collectors.

        Args:
            registry: Collector registry (default: the global prometheus registry)
            namespace: Metric name prefix
        """
        self.registry = registry if registry is not None else REGISTRY
        self.namespace = namespace

        self.lookups = Counter(
            'lookups_total',
            'Total successful key lookups',
            ['ring'],
            namespace=namespace,
            registry=self.registry
        )

        self.empty_ring_lookups = Counter(
            'empty_ring_lookups_total',
            'Lookups rejected because the ring had no nodes',
            ['ring'],
            namespace=namespace,
            registry=self.registry
        )

        self.membership_changes = Counter(
            'membership_changes_total',
            'Node membership changes',
            ['ring', 'op'],
            namespace=namespace,
            registry=self.registry
        )

        self.nodes = Gauge(
            'nodes',
            'Number of nodes registered in the ring',
            ['ring'],
            namespace=namespace,
            registry=self.registry
        )

        logger.debug("ring_metrics_initialized", namespace=namespace)

    def record_lookup(self, ring: str) -> None:
        self.lookups.labels(ring=ring).inc()

    def record_empty_ring_lookup(self, ring: str) -> None:
        self.empty_ring_lookups.labels(ring=ring).inc()

    def record_membership_change(self, ring: str, op: str, node_count: int) -> None:
        """Record a membership change and the resulting node count.

        Args:
            ring: Ring name
            op: "add", "update" or "remove"
            node_count: Number of nodes after the change
        """
        self.membership_changes.labels(ring=ring, op=op).inc()
        self.nodes.labels(ring=ring).set(node_count)

    def __repr__(self) -> str:
        return f"RingMetrics(namespace={self.namespace})"
