"""Shared fixtures for the rendezvous test suite."""
import pytest
from prometheus_client import CollectorRegistry

from rendezvous import Ring, RingMetrics, XXHash64Provider

ENV_VARS = [
    "RENDEZVOUS_HASH_PROVIDER",
    "RENDEZVOUS_HASH_SEED",
    "RENDEZVOUS_DEFAULT_WEIGHT",
    "RENDEZVOUS_RING_NAME",
    "RENDEZVOUS_LOG_LEVEL",
    "LOG_LEVEL",
]


@pytest.fixture
def ring():
    """Ring with nodes a, b, c at the default weight."""
    r = Ring()
    for name in ("a", "b", "c"):
        r.add(name)
    return r


@pytest.fixture
def xxhash_ring():
    return Ring(XXHash64Provider())


@pytest.fixture
def collector_registry():
    return CollectorRegistry()


@pytest.fixture
def metrics(collector_registry):
    return RingMetrics(registry=collector_registry)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every configuration variable from the environment."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
