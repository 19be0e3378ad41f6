"""Exception hierarchy for rendezvous hashing."""


class RendezvousError(Exception):
    """Base class for all rendezvous errors."""


class EmptyRingError(RendezvousError, LookupError):
    """Lookup was attempted on a ring with no registered nodes."""

    def __init__(self, ring_name: str = "default"):
        self.ring_name = ring_name
        super().__init__(f"Ring '{ring_name}' has no nodes")


class InvalidWeightError(RendezvousError, ValueError):
    """Node weight is not a finite, strictly positive number."""

    def __init__(self, weight):
        self.weight = weight
        super().__init__(f"Weight must be finite and positive, got {weight!r}")


class UnknownHashProviderError(RendezvousError, KeyError):
    """No hash provider is registered under the requested name."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(f"Unknown hash provider {name!r}, expected one of {available}")

    def __str__(self) -> str:
        # KeyError quotes its message otherwise
        return self.args[0]


class ConfigError(RendezvousError, ValueError):
    """Invalid ring configuration."""
