"""Configuration management for rendezvous rings."""
import math
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .errors import ConfigError
from .hashing import DEFAULT_HASH_PROVIDER, HASH_PROVIDERS

load_dotenv()

LOG_LEVELS = ["debug", "info", "warn", "error"]


@dataclass
class RingConfig:
    """Configuration for a rendezvous ring."""

    # Hashing
    hash_provider: str = DEFAULT_HASH_PROVIDER
    hash_seed: int = 0  # xxhash only

    # Membership
    default_weight: float = 1.0
    ring_name: str = "default"

    # Observability
    log_level: str = "info"

    @classmethod
    def from_env(cls) -> "RingConfig":
        """Load configuration from environment variables.

        Raises:
            ConfigError: If a numeric variable cannot be parsed
        """
        try:
            return cls(
                hash_provider=os.getenv("RENDEZVOUS_HASH_PROVIDER", DEFAULT_HASH_PROVIDER).strip().lower(),
                hash_seed=int(os.getenv("RENDEZVOUS_HASH_SEED", "0")),
                default_weight=float(os.getenv("RENDEZVOUS_DEFAULT_WEIGHT", "1.0")),
                ring_name=os.getenv("RENDEZVOUS_RING_NAME", "default"),
                # Support RENDEZVOUS_LOG_LEVEL with fallback to LOG_LEVEL
                log_level=os.getenv("RENDEZVOUS_LOG_LEVEL", os.getenv("LOG_LEVEL", "info")).lower(),
            )
        except ValueError as e:
            raise ConfigError(f"Invalid numeric configuration value: {e}") from e

    def validate(self) -> None:
        """Validate configuration.

        Raises:
            ConfigError: On the first invalid field
        """
        if self.hash_provider not in HASH_PROVIDERS:
            raise ConfigError(
                f"RENDEZVOUS_HASH_PROVIDER must be one of {sorted(HASH_PROVIDERS)}, got {self.hash_provider}"
            )

        if not 0 <= self.hash_seed < 2 ** 64:
            raise ConfigError(f"RENDEZVOUS_HASH_SEED must fit in 64 unsigned bits, got {self.hash_seed}")

        if not math.isfinite(self.default_weight) or self.default_weight <= 0:
            raise ConfigError(f"RENDEZVOUS_DEFAULT_WEIGHT must be finite and positive, got {self.default_weight}")

        if not self.ring_name:
            raise ConfigError("RENDEZVOUS_RING_NAME must not be empty")

        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"Invalid log level: {self.log_level}")

    def to_dict(self) -> dict:
        """Get configuration as dictionary."""
        return {
            "hash_provider": self.hash_provider,
            "hash_seed": self.hash_seed,
            "default_weight": self.default_weight,
            "ring_name": self.ring_name,
            "log_level": self.log_level,
        }
