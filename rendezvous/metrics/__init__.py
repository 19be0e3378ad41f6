from .prometheus import RingMetrics

__all__ = ["RingMetrics"]
