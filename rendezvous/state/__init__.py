from .rw_lock import RWLock

__all__ = ["RWLock"]
