from .hrw_scoring import combine_hashes, compute_score, score, select_node
from .registry import DEFAULT_WEIGHT, Node, NodeRegistry
from .ring import Ring, validate_weight

__all__ = [
    "DEFAULT_WEIGHT",
    "Node",
    "NodeRegistry",
    "Ring",
    "combine_hashes",
    "compute_score",
    "score",
    "select_node",
    "validate_weight",
]
