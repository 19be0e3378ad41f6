"""Highest Random Weight (HRW) scoring and selection."""
import math
from typing import Iterable, Optional, Protocol

from ..hashing import MASK64

XORSHIFT_STAR_MULTIPLIER = 0x2545F4914F6CDD1D

MAX_UINT64 = float(MASK64)


class ScoredNode(Protocol):
    name: str
    name_hash: int
    weight: float


def combine_hashes(a: int, b: int) -> int:
    """Mix a key hash and a node hash with the xorshift* finisher.

    All arithmetic wraps at 64 bits.

    Args:
        a: 64-bit key hash
        b: 64-bit node hash

    Returns:
        Combined 64-bit hash
    """
    x = (a ^ b) & MASK64
    x ^= x >> 12
    x ^= (x << 25) & MASK64
    x ^= x >> 27
    return (x * XORSHIFT_STAR_MULTIPLIER) & MASK64


def score(combined_hash: int, weight: float) -> float:
    """Convert a combined hash and node weight into an HRW score.

    The hash is normalized to u in (0, 1) and scored as -weight / ln(u).
    u == 0 scores 0.0 and u == 1 scores +inf.

    Args:
        combined_hash: Output of combine_hashes
        weight: Node weight (positive)

    Returns:
        Score, higher wins
    """
    u = combined_hash / MAX_UINT64
    if u <= 0.0:
        return 0.0
    if u >= 1.0:
        return math.inf
    return -weight / math.log(u)


def compute_score(key_hash: int, node_hash: int, weight: float) -> float:
    """Score a single (key, node) pair."""
    return score(combine_hashes(key_hash, node_hash), weight)


def select_node(key_hash: int, nodes: Iterable[ScoredNode]) -> Optional[ScoredNode]:
    """Select the node with the highest score for a key.

    Equal scores resolve to the lexicographically smallest name, so the
    winner never depends on enumeration order.

    Args:
        key_hash: 64-bit hash of the key
        nodes: Candidate nodes

    Returns:
        Winning node, or None if nodes is empty
    """
    winner = None
    max_score = -math.inf

    for node in nodes:
        s = compute_score(key_hash, node.name_hash, node.weight)
        if winner is None or s > max_score or (s == max_score and node.name < winner.name):
            max_score = s
            winner = node

    return winner
