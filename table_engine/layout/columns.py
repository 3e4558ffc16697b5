"""
Column Detection
================
Derives column anchors (left-edge x positions) from the tokens of one row.
"""

from typing import Iterable, List, Sequence

from ..types import ColumnAnchor, Token


def detect_columns(tokens: Iterable[Token], min_separation: float = 10.0) -> List[ColumnAnchor]:
    """
    Collapse token x positions into ascending column anchors.

    A position opens a new anchor only when it lies more than
    min_separation past the last accepted anchor; closer positions are
    merged into that anchor.

    Examples:
    - x = [0, 4, 100, 200] -> [0, 100, 200]
    - x = [0, 9, 18, 27]   -> [0, 18]
    """
    anchors: List[ColumnAnchor] = []
    for position in sorted(t.x for t in tokens):
        if not anchors or position - anchors[-1] > min_separation:
            anchors.append(position)
    return anchors


def is_aligned(value: float, reference: float, tolerance: float = 5.0) -> bool:
    """True when value is within tolerance of reference (inclusive)"""
    return abs(value - reference) <= tolerance


def count_aligned(
    tokens: Iterable[Token],
    anchors: Sequence[ColumnAnchor],
    tolerance: float = 5.0,
) -> int:
    """Number of tokens sitting on some anchor"""
    return sum(
        1 for t in tokens
        if any(is_aligned(t.x, anchor, tolerance) for anchor in anchors)
    )


def nearest_anchor(x: float, anchors: Sequence[ColumnAnchor]) -> int:
    """
    Index of the anchor closest to x, or -1 when there are no anchors.
    The lower index wins on equal distance.
    """
    best_index = -1
    best_distance = float('inf')
    for index, anchor in enumerate(anchors):
        distance = abs(x - anchor)
        if distance < best_distance:
            best_distance = distance
            best_index = index
    return best_index
