"""
Structure Scorer
================
Chooses the column layout of a page by cross-row voting.

Every row with enough tokens proposes its own anchors. Each other row whose
tokens land on those anchors casts one vote. Tabular rows reuse column
positions, so the proposal with the most votes is taken as the page layout.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..types import ColumnAnchor, Row, TableLayout
from .columns import count_aligned, detect_columns

logger = logging.getLogger(__name__)


@dataclass
class ScorerConfig:
    """Configuration for layout scoring"""
    min_separation: float = 10.0  # Anchor merge distance
    alignment_tolerance: float = 5.0  # Max x offset for a token to be "on" an anchor
    alignment_ratio: float = 0.70  # Aligned tokens needed, as a share of anchor count
    min_row_tokens: int = 3  # Rows smaller than this never propose a layout
    min_columns: int = 3  # Winning layout must have at least this many anchors

    @classmethod
    def strict(cls) -> 'ScorerConfig':
        """Tighter alignment, wider tables only"""
        return cls(
            alignment_tolerance=3.0,
            alignment_ratio=0.85,
            min_columns=4,
        )


class StructureScorer:
    """
    Select the anchor set most consistently reused across rows.

    Usage:
        scorer = StructureScorer()
        layout = scorer.find_layout(page.rows)
    """

    def __init__(self, config: Optional[ScorerConfig] = None):
        self.config = config or ScorerConfig()

    def row_aligns(self, row: Row, anchors: Sequence[ColumnAnchor]) -> bool:
        """
        True when enough of the row's tokens sit on the anchors.
        The threshold scales with the anchor count, not the row size.
        """
        if not anchors:
            return False
        aligned = count_aligned(row.tokens, anchors, self.config.alignment_tolerance)
        return aligned >= len(anchors) * self.config.alignment_ratio

    def is_table_row(self, row: Row, anchors: Sequence[ColumnAnchor]) -> bool:
        """Row is large enough and aligns with the anchors"""
        return row.size >= self.config.min_row_tokens and self.row_aligns(row, anchors)

    def score(self, candidate: Row, rows: Sequence[Row]) -> TableLayout:
        """Anchors of one candidate row and the number of other rows that agree"""
        anchors = detect_columns(candidate.tokens, self.config.min_separation)
        consistency = sum(
            1 for other in rows
            if other is not candidate and self.row_aligns(other, anchors)
        )
        return TableLayout(anchors=anchors, consistency=consistency, candidate_key=candidate.key)

    def find_layout(self, rows: Sequence[Row]) -> Optional[TableLayout]:
        """
        Run the vote over all rows (top to bottom order).

        Returns:
            Winning TableLayout, or None when no candidate gathered a vote or
            the winner has fewer than min_columns anchors.
        """
        best: Optional[TableLayout] = None

        for candidate in rows:
            if candidate.size < self.config.min_row_tokens:
                continue
            layout = self.score(candidate, rows)
            # strict comparison: first candidate keeps ties, zero votes never win
            if layout.consistency > (best.consistency if best else 0):
                best = layout

        if best is None:
            logger.debug("[SCORER] no candidate row gathered a vote")
            return None

        if best.column_count < self.config.min_columns:
            logger.debug(
                "[SCORER] best layout has %d columns (< %d)",
                best.column_count, self.config.min_columns,
            )
            return None

        logger.debug(
            "[SCORER] layout from row y=%s: %d columns, %d aligned rows",
            best.candidate_key, best.column_count, best.consistency,
        )
        return best


def find_table_structure(
    rows: Sequence[Row],
    config: Optional[ScorerConfig] = None,
) -> Optional[TableLayout]:
    """
    Convenience function for layout scoring.
    """
    scorer = StructureScorer(config)
    return scorer.find_layout(rows)
