"""
Table Assembly
==============
Maps row tokens onto the chosen column anchors and builds the page table.

Process:
1. Gate on page size (min_tokens)
2. Score layouts (StructureScorer)
3. Require consecutive table-shaped rows
4. Assign cells per row, drop empty rows
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..layout import ScorerConfig, StructureScorer, nearest_anchor
from ..page_model import PageData
from ..types import ColumnAnchor, Row, Table, TableRow

logger = logging.getLogger(__name__)


@dataclass
class AssemblerConfig:
    """Configuration for table assembly"""
    scorer: ScorerConfig = field(default_factory=ScorerConfig)
    assignment_tolerance: float = 20.0  # Max x distance between token and its anchor
    min_tokens: int = 6  # Pages with fewer tokens never hold a table
    min_consecutive_rows: int = 2  # Adjacent table-shaped rows needed
    row_quantum: float = 1.0  # Vertical quantum for row grouping


def assign_cells(
    row: Row,
    anchors: Sequence[ColumnAnchor],
    tolerance: float = 20.0,
) -> List[str]:
    """
    Place each token of the row into the slot of its nearest anchor.

    A token farther than tolerance from every anchor is dropped. When two
    tokens share a nearest anchor, the one earlier in row order keeps the
    slot.

    Returns:
        One cell per anchor ("" where nothing landed)
    """
    cells = [''] * len(anchors)
    taken = [False] * len(anchors)

    for token in row.tokens:
        index = nearest_anchor(token.x, anchors)
        if index == -1:
            continue
        if abs(token.x - anchors[index]) >= tolerance:
            continue
        if taken[index]:
            continue
        cells[index] = token.text
        taken[index] = True

    return cells


def has_consecutive_table_rows(
    rows: Sequence[Row],
    anchors: Sequence[ColumnAnchor],
    scorer: StructureScorer,
    min_run: int = 2,
) -> bool:
    """True when at least min_run adjacent rows are table-shaped"""
    run = 0
    for row in rows:
        if scorer.is_table_row(row, anchors):
            run += 1
            if run >= min_run:
                return True
        else:
            run = 0
    return False


class TableAssembler:
    """
    Build the table of one page.

    Usage:
        assembler = TableAssembler()
        table = assembler.assemble(page_data)
    """

    def __init__(self, config: Optional[AssemblerConfig] = None):
        self.config = config or AssemblerConfig()
        self.scorer = StructureScorer(self.config.scorer)
        self.last_reject_reason: Optional[str] = None

    def _reject(self, page: PageData, reason: str) -> None:
        self.last_reject_reason = reason
        logger.debug("[ASSEMBLER] page %d rejected: %s", page.page_num, reason)

    def assemble(self, page: PageData) -> Optional[Table]:
        """
        Assemble the page table.

        Returns:
            Table, or None when the page does not hold one (see
            last_reject_reason)
        """
        self.last_reject_reason = None

        if page.token_count < self.config.min_tokens:
            self._reject(page, "too_few_tokens")
            return None

        layout = self.scorer.find_layout(page.rows)
        if layout is None:
            self._reject(page, "no_layout")
            return None

        if not has_consecutive_table_rows(
            page.rows, layout.anchors, self.scorer, self.config.min_consecutive_rows
        ):
            self._reject(page, "no_consecutive_rows")
            return None

        table = Table(page_num=page.page_num, anchors=list(layout.anchors))
        for row in page.rows:
            table_row = TableRow(
                key=row.key,
                cells=assign_cells(row, layout.anchors, self.config.assignment_tolerance),
            )
            if not table_row.is_empty():
                table.rows.append(table_row)

        if not table.rows:
            self._reject(page, "empty_rows")
            return None

        logger.debug(
            "[ASSEMBLER] page %d: %d rows x %d columns",
            page.page_num, table.row_count, table.column_count,
        )
        return table


def assemble_table(page: PageData, config: Optional[AssemblerConfig] = None) -> Optional[Table]:
    """
    Convenience function for table assembly.
    """
    assembler = TableAssembler(config)
    return assembler.assemble(page)
