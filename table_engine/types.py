"""
Unified Data Types for the Table Engine
=======================================
All modules MUST use these types. Raw text-layer records never travel past
the page model; everything downstream works on Token / Row / Table.

Type Hierarchy:
- Token: Single positioned text fragment (canonical form)
- ColumnAnchor: Left edge x-coordinate of an inferred column
- Row: Tokens sharing a quantized vertical key
- TableLayout: Winning anchor set chosen by the structure scorer
- TableRow: Assembled cells of one row, with its vertical key
- Table: Page-scoped table (anchors + ordered rows)
"""

from dataclasses import dataclass, field
from typing import List, Optional


# ============================================================
# Primitive Types
# ============================================================

# Left edge of one inferred column, in page coordinates
ColumnAnchor = float

DEFAULT_WIDTH = 0.0
DEFAULT_HEIGHT = 12.0


# ============================================================
# Core Data Structures
# ============================================================

@dataclass(frozen=True)
class Token:
    """
    One positioned text fragment on a page.

    Attributes:
        x: Left edge (baseline origin) in page coordinates
        y: Baseline in page coordinates; y increases upward
        width: Horizontal extent (0 when unknown)
        height: Vertical extent (12 when unknown)
        text: Trimmed, non-empty text
    """
    x: float
    y: float
    width: float
    height: float
    text: str


@dataclass
class Row:
    """
    Tokens grouped under one quantized vertical key.
    Tokens keep the order in which the source produced them.
    """
    key: float
    tokens: List[Token] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.tokens)

    @property
    def text(self) -> str:
        """Row text in left-to-right order (debugging aid)"""
        return ' '.join(t.text for t in sorted(self.tokens, key=lambda t: t.x))


@dataclass
class TableLayout:
    """
    Column layout chosen for a page.

    Attributes:
        anchors: Ascending column anchors
        consistency: Number of other rows that aligned with the anchors
        candidate_key: Key of the row the anchors were derived from
    """
    anchors: List[ColumnAnchor]
    consistency: int = 0
    candidate_key: Optional[float] = None

    @property
    def column_count(self) -> int:
        return len(self.anchors)


@dataclass
class TableRow:
    """One assembled row: cells in anchor order plus the row's vertical key"""
    key: float
    cells: List[str]

    def is_empty(self) -> bool:
        return not any(self.cells)


@dataclass
class Table:
    """
    A page-scoped table.

    Invariant: every row has exactly len(anchors) cells.
    Rows are ordered top to bottom.
    """
    page_num: int
    anchors: List[ColumnAnchor]
    rows: List[TableRow] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.anchors)

    @property
    def cells(self) -> List[List[str]]:
        """Plain cell grid, top row first"""
        return [list(row.cells) for row in self.rows]


# ============================================================
# Helper Functions
# ============================================================

def normalize_text(raw) -> str:
    """
    Normalize raw token content.

    - None -> ""
    - Non-string values are converted with str()
    - Leading/trailing whitespace stripped
    """
    if raw is None:
        return ""
    return str(raw).strip()
