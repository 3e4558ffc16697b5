"""
Page Data Model
===============
Token normalization and row grouping.
Every later stage consumes the PageData built here, so the coordinate
convention is fixed in one place: y increases upward and rows are ordered
by descending key (top of page first).
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping

from ..types import DEFAULT_HEIGHT, DEFAULT_WIDTH, Row, Token, normalize_text

logger = logging.getLogger(__name__)


def _as_float(value: Any, default: float) -> float:
    """Coerce a record field to float; missing, falsy, non-finite or garbage -> default"""
    if not value:
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(result):
        return default
    return result


def token_from_item(item: Mapping[str, Any]) -> Token:
    """
    Create a Token from one raw text-layer record.

    Two record shapes are accepted:
    - text-layer: {'str', 'transform', 'width', 'height'} where the origin
      is transform[4], transform[5]
    - flat: {'text', 'x', 'y', 'width', 'height'}

    The returned text may be empty; normalize_tokens drops those.
    """
    transform = item.get('transform')
    if isinstance(transform, (list, tuple)) and len(transform) >= 6:
        x = _as_float(transform[4], 0.0)
        y = _as_float(transform[5], 0.0)
    else:
        x = _as_float(item.get('x'), 0.0)
        y = _as_float(item.get('y'), 0.0)

    raw = item.get('str') if 'str' in item else item.get('text')

    return Token(
        x=x,
        y=y,
        width=_as_float(item.get('width'), DEFAULT_WIDTH),
        height=_as_float(item.get('height'), DEFAULT_HEIGHT),
        text=normalize_text(raw),
    )


def normalize_tokens(items: Iterable[Mapping[str, Any]]) -> List[Token]:
    """Convert raw records to Tokens, dropping those with no visible text"""
    tokens = [token_from_item(item) for item in items]
    return [t for t in tokens if t.text]


def row_key(y: float, quantum: float = 1.0) -> float:
    """
    Quantize a vertical coordinate.

    quantum=1.0 rounds to the nearest integer; a larger quantum (e.g. a row
    height) snaps jittery baselines onto the same key.
    """
    if quantum <= 0:
        quantum = 1.0
    # half-up rounding: 10.5 -> 11, -0.5 -> 0
    return float(math.floor(y / quantum + 0.5) * quantum)


def group_rows(tokens: Iterable[Token], quantum: float = 1.0) -> List[Row]:
    """
    Partition tokens into rows by quantized y.

    Returns rows ordered top to bottom (descending key). Tokens inside a row
    keep their input order.
    """
    groups: Dict[float, List[Token]] = {}
    for token in tokens:
        groups.setdefault(row_key(token.y, quantum), []).append(token)

    return [Row(key=key, tokens=group) for key, group in sorted(groups.items(), key=lambda kv: -kv[0])]


@dataclass
class PageData:
    """
    Normalized tokens of one page plus their row grouping.
    """
    page_num: int  # 1-indexed
    width: float = 612.0
    height: float = 792.0
    tokens: List[Token] = field(default_factory=list)
    rows: List[Row] = field(default_factory=list)

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def text(self) -> str:
        """Page text, one row per line, top to bottom"""
        return '\n'.join(row.text for row in self.rows)


def build_page_data(
    items: Iterable[Mapping[str, Any]],
    page_num: int,
    page_width: float = 612.0,
    page_height: float = 792.0,
    row_quantum: float = 1.0,
) -> PageData:
    """
    Build PageData from raw text-layer records.

    Args:
        items: Raw records for one page (see token_from_item)
        page_num: 1-indexed page number
        page_width: Page width in points
        page_height: Page height in points
        row_quantum: Vertical quantum for row grouping

    Returns:
        PageData with tokens grouped into rows
    """
    tokens = normalize_tokens(items)
    rows = group_rows(tokens, quantum=row_quantum)
    logger.debug("[PAGE %d] %d tokens in %d rows", page_num, len(tokens), len(rows))
    return PageData(
        page_num=page_num,
        width=page_width,
        height=page_height,
        tokens=tokens,
        rows=rows,
    )
