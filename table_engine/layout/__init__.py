"""
Layout Detection
================
Column anchors and the cross-row structure scorer:
- columns: anchor detection and alignment helpers
- scorer: picks the anchor set most rows agree with
"""

from .columns import count_aligned, detect_columns, is_aligned, nearest_anchor
from .scorer import ScorerConfig, StructureScorer, find_table_structure

__all__ = [
    'count_aligned', 'detect_columns', 'is_aligned', 'nearest_anchor',
    'ScorerConfig', 'StructureScorer', 'find_table_structure',
]
