"""
Page Model Module
=================
Token normalization and row grouping for page-level layout analysis.
"""

from .model import (
    PageData,
    build_page_data,
    group_rows,
    normalize_tokens,
    row_key,
    token_from_item,
)

__all__ = [
    'PageData', 'build_page_data', 'group_rows',
    'normalize_tokens', 'row_key', 'token_from_item',
]
