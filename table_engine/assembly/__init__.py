"""
Table Assembly Module
=====================
Cell assignment and page-level table assembly.
"""

from .assembler import (
    AssemblerConfig,
    TableAssembler,
    assemble_table,
    assign_cells,
    has_consecutive_table_rows,
)

__all__ = [
    'AssemblerConfig', 'TableAssembler', 'assemble_table',
    'assign_cells', 'has_consecutive_table_rows',
]
