"""
Table Recognition Engine
========================
Infers tables from positioned text tokens and exports them as CSV.

Architecture:
- page_model: Token normalization and row grouping
- layout: Column anchors and cross-row structure scoring
- assembly: Cell assignment and page table assembly
- export: CSV encoding
- source: pdfplumber-backed token source

Usage:
    from table_engine import TablePipeline
    pipeline = TablePipeline()
    tables, debug = pipeline.run_from_pages(raw_pages)
    csv_doc = pipeline.to_csv(tables, source_name="report.pdf")
"""

from .types import (
    ColumnAnchor,
    Row,
    Table,
    TableLayout,
    TableRow,
    Token,
)
from .errors import NoTableFound, SourceDecodeError, TableExtractionError
from .export import CsvDocument, convert_to_csv, csv_filename_for, encode_csv
from .pipeline import (
    DebugBundle,
    PipelineConfig,
    TablePipeline,
    convert_pdf_to_csv,
    extract_tables_from_page,
    run_table_pipeline,
)
from .source import RawPage

__all__ = [
    'ColumnAnchor',
    'Row',
    'Table',
    'TableLayout',
    'TableRow',
    'Token',
    'NoTableFound',
    'SourceDecodeError',
    'TableExtractionError',
    'CsvDocument',
    'convert_to_csv',
    'csv_filename_for',
    'encode_csv',
    'DebugBundle',
    'PipelineConfig',
    'TablePipeline',
    'convert_pdf_to_csv',
    'extract_tables_from_page',
    'run_table_pipeline',
    'RawPage',
]

__version__ = '1.0.0'
