"""
Export Module
=============
CSV serialization of assembled tables.
"""

from .csv_writer import (
    BOM,
    CSV_MIME_TYPE,
    CsvDocument,
    convert_to_csv,
    csv_filename_for,
    encode_csv,
    tables_to_rows,
    write_csv,
)

__all__ = [
    'BOM', 'CSV_MIME_TYPE', 'CsvDocument', 'convert_to_csv',
    'csv_filename_for', 'encode_csv', 'tables_to_rows', 'write_csv',
]
