"""
CSV Export
==========
Serializes assembled tables to CSV text and bytes.

Output contract:
- every cell quoted, embedded quotes doubled
- cells joined by ",", rows joined by "\\n", no trailing newline
- bytes = U+FEFF byte-order mark + UTF-8 text
"""

import csv
import io
import os
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from ..types import Table

BOM = '\ufeff'
CSV_MIME_TYPE = 'text/csv;charset=utf-8'
CSV_EXTENSION = '.csv'


def convert_to_csv(rows: Iterable[Sequence[str]]) -> str:
    """
    Encode rows as CSV text (no BOM).

    Examples:
    - [['a', 'b']] -> '"a","b"'
    - a double quote inside a cell is written twice, and the whole cell is
      still wrapped in one pair of quotes
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator='\n')
    for row in rows:
        writer.writerow(row)
    text = buffer.getvalue()
    # drop the terminator of the last row only
    if text.endswith('\n'):
        text = text[:-1]
    return text


def encode_csv(rows: Iterable[Sequence[str]]) -> bytes:
    """CSV bytes with the byte-order mark spreadsheet tools use to detect UTF-8"""
    return (BOM + convert_to_csv(rows)).encode('utf-8')


def tables_to_rows(tables: Iterable[Table]) -> List[List[str]]:
    """Concatenate table rows in table order"""
    rows: List[List[str]] = []
    for table in tables:
        rows.extend(table.cells)
    return rows


def csv_filename_for(source_name: str) -> str:
    """
    Derive the CSV filename from the source document name.

    - "report.pdf" -> "report.csv"
    - "/tmp/a.b.PDF" -> "a.b.csv"
    - "notes" -> "notes.csv"
    """
    base = os.path.basename(source_name)
    stem, _ = os.path.splitext(base)
    return (stem or base) + CSV_EXTENSION


@dataclass
class CsvDocument:
    """
    Serialized CSV ready to be written.

    Attributes:
        text: CSV text without BOM
        filename: Suggested output filename
    """
    text: str
    filename: str = 'tables.csv'
    mime_type: str = CSV_MIME_TYPE

    @classmethod
    def from_tables(cls, tables: Iterable[Table], source_name: str = '') -> 'CsvDocument':
        filename = csv_filename_for(source_name) if source_name else 'tables.csv'
        return cls(text=convert_to_csv(tables_to_rows(tables)), filename=filename)

    def to_bytes(self) -> bytes:
        return (BOM + self.text).encode('utf-8')

    def write(self, path: str) -> str:
        """Write BOM + UTF-8 bytes to path and return the path"""
        with open(path, 'wb') as f:
            f.write(self.to_bytes())
        return path


def write_csv(path: str, rows: Iterable[Sequence[str]]) -> str:
    """Write rows to path as BOM-prefixed UTF-8 CSV"""
    return CsvDocument(text=convert_to_csv(rows), filename=os.path.basename(path)).write(path)
