"""
PDF table to CSV converter.

Usage:
    python scripts/pdf_to_csv.py path/to/report.pdf [-o out.csv] [--preset jitter]
                                 [--workers 4] [--copy] [--debug]

Writes every detected table (all pages, top to bottom) into one CSV file
named after the PDF unless -o is given.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional, Tuple

import pyperclip

from table_engine import (
    CsvDocument,
    DebugBundle,
    NoTableFound,
    PipelineConfig,
    SourceDecodeError,
    Table,
    TablePipeline,
)
from table_engine.source import load_pdf_pages

logger = logging.getLogger("pdf_to_csv")


class PDFTableExtractor:
    """Extracts tables from one PDF and exports them as CSV"""

    def __init__(self, pdf_path: str, config: Optional[PipelineConfig] = None):
        self.pdf_path = pdf_path
        self.config = config or PipelineConfig.default()
        self.tables: List[Table] = []
        self.debug: Optional[DebugBundle] = None
        self.csv_document: Optional[CsvDocument] = None

    def run(self) -> Tuple[CsvDocument, DebugBundle]:
        """
        Load pages, run the pipeline and build the CSV document.

        Raises:
            SourceDecodeError, NoTableFound
        """
        pages = load_pdf_pages(self.pdf_path)
        pipeline = TablePipeline(self.config)
        self.tables, self.debug = pipeline.run_from_pages(pages)
        self.csv_document = pipeline.to_csv(self.tables, source_name=self.pdf_path)
        return self.csv_document, self.debug

    def save(self, output_path: Optional[str] = None) -> str:
        """Write the CSV next to the PDF (or to output_path)"""
        if self.csv_document is None:
            raise RuntimeError("run() must be called before save()")
        if output_path is None:
            output_path = os.path.join(
                os.path.dirname(os.path.abspath(self.pdf_path)),
                self.csv_document.filename,
            )
        return self.csv_document.write(output_path)

    def copy_to_clipboard(self, text: Optional[str] = None) -> bool:
        """Copy CSV text to clipboard"""
        try:
            if text is None:
                text = self.csv_document.text if self.csv_document else ""
            pyperclip.copy(text)
            return True
        except pyperclip.PyperclipException as e:
            logger.warning("Clipboard error: %s", e)
            return False


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Extract whitespace-aligned tables from a PDF into CSV.")
    ap.add_argument("pdf", help="Input PDF path")
    ap.add_argument("-o", "--out", default=None, help="Output CSV path (default: <pdf name>.csv)")
    ap.add_argument("--preset", default="default", choices=["default", "jitter", "strict"],
                    help="Detection thresholds preset")
    ap.add_argument("--workers", type=int, default=1, help="Pages processed in parallel")
    ap.add_argument("--copy", action="store_true", help="Also copy the CSV text to the clipboard")
    ap.add_argument("--debug", action="store_true", help="Verbose logging and debug summary")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not os.path.exists(args.pdf):
        print(f"Error: File not found: {args.pdf}", file=sys.stderr)
        return 1

    config = PipelineConfig.from_name(args.preset)
    config.max_workers = max(1, args.workers)
    config.debug = args.debug

    extractor = PDFTableExtractor(args.pdf, config)
    try:
        csv_doc, debug = extractor.run()
    except (NoTableFound, SourceDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    out_path = extractor.save(args.out)
    count = debug.tables_found
    print(f"Successfully extracted {count} table{'s' if count != 1 else ''} "
          f"({debug.rows_extracted} rows) -> {out_path}")

    if args.debug:
        print(debug.summary())

    if args.copy and extractor.copy_to_clipboard(csv_doc.text):
        print("CSV copied to clipboard")

    return 0


if __name__ == "__main__":
    sys.exit(main())
