"""
Table Pipeline
==============
Single entry point for running the complete table extraction pipeline.
Orchestrates: RawPage -> PageData -> Layout -> Table -> CSV
"""

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .assembly import AssemblerConfig, TableAssembler
from .errors import NoTableFound
from .export import CsvDocument
from .layout import ScorerConfig
from .page_model import build_page_data
from .source import RawPage, load_pdf_pages
from .types import Table

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Complete pipeline configuration"""
    assembler: AssemblerConfig = field(default_factory=AssemblerConfig)

    # Pages are independent; >1 runs them on a thread pool
    max_workers: int = 1

    # Debug
    debug: bool = False

    @classmethod
    def default(cls) -> 'PipelineConfig':
        """Integer row keys, reference thresholds"""
        return cls()

    @classmethod
    def jitter_tolerant(cls) -> 'PipelineConfig':
        """Row keys snapped to a 12pt row height"""
        return cls(assembler=AssemblerConfig(row_quantum=12.0))

    @classmethod
    def strict(cls) -> 'PipelineConfig':
        """Tight alignment, at least 4 columns and 3 consecutive rows"""
        return cls(assembler=AssemblerConfig(
            scorer=ScorerConfig.strict(),
            assignment_tolerance=10.0,
            min_consecutive_rows=3,
        ))

    @classmethod
    def from_name(cls, name: str) -> 'PipelineConfig':
        presets = {
            'default': cls.default,
            'jitter': cls.jitter_tolerant,
            'strict': cls.strict,
        }
        try:
            return presets[name]()
        except KeyError:
            raise ValueError(f"Unknown preset {name!r}; expected one of {sorted(presets)}") from None


@dataclass
class DebugBundle:
    """Debug information from pipeline run"""
    pages_processed: int = 0
    total_tokens: int = 0

    tables_found: int = 0
    rows_extracted: int = 0
    pages_with_tables: List[int] = field(default_factory=list)

    reject_reasons: Dict[str, int] = field(default_factory=dict)

    def summary(self) -> str:
        """Generate summary string"""
        lines = [
            "=" * 60,
            "TABLE ENGINE DEBUG SUMMARY",
            "=" * 60,
            f"Pages Processed: {self.pages_processed}",
            f"Total Tokens: {self.total_tokens}",
            "",
            f"Tables Found: {self.tables_found}",
            f"Rows Extracted: {self.rows_extracted}",
            f"Pages with Tables: {self.pages_with_tables}",
            "",
            "Reject Reasons:",
        ]
        for reason, count in sorted(self.reject_reasons.items(), key=lambda x: -x[1]):
            lines.append(f"  {reason}: {count}")
        lines.append("=" * 60)
        return "\n".join(lines)


@dataclass
class PageResult:
    """Outcome of one page"""
    page_num: int
    token_count: int
    table: Optional[Table] = None
    reject_reason: Optional[str] = None


class TablePipeline:
    """
    Main table extraction pipeline.

    Usage:
        pipeline = TablePipeline()
        tables, debug = pipeline.run_from_pages(raw_pages)
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig.default()

    def extract_page(
        self,
        items: Iterable[Mapping[str, Any]],
        page_num: int = 1,
        page_width: float = 612.0,
        page_height: float = 792.0,
    ) -> PageResult:
        """
        Run normalizer, grouper, scorer and assembler on one page.
        A fresh assembler per call keeps pages independent.
        """
        page = build_page_data(
            items,
            page_num=page_num,
            page_width=page_width,
            page_height=page_height,
            row_quantum=self.config.assembler.row_quantum,
        )
        assembler = TableAssembler(self.config.assembler)
        table = assembler.assemble(page)
        return PageResult(
            page_num=page_num,
            token_count=page.token_count,
            table=table,
            reject_reason=assembler.last_reject_reason,
        )

    def _extract_raw_page(self, raw: RawPage) -> PageResult:
        return self.extract_page(raw.items, raw.page_num, raw.width, raw.height)

    def run_from_pages(self, pages: Sequence[RawPage]) -> Tuple[List[Table], DebugBundle]:
        """
        Run pipeline over all pages of a document.

        Args:
            pages: RawPage list in document order

        Returns:
            Tuple of (tables, debug_bundle); tables in page order

        Raises:
            NoTableFound: no page produced a table
        """
        debug = DebugBundle()

        if self.config.max_workers > 1 and len(pages) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                results = list(executor.map(self._extract_raw_page, pages))
        else:
            results = [self._extract_raw_page(raw) for raw in pages]

        tables: List[Table] = []
        reasons: Counter = Counter()
        for result in results:
            debug.pages_processed += 1
            debug.total_tokens += result.token_count
            if result.table is None:
                reasons[result.reject_reason or "unknown"] += 1
                continue
            tables.append(result.table)
            debug.pages_with_tables.append(result.page_num)
            debug.rows_extracted += result.table.row_count

        debug.tables_found = len(tables)
        debug.reject_reasons = dict(reasons)

        logger.debug(
            "[PIPELINE] %d pages, %d tables, %d rows",
            debug.pages_processed, debug.tables_found, debug.rows_extracted,
        )
        if self.config.debug:
            logger.debug("\n%s", debug.summary())

        if not tables:
            raise NoTableFound(pages_scanned=debug.pages_processed)

        return tables, debug

    def to_csv(self, tables: Iterable[Table], source_name: str = '') -> CsvDocument:
        """Flatten tables in page order into one CsvDocument"""
        return CsvDocument.from_tables(tables, source_name=source_name)


def extract_tables_from_page(
    items: Iterable[Mapping[str, Any]],
    config: Optional[PipelineConfig] = None,
) -> List[List[str]]:
    """
    Cell grid of a single page, or [] when the page holds no table.
    """
    result = TablePipeline(config).extract_page(items)
    return result.table.cells if result.table else []


def run_table_pipeline(
    pdf_path: str,
    config: Optional[PipelineConfig] = None,
) -> Tuple[List[Table], DebugBundle]:
    """
    Single entry point for running the pipeline on a PDF path.

    Raises:
        SourceDecodeError: the PDF could not be parsed
        NoTableFound: no page produced a table
    """
    cfg = config or PipelineConfig.default()
    pages = load_pdf_pages(pdf_path)
    logger.debug("[PIPELINE] loaded %d pages from %s", len(pages), pdf_path)

    pipeline = TablePipeline(cfg)
    return pipeline.run_from_pages(pages)


def convert_pdf_to_csv(
    pdf_path: str,
    config: Optional[PipelineConfig] = None,
) -> Tuple[CsvDocument, DebugBundle]:
    """Extract every table of the PDF into one CsvDocument named after the source"""
    tables, debug = run_table_pipeline(pdf_path, config)
    return CsvDocument.from_tables(tables, source_name=pdf_path), debug
