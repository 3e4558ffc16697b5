"""
PDF Token Source
================
Reads positioned words from a PDF with pdfplumber and hands them to the
engine as raw text-layer records, one RawPage per page.

pdfplumber measures `top`/`bottom` downward from the top edge of the page;
records produced here use the engine convention (y up, baseline origin):
    y = page_height - bottom
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List

import pdfplumber
from pdfminer.pdfparser import PDFSyntaxError
from pdfplumber.utils.exceptions import PdfminerException

from .errors import SourceDecodeError

logger = logging.getLogger(__name__)


@dataclass
class RawPage:
    """
    Raw records of one page, before normalization.

    Attributes:
        page_num: 1-indexed page number
        width: Page width in points
        height: Page height in points
        items: Flat records {'text', 'x', 'y', 'width', 'height'}
    """
    page_num: int
    width: float = 612.0
    height: float = 792.0
    items: List[Dict[str, Any]] = field(default_factory=list)


def word_to_item(word: Dict[str, Any], page_height: float) -> Dict[str, Any]:
    """Convert one pdfplumber word dict to a flat y-up record"""
    x0 = word.get('x0', 0) or 0
    x1 = word.get('x1', x0) or x0
    top = word.get('top', 0) or 0
    bottom = word.get('bottom', top) or top
    return {
        'text': word.get('text', ''),
        'x': x0,
        'y': page_height - bottom,
        'width': x1 - x0,
        'height': bottom - top,
    }


def iter_pdf_pages(pdf_path: str, x_tolerance: float = 3.0) -> Iterator[RawPage]:
    """
    Generator yielding one RawPage per page, in document order.

    Raises:
        SourceDecodeError: pdfplumber/pdfminer could not parse the document
        FileNotFoundError: pdf_path does not exist
    """
    try:
        with pdfplumber.open(pdf_path) as pdf:
            for i, page in enumerate(pdf.pages):
                page_num = i + 1
                page_width = page.width or 612.0
                page_height = page.height or 792.0
                words = page.extract_words(
                    x_tolerance=x_tolerance,
                    keep_blank_chars=False,
                    use_text_flow=False,
                )
                logger.debug("[SOURCE] page %d: %d words", page_num, len(words))
                yield RawPage(
                    page_num=page_num,
                    width=page_width,
                    height=page_height,
                    items=[word_to_item(w, page_height) for w in words],
                )
    except (PdfminerException, PDFSyntaxError) as exc:
        raise SourceDecodeError(f"Failed to decode PDF: {exc}", source=str(pdf_path)) from exc


def load_pdf_pages(pdf_path: str, x_tolerance: float = 3.0) -> List[RawPage]:
    """Materialize all pages of the document"""
    return list(iter_pdf_pages(pdf_path, x_tolerance=x_tolerance))
