"""
Table Engine Errors
===================
Only document-wide failures are errors. Per-row and per-page threshold
decisions are policy and never raise.
"""


class TableExtractionError(Exception):
    """Base class for all table engine errors"""


class NoTableFound(TableExtractionError):
    """No page of the document produced a qualifying table"""

    DEFAULT_MESSAGE = (
        "No tables found in the PDF file. "
        "Please ensure the PDF contains properly formatted tables."
    )

    def __init__(self, message: str = DEFAULT_MESSAGE, pages_scanned: int = 0):
        super().__init__(message)
        self.pages_scanned = pages_scanned


class SourceDecodeError(TableExtractionError):
    """The token source could not decode the document"""

    def __init__(self, message: str, source: str = ""):
        super().__init__(message)
        self.source = source
