"""
Content extraction for filescout.

Text is pulled from plain text files directly, from PDF documents with pypdf,
from OOXML spreadsheets with openpyxl and from legacy .xls workbooks with
xlrd. The extractor is chosen by file extension; any failure surfaces as
ExtractionError so callers can skip the file without aborting a batch.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

import xlrd
from openpyxl import load_workbook
from pypdf import PdfReader

from ..errors import ExtractionError
from ..models.config import ContentConfig


logger = logging.getLogger(__name__)


class ContentExtractor:
    """
    Extension-keyed dispatch to plain text, PDF and spreadsheet extractors.

    Each extract_* method can be overridden or replaced independently; the
    dispatch table is built from the configured extension lists.
    """

    def __init__(self, config: Optional[ContentConfig] = None):
        self.config = config or ContentConfig()
        self._dispatch: Dict[str, Callable[[str], str]] = {}
        for ext in self.config.index_text_extensions:
            self._dispatch[ext] = self.extract_plain_text
        for ext in self.config.pdf_extensions:
            self._dispatch[ext] = self.extract_pdf_text
        for ext in self.config.spreadsheet_extensions:
            self._dispatch[ext] = self.extract_spreadsheet_text
        for ext in self.config.legacy_spreadsheet_extensions:
            self._dispatch[ext] = self.extract_xls_text

    def supported_extensions(self) -> List[str]:
        return list(self._dispatch)

    def supports(self, path: str) -> bool:
        """Return True if an extractor is registered for this file's extension."""
        return Path(path).suffix.lower() in self._dispatch

    def extract(self, path: str) -> str:
        """
        Extract text from a file using the extractor for its extension.

        Raises:
            ExtractionError: If no extractor handles the extension or extraction fails
        """
        ext = Path(path).suffix.lower()
        extractor = self._dispatch.get(ext)
        if extractor is None:
            raise ExtractionError(path, f"no extractor for extension '{ext}'")
        return extractor(path)

    def extract_plain_text(self, path: str) -> str:
        try:
            with open(path, 'r', encoding=self.config.encoding, errors='replace') as f:
                return f.read()
        except OSError as e:
            raise ExtractionError(path, str(e)) from e

    def extract_pdf_text(self, path: str) -> str:
        try:
            reader = PdfReader(path)
            parts = []
            for page in reader.pages:
                text = page.extract_text() or ''
                if text:
                    parts.append(text)
            return '\n'.join(parts)
        except Exception as e:
            # pypdf raises a wide range of parsing errors on damaged files
            raise ExtractionError(path, str(e)) from e

    def extract_spreadsheet_text(self, path: str) -> str:
        try:
            workbook = load_workbook(path, read_only=True, data_only=True)
        except Exception as e:
            raise ExtractionError(path, str(e)) from e

        try:
            cells = []
            for sheet in workbook.worksheets:
                for row in sheet.iter_rows(values_only=True):
                    for value in row:
                        if value is not None:
                            cells.append(str(value))
            return ' '.join(cells)
        except Exception as e:
            raise ExtractionError(path, str(e)) from e
        finally:
            workbook.close()

    def extract_xls_text(self, path: str) -> str:
        try:
            book = xlrd.open_workbook(path, on_demand=True)
        except Exception as e:
            raise ExtractionError(path, str(e)) from e

        try:
            cells = []
            for index in range(book.nsheets):
                sheet = book.sheet_by_index(index)
                for row in range(sheet.nrows):
                    for value in sheet.row_values(row):
                        if value not in (None, ''):
                            cells.append(str(value))
                book.unload_sheet(index)
            return ' '.join(cells)
        except Exception as e:
            raise ExtractionError(path, str(e)) from e
        finally:
            book.release_resources()
