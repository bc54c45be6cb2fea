"""PDF loading tool."""

from __future__ import annotations

import logging
from pathlib import Path

import fitz  # PyMuPDF

from policyextract.core.errors import DocumentLoadError
from policyextract.core.models import Document


logger = logging.getLogger(__name__)


class PDFTool:
    """Loads a PDF as raw bytes plus its page text."""

    name = "pdf_loader"

    def load(self, pdf_path: str | Path) -> Document:
        """Load a PDF file.

        Args:
            pdf_path: Path to the PDF file.

        Returns:
            Document with the file bytes, page count and page text.

        Raises:
            DocumentLoadError: If the file is missing or is not a readable PDF.
        """
        path = Path(pdf_path)
        if not path.exists():
            msg = f"PDF file not found: {pdf_path}"
            raise DocumentLoadError(msg)
        data = path.read_bytes()
        return self.load_bytes(data, name=path.name)

    def load_bytes(self, data: bytes, name: str = "document.pdf") -> Document:
        """Build a Document from an in-memory PDF byte stream."""
        try:
            with fitz.open(stream=data, filetype="pdf") as doc:
                pages = [self._page_text(doc[i], i) for i in range(len(doc))]
                page_count = len(doc)
        except (fitz.FileDataError, RuntimeError, ValueError) as e:
            logger.exception("Failed to load PDF: %s", name)
            msg = f"Failed to load PDF {name}: {e}"
            raise DocumentLoadError(msg) from e
        return Document(name=name, data=data, page_count=page_count, text="\n\n".join(pages))

    def _page_text(self, page: fitz.Page, index: int) -> str:
        logger.debug("Extracted text of page %d", index + 1)
        return f"=== PAGE {index + 1} ===\n{page.get_text().strip()}"
