"""Tools module - PDF loading and HTML reports."""

from __future__ import annotations

from policyextract.tools.html import HTMLTool
from policyextract.tools.pdf import PDFTool


__all__ = ["HTMLTool", "PDFTool"]
