"""Output generation for rosters (PDF)."""

from caferoster.output.pdf_generator import PDFGenerator

__all__ = [
    "PDFGenerator",
]
