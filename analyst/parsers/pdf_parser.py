"""
PDF Parser
Page-by-page text extraction with pypdfium2
"""

from typing import Dict, Any
import logging

import pypdfium2 as pdfium

from analyst.core.exceptions import ExtractionError

logger = logging.getLogger(__name__)


class PDFParser:
    """Parser for PDF uploads"""

    SUPPORTED_EXTENSIONS = {".pdf"}

    def can_parse(self, extension: str) -> bool:
        """Check if this parser can handle the file extension"""
        return extension in self.SUPPORTED_EXTENSIONS

    def parse(self, content: bytes) -> Dict[str, Any]:
        """
        Extract text from every page, concatenated in page order

        A page that fails to extract is logged and skipped. Only a PDF
        that cannot be opened at all raises.

        Args:
            content: Raw PDF bytes

        Returns:
            Dict with content and metadata

        Raises:
            ExtractionError: If the PDF cannot be opened
        """
        try:
            pdf = pdfium.PdfDocument(content)
        except pdfium.PdfiumError as e:
            raise ExtractionError(f"Failed to open PDF: {e}") from e

        try:
            page_count = len(pdf)
            text_parts = []
            failed_pages = 0

            for i in range(page_count):
                try:
                    page = pdf[i]
                    textpage = page.get_textpage()
                    text = textpage.get_text_bounded()
                except pdfium.PdfiumError as e:
                    failed_pages += 1
                    logger.warning(f"Skipping PDF page {i + 1}: {e}")
                    continue
                if text:
                    text_parts.append(text)

            content_text = "\n".join(text_parts)
            logger.info(
                f"PDF extraction: {len(content_text)} chars from {page_count} pages "
                f"({failed_pages} skipped)"
            )

            return {
                "content": content_text,
                "metadata": {
                    "failed_pages": failed_pages,
                    "extraction_method": "pypdfium2",
                },
                "page_count": page_count,
            }
        finally:
            pdf.close()
