"""
Document Parsers
Factory pattern for selecting a parser by file extension
"""

import logging
import os

from analyst.parsers.pdf_parser import PDFParser
from analyst.parsers.text_parser import TextParser

logger = logging.getLogger(__name__)


class ParserFactory:
    """Factory for selecting appropriate parser based on file extension"""

    def __init__(self):
        self.parsers = [
            PDFParser(),
            TextParser(),
        ]

    def get_parser(self, file_name: str):
        """
        Get parser for a filename

        Args:
            file_name: Original filename (extension is matched case-insensitively)

        Returns:
            Parser instance, or None when no parser handles the extension
        """
        extension = os.path.splitext(file_name)[1].lower()
        for parser in self.parsers:
            if parser.can_parse(extension):
                return parser
        return None

    def extract_text(self, file_name: str, content: bytes) -> str:
        """
        Extract text from file bytes

        Unsupported extensions yield an empty string.

        Raises:
            ExtractionError: If a supported file is unreadable
        """
        parser = self.get_parser(file_name)
        if parser is None:
            logger.info(f"No parser for {file_name}, extracted text is empty")
            return ""
        return parser.parse(content)["content"]


__all__ = [
    "ParserFactory",
    "PDFParser",
    "TextParser",
]
