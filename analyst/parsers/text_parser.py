"""
Plain Text Parser
"""

from typing import Dict, Any


class TextParser:
    """Parser for .txt uploads"""

    SUPPORTED_EXTENSIONS = {".txt"}

    def can_parse(self, extension: str) -> bool:
        """Check if this parser can handle the file extension"""
        return extension in self.SUPPORTED_EXTENSIONS

    def parse(self, content: bytes) -> Dict[str, Any]:
        """
        Decode text file bytes

        Undecodable bytes are dropped rather than failing the upload.

        Args:
            content: Raw file bytes

        Returns:
            Dict with content and metadata
        """
        return {
            "content": content.decode("utf-8", errors="ignore"),
            "metadata": {},
            "page_count": None,
        }
