"""
Word Chunker - Fixed-size chunking on word boundaries

Text is split into chunks of at most chunk_size characters without ever
cutting a word. Whitespace runs collapse to a single space, so joining
the chunks with spaces reproduces the original word sequence.
"""

from typing import List
import logging

from analyst.config import settings

logger = logging.getLogger(__name__)


class WordChunker:
    """Greedy word-boundary chunker"""

    def __init__(self, chunk_size: int = settings.CHUNK_SIZE):
        """
        Args:
            chunk_size: Maximum characters per chunk (default from settings)
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.chunk_size = chunk_size

    def chunk(self, text: str) -> List[str]:
        """
        Split text into ordered chunks

        Text that already fits is returned unchanged as a single chunk.
        A single word longer than chunk_size becomes its own chunk.

        Args:
            text: Extracted document text

        Returns:
            List of chunk strings in document order
        """
        if len(text) <= self.chunk_size:
            return [text]

        chunks = []
        current: List[str] = []
        current_length = 0

        for word in text.split():
            if current and current_length + len(word) + 1 > self.chunk_size:
                chunks.append(" ".join(current))
                current = []
                current_length = 0

            if current:
                current_length += 1
            current.append(word)
            current_length += len(word)

        if current:
            chunks.append(" ".join(current))

        logger.debug(f"Chunked {len(text)} chars into {len(chunks)} chunks (size={self.chunk_size})")
        return chunks
