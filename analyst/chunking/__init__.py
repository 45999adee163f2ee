"""
Text Chunking System
Fixed-size chunking on word boundaries
"""

from analyst.chunking.word_chunker import WordChunker

__all__ = ["WordChunker"]
