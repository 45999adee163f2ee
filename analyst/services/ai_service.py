"""
AI Service - Grounded answers and document comparison via LiteLLM
Supports 100+ model providers through the provider/model string
"""

import logging
import re
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Sequence

import litellm
from litellm import acompletion

from analyst.config import settings
from analyst.core.exceptions import AIServiceError, AIServiceUnavailableError
from analyst.models.document import Document
from analyst.prompts import PromptBuilder
from analyst.schemas.comparison import DocumentComparison
from analyst.schemas.document import DocumentResponse
from analyst.utils.retry import retry_on_api_error
from analyst.utils.sanitize import sanitize_string

# Configure litellm to automatically drop unsupported parameters
litellm.drop_params = True

logger = logging.getLogger(__name__)

DEFAULT_COMPARISON_SUMMARY = (
    "Document comparison completed. Please review the detailed analysis below."
)

# One leading bullet; "*" only when spaced, so markdown bold ("**Cost**") survives
LEADING_BULLET = re.compile(r"^(?:[-•]|\*(?=\s|$))\s*")


class ComparisonSection(str, Enum):
    """Section of a comparison answer the parser is currently filling"""
    SUMMARY = "SUMMARY"
    SIMILARITIES = "SIMILARITIES"
    DIFFERENCES = "DIFFERENCES"
    KEY_THEMES = "KEY_THEMES"
    INSIGHTS = "INSIGHTS"

    @property
    def marker(self) -> str:
        return f"{self.value}:"


class AIService:
    """
    Thin gateway around the chat model

    Without an API key the service still constructs, but every
    generation call raises AIServiceUnavailableError.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        prompt_builder: Optional[PromptBuilder] = None,
    ):
        self.api_key = settings.LLM_API_KEY if api_key is None else api_key
        self.model = model or settings.LLM_MODEL_STRING or f"{settings.LLM_PROVIDER}/{settings.CHAT_MODEL}"
        self.prompt_builder = prompt_builder or PromptBuilder()

        if self.is_configured():
            logger.info(f"AI service using model: {self.model}")
        else:
            logger.error("LLM_API_KEY is not set, chat and comparison are disabled")

    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def generate_answer(
        self,
        query: str,
        chunk_texts: Sequence[str],
        document_name: str,
    ) -> str:
        """
        Answer a question from one document's chunks

        Args:
            query: User question
            chunk_texts: Every chunk of the document, in index order
            document_name: Shown to the model as the document title

        Returns:
            Answer text

        Raises:
            AIServiceUnavailableError: No API key configured
            AIServiceError: Model call failed or returned nothing
        """
        if not self.is_configured():
            raise AIServiceUnavailableError()

        prompt = self.prompt_builder.build_answer_prompt(query, chunk_texts, document_name)
        logger.info(f"Generating answer for '{document_name}' from {len(chunk_texts)} chunks")

        answer = await self._complete(
            prompt,
            temperature=settings.CHAT_TEMPERATURE,
            max_tokens=settings.CHAT_MAX_TOKENS,
        )
        if not answer.strip():
            raise AIServiceError("no response generated")
        return answer

    async def compare_documents(
        self,
        documents: Sequence[Document],
        chunk_texts: Sequence[Sequence[str]],
        compare_type: str,
    ) -> DocumentComparison:
        """
        Compare several documents

        Args:
            documents: Documents in the order they were requested
            chunk_texts: Chunk texts per document (same order)
            compare_type: summary, detailed, themes or differences

        Returns:
            Parsed comparison

        Raises:
            AIServiceUnavailableError: No API key configured
            AIServiceError: Model call failed or returned nothing
        """
        if not self.is_configured():
            raise AIServiceUnavailableError()

        prompt = self.prompt_builder.build_comparison_prompt(
            [document.file_name for document in documents],
            chunk_texts,
            compare_type,
            max_chunks_per_document=settings.COMPARE_MAX_CHUNKS_PER_DOCUMENT,
        )
        logger.info(f"Comparing {len(documents)} documents (type={compare_type})")

        text = await self._complete(
            prompt,
            temperature=settings.COMPARE_TEMPERATURE,
            max_tokens=settings.COMPARE_MAX_TOKENS,
        )
        if not text.strip():
            raise AIServiceError("no comparison generated")
        return parse_comparison_response(text, documents)

    async def _complete(self, prompt: str, temperature: float, max_tokens: int) -> str:
        try:
            return await self._call_model(prompt, temperature, max_tokens)
        except Exception as e:
            logger.error(f"LLM call failed: {sanitize_string(str(e))}")
            raise AIServiceError(f"failed to generate content: {sanitize_string(str(e))}") from e

    @retry_on_api_error()
    async def _call_model(self, prompt: str, temperature: float, max_tokens: int) -> str:
        litellm_kwargs = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "max_tokens": max_tokens,
            "timeout": settings.LLM_TIMEOUT,
            "api_key": self.api_key,
        }
        if settings.LLM_API_BASE:
            litellm_kwargs["api_base"] = settings.LLM_API_BASE

        response = await acompletion(**litellm_kwargs)
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


def parse_comparison_response(
    text: str,
    documents: Sequence[Document] = (),
) -> DocumentComparison:
    """
    Parse a marker-delimited comparison answer

    Lines are scanned in order. A line starting with one of the section
    markers (case-insensitive) switches the current section. Lines in a
    list section lose their leading bullet and become items. Lines before
    any marker, and lines in the SUMMARY section, are space-joined into the
    summary. Format deviations never raise.
    """
    summary_parts: List[str] = []
    buckets = {
        ComparisonSection.SIMILARITIES: [],
        ComparisonSection.DIFFERENCES: [],
        ComparisonSection.KEY_THEMES: [],
        ComparisonSection.INSIGHTS: [],
    }
    current = ComparisonSection.SUMMARY

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        section = _match_marker(line)
        if section is not None:
            current = section
            line = line[len(section.marker):].strip()
            if not line:
                continue

        if current is ComparisonSection.SUMMARY:
            summary_parts.append(line)
            continue

        item = LEADING_BULLET.sub("", line, count=1).strip()
        if item:
            buckets[current].append(item)

    summary = " ".join(summary_parts).strip() or DEFAULT_COMPARISON_SUMMARY

    return DocumentComparison(
        documents=[DocumentResponse.model_validate(document) for document in documents],
        summary=summary,
        similarities=buckets[ComparisonSection.SIMILARITIES],
        differences=buckets[ComparisonSection.DIFFERENCES],
        key_themes=buckets[ComparisonSection.KEY_THEMES],
        insights=buckets[ComparisonSection.INSIGHTS],
        compared_at=datetime.now(timezone.utc),
    )


def _match_marker(line: str) -> Optional[ComparisonSection]:
    upper = line.upper()
    for section in ComparisonSection:
        if upper.startswith(section.marker):
            return section
    return None
