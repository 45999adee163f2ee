"""
Prompt Builder - Grounded prompts rendered from Jinja2 templates
"""

from pathlib import Path
from typing import List, Sequence
from jinja2 import Environment, FileSystemLoader, StrictUndefined

# Focus line injected into comparison prompts, keyed by compare_type
COMPARISON_FOCUS = {
    "summary": "Provide a high-level comparison summary",
    "detailed": "Provide detailed analysis with specific examples",
    "themes": "Identify and compare major themes across documents",
    "differences": "Highlight key differences and contrasts",
}
DEFAULT_COMPARISON_FOCUS = "Provide comprehensive comparison analysis"


class PromptBuilder:
    """
    Builds the two prompt kinds the analyst sends to the model:

    - document answer: every chunk of one document, then the user's question
    - document comparison: the first chunks of each document, then the
      SUMMARY / SIMILARITIES / DIFFERENCES / KEY_THEMES / INSIGHTS format

    Output is plain text, so autoescaping stays off.
    """

    def __init__(self):
        templates_dir = Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

    def build_answer_prompt(self, query: str, chunks: Sequence[str], document_name: str) -> str:
        """
        Build the grounded question-answer prompt

        All chunks are included, labelled by position starting at 1.
        """
        template = self.env.get_template("document_answer.jinja2")
        return template.render(
            query=query,
            chunks=list(chunks),
            document_name=document_name,
        )

    def build_comparison_prompt(
        self,
        document_names: Sequence[str],
        chunk_texts: Sequence[Sequence[str]],
        compare_type: str,
        max_chunks_per_document: int = 10,
    ) -> str:
        """
        Build the multi-document comparison prompt

        Unknown compare types get the comprehensive focus instead of an error.
        """
        documents: List[dict] = [
            {"name": name, "chunks": list(chunks)[:max_chunks_per_document]}
            for name, chunks in zip(document_names, chunk_texts)
        ]
        template = self.env.get_template("document_comparison.jinja2")
        return template.render(
            focus=comparison_focus(compare_type),
            documents=documents,
        )


def comparison_focus(compare_type: str) -> str:
    return COMPARISON_FOCUS.get((compare_type or "").lower(), DEFAULT_COMPARISON_FOCUS)
