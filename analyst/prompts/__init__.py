"""
Prompt construction for grounded answers and document comparison
"""

from analyst.prompts.base import PromptBuilder, COMPARISON_FOCUS, DEFAULT_COMPARISON_FOCUS, comparison_focus

__all__ = ["PromptBuilder", "COMPARISON_FOCUS", "DEFAULT_COMPARISON_FOCUS", "comparison_focus"]
