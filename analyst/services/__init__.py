"""
Business Logic Services

Includes:
- DocumentService: Ownership-checked document repository
- AIService: Grounded answers and comparison via LiteLLM
- ChatService: Per-document conversation
- ComparisonService: Multi-document comparison
- get_or_create_user: Lazy user creation
"""

# Lazy imports to avoid circular dependencies
# Import services directly from their modules instead

__all__ = [
    "DocumentService",
    "AIService",
    "ChatService",
    "ComparisonService",
    "get_or_create_user",
]
