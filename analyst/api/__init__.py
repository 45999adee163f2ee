"""
API Routes and Endpoints

Routers:
    - users: Current user profile
    - comparison: Multi-document comparison
    - documents: Document upload, CRUD, status, reprocessing
    - chat: Per-document conversation
"""

from analyst.api import users, comparison, documents, chat

__all__ = ["users", "comparison", "documents", "chat"]
