"""
Celery Tasks
Background document processing
"""

from analyst.tasks.process_document import process_document_task, DocumentProcessor

__all__ = ["process_document_task", "DocumentProcessor"]
