"""
Retry Pending Documents Task
Periodic Celery task that re-enqueues documents still without chunks
"""

import logging
from datetime import datetime, timedelta, timezone
from sqlalchemy import and_
from sqlalchemy.orm import Session

from analyst.worker import celery_app
from analyst.database import SessionLocal
from analyst.models.document import Document
from analyst.models.chunk import DocumentChunk
from analyst.tasks.process_document import process_document_task

logger = logging.getLogger(__name__)

STUCK_THRESHOLD_MINUTES = 15  # Chunkless for longer than this counts as stuck
MAX_AGE_HOURS = 24  # Older uploads are left for a manual reprocess


def find_stuck_documents(db: Session, now: datetime = None):
    """Documents with a blob but no chunks, uploaded inside the retry window"""
    now = now or datetime.now(timezone.utc)
    stuck_threshold = now - timedelta(minutes=STUCK_THRESHOLD_MINUTES)
    oldest = now - timedelta(hours=MAX_AGE_HOURS)

    has_chunks = db.query(DocumentChunk.id).filter(
        DocumentChunk.document_id == Document.id
    ).exists()

    return db.query(Document).filter(
        and_(
            Document.storage_path.isnot(None),
            Document.uploaded_at < stuck_threshold,
            Document.uploaded_at >= oldest,
            ~has_chunks,
        )
    ).all()


@celery_app.task(name="retry_pending_documents")
def retry_pending_documents_task():
    """
    Periodic task to re-enqueue documents stuck in processing

    Catches uploads whose task never ran (broker outage, worker crash
    mid-run). Processing is idempotent, so a document that finishes
    in the meantime is harmless to enqueue again.
    """
    db: Session = SessionLocal()

    try:
        documents_to_retry = find_stuck_documents(db)

        if not documents_to_retry:
            logger.info("[Retry Task] No stuck documents found")
            return {"status": "success", "retried_count": 0}

        logger.info(f"[Retry Task] Found {len(documents_to_retry)} documents to retry")

        retried_count = 0
        for document in documents_to_retry:
            try:
                process_document_task.delay(str(document.id))
                retried_count += 1
                logger.info(f"[Retry Task] Re-enqueued document {document.id} ({document.file_name})")
            except Exception as e:
                logger.error(f"[Retry Task] Failed to re-enqueue document {document.id}: {e}", exc_info=True)

        return {
            "status": "success",
            "retried_count": retried_count,
            "total_found": len(documents_to_retry),
        }

    finally:
        db.close()
