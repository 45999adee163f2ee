"""
Celery worker configuration
Task queue for background document processing
"""

from celery import Celery
from analyst.config import settings

celery_app = Celery(
    "analyst",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=[
        "analyst.tasks.process_document",
        "analyst.tasks.retry_pending_documents"
    ]
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    # Processing runs detached from the upload request, with its own deadline
    task_time_limit=settings.PROCESSING_TASK_TIME_LIMIT,
    task_soft_time_limit=settings.PROCESSING_TASK_TIME_LIMIT - 60,
    task_always_eager=settings.CELERY_TASK_ALWAYS_EAGER,
    worker_max_tasks_per_child=1000,
    worker_prefetch_multiplier=4,
)

# Celery Beat schedule for periodic tasks
celery_app.conf.beat_schedule = {
    'retry-pending-documents': {
        'task': 'retry_pending_documents',
        'schedule': 600.0,  # Every 10 minutes
        'options': {
            'expires': 300.0,
        }
    },
}
