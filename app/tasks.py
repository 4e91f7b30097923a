import asyncio
import logging

from .celery_app import celery_app
from .application.notifications import NotificationDispatcher
from .domain.events.submission_events import SubmissionReviewed
from .infrastructure.external_services.email_service import EmailService

logger = logging.getLogger(__name__)


@celery_app.task(name="app.tasks.send_review_notification")
def send_review_notification_task(payload: dict):
    """Deliver one review decision email from a worker process."""
    event = SubmissionReviewed.from_payload(payload)
    dispatcher = NotificationDispatcher(EmailService())
    result = asyncio.run(dispatcher.handle(event))

    if result is None or not result.success:
        logger.warning(f"Review notification for submission {event.submission_id} was not delivered")
        return {"success": False, "submission_id": str(event.submission_id)}

    logger.info(f"Review notification sent for submission {event.submission_id} via {result.method}")
    return {"success": True, "submission_id": str(event.submission_id), "method": result.method}
