"""Notification Dispatcher: review decisions -> artist emails

Events reach the dispatcher only after the status update has committed.
Delivery runs later (FastAPI background task or Celery worker), so nothing
here can undo or delay a transition.
"""

import logging
from typing import Callable, Iterable, Optional

from fastapi import BackgroundTasks
from sqlalchemy.orm import Session

from ..db.database import SessionLocal
from ..domain.enums import EmailKind, SubmissionStatus
from ..domain.events.submission_events import SubmissionReviewed
from ..infrastructure.external_services.email_service import EmailResult, EmailService
from ..infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl

logger = logging.getLogger(__name__)

QUEUE_BACKGROUND = "background"
QUEUE_CELERY = "celery"


class NotificationDispatcher:

    def __init__(
        self,
        email_service: EmailService,
        session_factory: Callable[[], Session] = SessionLocal,
        queue: str = QUEUE_BACKGROUND,
    ):
        self.email_service = email_service
        self.session_factory = session_factory
        self.queue = queue

    def publish(self, events: Iterable, background_tasks: Optional[BackgroundTasks] = None) -> None:
        """Schedule delivery for every review decision in ``events``"""
        for event in events:
            if not isinstance(event, SubmissionReviewed):
                continue
            if self.queue == QUEUE_CELERY and self._enqueue(event):
                continue
            if background_tasks is not None:
                background_tasks.add_task(self.handle, event)
            else:
                logger.error("No queue available for notification of submission %s", event.submission_id)

    def _enqueue(self, event: SubmissionReviewed) -> bool:
        from ..tasks import send_review_notification_task

        try:
            send_review_notification_task.delay(event.to_payload())
        except Exception as e:
            logger.error("Could not enqueue notification for %s, running in-process: %s", event.submission_id, e)
            return False
        return True

    async def handle(self, event: SubmissionReviewed) -> Optional[EmailResult]:
        """Send the decision email and record the outcome; never raises"""
        kind = EmailKind.APPROVAL if event.status == SubmissionStatus.APPROVED else EmailKind.REJECTION
        try:
            result = await self.email_service.send(kind, event.artist_email, {
                "artist_name": event.artist_name,
                "submission_id": str(event.submission_id),
                "feedback": event.feedback,
                "admin_notes": event.admin_notes,
            })
        except Exception:
            logger.exception("Notification for submission %s failed", event.submission_id)
            return None

        if not result.success:
            logger.warning("Decision email for %s not delivered: %s", event.submission_id, result.error)

        try:
            await self._record(event, result)
        except Exception:
            logger.exception("Could not record email outcome for submission %s", event.submission_id)
        return result

    async def _record(self, event: SubmissionReviewed, result: EmailResult) -> None:
        session = self.session_factory()
        try:
            unit_of_work = UnitOfWorkImpl(session)
            async with unit_of_work:
                recorded = await unit_of_work.submissions.record_email(
                    event.submission_id,
                    result.success,
                    message_id=result.message_id,
                    method=result.method,
                    error=result.error,
                    feedback=event.feedback if result.success else None,
                )
                await unit_of_work.commit()
            if not recorded:
                logger.info("Submission %s deleted before its email was recorded", event.submission_id)
        finally:
            session.close()
