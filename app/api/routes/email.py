"""Email routes: decision (re)sends, receipts, archive and history"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...api.dependencies import get_email_service, get_unit_of_work, require_admin, require_artist
from ...application.dtos.email_dtos import (
    ConfirmationEmailRequest, EmailDecisionRequest, EmailHistory, EmailHistoryResponse,
    EmailSendResponse, StoredEmailsResponse
)
from ...application.use_cases.send_email import (
    GetEmailHistoryUseCase, SendConfirmationEmailUseCase, SendDecisionEmailUseCase
)
from ...domain.entities.user import User
from ...domain.enums import SubmissionStatus
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...infrastructure.external_services.email_service import EmailResult, EmailService

router = APIRouter()


def _respond(result: EmailResult, label: str):
    if result.success:
        return EmailSendResponse(
            success=True,
            message=f"{label} sent successfully ({result.method})",
            message_id=result.message_id,
            method=result.method,
            sent_to=result.sent_to
        )
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": f"Failed to send {label.lower()}", "details": result.error}
    )


@router.post("/test", response_model=EmailSendResponse)
async def test_email(
    admin: User = Depends(require_admin),
    email_service: EmailService = Depends(get_email_service)
):
    """Send a test message to the configured test address"""
    result = await email_service.send_test_email()
    return _respond(result, "Test email")


@router.post("/approve", response_model=EmailSendResponse)
async def send_approval_email(
    request: EmailDecisionRequest,
    admin: User = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    email_service: EmailService = Depends(get_email_service)
):
    use_case = SendDecisionEmailUseCase(unit_of_work, email_service)
    result = await use_case.execute(
        SubmissionStatus.APPROVED, request.submission_id, request.feedback, request.admin_notes
    )
    return _respond(result, "Approval email")


@router.post("/reject", response_model=EmailSendResponse)
async def send_rejection_email(
    request: EmailDecisionRequest,
    admin: User = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    email_service: EmailService = Depends(get_email_service)
):
    use_case = SendDecisionEmailUseCase(unit_of_work, email_service)
    result = await use_case.execute(
        SubmissionStatus.REJECTED, request.submission_id, request.feedback, request.admin_notes
    )
    return _respond(result, "Rejection email")


@router.post("/confirmation", response_model=EmailSendResponse)
async def send_confirmation_email(
    request: ConfirmationEmailRequest,
    artist: User = Depends(require_artist),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    email_service: EmailService = Depends(get_email_service)
):
    """Receipt for the owning artist"""
    use_case = SendConfirmationEmailUseCase(unit_of_work, email_service)
    result = await use_case.execute(request.submission_id, artist)
    return _respond(result, "Confirmation email")


@router.get("/stored", response_model=StoredEmailsResponse)
async def stored_emails(
    admin: User = Depends(require_admin),
    email_service: EmailService = Depends(get_email_service)
):
    """Archived payloads, newest first"""
    return StoredEmailsResponse(emails=await email_service.stored_emails())


@router.get("/history/{submission_id}", response_model=EmailHistoryResponse)
async def email_history(
    submission_id: str,
    admin: User = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    submission = await GetEmailHistoryUseCase(unit_of_work).execute(submission_id)
    return EmailHistoryResponse(
        email_history=EmailHistory(
            email_sent=submission.email_sent,
            email_sent_at=submission.email_sent_at,
            email_message_id=submission.email_message_id,
            email_method=submission.email_method or "unknown",
            email_error=submission.email_error,
            status=submission.status.value,
            feedback=submission.feedback,
            admin_notes=submission.admin_notes
        )
    )
