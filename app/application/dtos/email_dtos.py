"""Email DTOs"""

from datetime import datetime
from typing import List, Optional

from .submission_dtos import CamelModel


class EmailDecisionRequest(CamelModel):
    submission_id: Optional[str] = None
    feedback: Optional[str] = None
    admin_notes: Optional[str] = None


class ConfirmationEmailRequest(CamelModel):
    submission_id: Optional[str] = None


class EmailSendResponse(CamelModel):
    success: bool
    message: str
    message_id: Optional[str] = None
    method: Optional[str] = None
    sent_to: Optional[str] = None


class StoredEmailsResponse(CamelModel):
    success: bool = True
    emails: List[dict]


class EmailHistory(CamelModel):
    email_sent: bool
    email_sent_at: Optional[datetime] = None
    email_message_id: Optional[str] = None
    email_method: str = "unknown"
    email_error: Optional[str] = None
    status: str
    feedback: str = ""
    admin_notes: str = ""


class EmailHistoryResponse(CamelModel):
    success: bool = True
    email_history: EmailHistory
