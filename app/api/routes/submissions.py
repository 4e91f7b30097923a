"""Submission routes: creation, track upload, listings and review decisions"""

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Query, UploadFile, status

from ...api.dependencies import (
    get_current_user, get_notification_dispatcher, get_storage_service, get_unit_of_work,
    require_admin, require_artist
)
from ...application.dtos.submission_dtos import (
    CreateSubmissionRequest, CreateSubmissionResponse, MessageResponse, StatusUpdateRequest,
    StatusUpdateResponse, SubmissionListResponse, SubmissionResponse, SubmissionSummary,
    TrackResponse, UploadTrackResponse
)
from ...application.notifications import NotificationDispatcher
from ...application.use_cases.create_submission import CreateSubmissionUseCase
from ...application.use_cases.delete_submission import DeleteSubmissionUseCase
from ...application.use_cases.get_submission import GetSubmissionUseCase, ListSubmissionsUseCase, sign_track_urls
from ...application.use_cases.update_submission_status import UpdateSubmissionStatusUseCase
from ...application.use_cases.upload_track import UploadTrackUseCase
from ...core.config import settings
from ...domain.entities.user import User
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...infrastructure.external_services.storage_service import StorageService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/create", response_model=CreateSubmissionResponse, status_code=status.HTTP_201_CREATED)
async def create_submission(
    request: CreateSubmissionRequest,
    artist: User = Depends(require_artist),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Open a new pending submission"""
    use_case = CreateSubmissionUseCase(unit_of_work)
    submission = await use_case.execute(artist, request.title, request.description or "")
    return CreateSubmissionResponse(
        submission_id=str(submission.id),
        submission=SubmissionResponse.from_entity(submission)
    )


@router.post("/upload/{submission_id}", response_model=UploadTrackResponse)
async def upload_track(
    submission_id: str,
    track: Optional[UploadFile] = File(None),
    track_title: Optional[str] = Form(None, alias="trackTitle"),
    genre: Optional[str] = Form(None),
    bpm: Optional[str] = Form(None),
    track_key: Optional[str] = Form(None, alias="trackKey"),
    track_description: Optional[str] = Form(None, alias="trackDescription"),
    artist: User = Depends(require_artist),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    storage_service: StorageService = Depends(get_storage_service)
):
    """Stream one audio file into the blob store and attach it to the submission"""
    use_case = UploadTrackUseCase(
        unit_of_work,
        storage_service,
        max_size=settings.MAX_TRACK_SIZE,
        allowed_extensions=settings.ALLOWED_TRACK_EXTENSIONS,
        chunk_size=settings.UPLOAD_CHUNK_SIZE,
        idle_timeout=settings.UPLOAD_IDLE_TIMEOUT_SECONDS,
    )
    new_track, submission = await use_case.execute(
        submission_id,
        artist,
        track,
        title=track_title,
        genre=genre,
        bpm=bpm,
        key=track_key,
        description=track_description,
    )
    return UploadTrackResponse(
        track=TrackResponse.from_entity(new_track),
        submission=SubmissionSummary(id=str(submission.id), total_tracks=submission.total_tracks)
    )


@router.get("/my-submissions", response_model=SubmissionListResponse)
async def my_submissions(
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(10),
    offset: int = Query(0),
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    storage_service: StorageService = Depends(get_storage_service)
):
    """The caller's own submissions, newest first"""
    use_case = ListSubmissionsUseCase(unit_of_work)
    submissions, total, has_more = await use_case.execute(
        current_user, status=status_filter, limit=limit, offset=offset
    )
    await sign_track_urls(submissions, storage_service)
    return SubmissionListResponse(
        submissions=[SubmissionResponse.from_entity(s) for s in submissions],
        total=total,
        has_more=has_more
    )


@router.get("/admin/all", response_model=SubmissionListResponse)
async def all_submissions(
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(50),
    offset: int = Query(0),
    admin: User = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    storage_service: StorageService = Depends(get_storage_service)
):
    """Every submission in the system (admin only)"""
    use_case = ListSubmissionsUseCase(unit_of_work)
    submissions, total, has_more = await use_case.execute(
        admin, status=status_filter, limit=limit, offset=offset, scope_to_owner=False
    )
    await sign_track_urls(submissions, storage_service)
    return SubmissionListResponse(
        submissions=[SubmissionResponse.from_entity(s, include_internal=True) for s in submissions],
        total=total,
        has_more=has_more
    )


@router.put("/admin/{submission_id}/status", response_model=StatusUpdateResponse)
async def update_submission_status(
    submission_id: str,
    request: StatusUpdateRequest,
    background_tasks: BackgroundTasks,
    admin: User = Depends(require_admin),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    storage_service: StorageService = Depends(get_storage_service),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher)
):
    """Move a submission through the review workflow"""
    use_case = UpdateSubmissionStatusUseCase(unit_of_work, lock_decisions=settings.LOCK_REVIEWED_SUBMISSIONS)
    submission, events = await use_case.execute(
        submission_id,
        admin,
        request.status,
        review_score=request.review_score,
        review_notes=request.review_notes,
        admin_notes=request.admin_notes,
    )
    # The transition is committed; email delivery happens after the response
    dispatcher.publish(events, background_tasks)
    await sign_track_urls([submission], storage_service)
    return StatusUpdateResponse(submission=SubmissionResponse.from_entity(submission, include_internal=True))


@router.get("/{submission_id}", response_model=SubmissionResponse)
async def get_submission(
    submission_id: str,
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    storage_service: StorageService = Depends(get_storage_service)
):
    """One submission, visible to its owner and to admins"""
    use_case = GetSubmissionUseCase(unit_of_work)
    submission = await use_case.execute(submission_id, current_user)
    await sign_track_urls([submission], storage_service)
    return SubmissionResponse.from_entity(submission, include_internal=current_user.is_admin)


@router.delete("/{submission_id}", response_model=MessageResponse)
async def delete_submission(
    submission_id: str,
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    storage_service: StorageService = Depends(get_storage_service)
):
    """Delete a pending submission and its stored tracks"""
    use_case = DeleteSubmissionUseCase(unit_of_work, storage_service)
    await use_case.execute(submission_id, current_user)
    return MessageResponse(message="Submission deleted successfully")
