"""Submission endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth.service import RoleChecker, any_role, admin_only, student_only
from ..database import get_db
from ..models import User, Role, Step, Level
from ..notifications import EmailNotifier, get_notifier
from .schemas import SubmissionCreate, SubmissionUpdate, SubmissionResponse
from .service import SubmissionService

router = APIRouter(prefix="/submissions", tags=["Submissions"])

student_or_supervisor = RoleChecker(Role.STUDENT, Role.SUPERVISOR)
supervisor_or_admin = RoleChecker(Role.SUPERVISOR, Role.ADMIN)


def get_submission_service(
    db: Session = Depends(get_db),
    notifier: EmailNotifier = Depends(get_notifier),
) -> SubmissionService:
    return SubmissionService(db, notifier)


@router.post("", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
async def create_submission(
    data: SubmissionCreate,
    current_user: User = Depends(student_only),
    service: SubmissionService = Depends(get_submission_service),
):
    """Start a step, replacing a graded earlier attempt at the same step."""
    return service.create_submission(current_user.id, data)


@router.get("", response_model=list[SubmissionResponse])
async def list_submissions(
    step: Optional[Step] = None,
    level: Optional[Level] = None,
    current_user: User = Depends(any_role),
    service: SubmissionService = Depends(get_submission_service),
):
    return service.list_submissions(current_user, step=step, level=level)


@router.get("/{submission_id}", response_model=SubmissionResponse)
async def get_submission(
    submission_id: str,
    current_user: User = Depends(admin_only),
    service: SubmissionService = Depends(get_submission_service),
):
    return service.get_submission(submission_id)


@router.patch("/{submission_id}", response_model=SubmissionResponse)
async def update_submission(
    submission_id: str,
    data: SubmissionUpdate,
    current_user: User = Depends(student_or_supervisor),
    service: SubmissionService = Depends(get_submission_service),
):
    """Students append answers; supervisors mark answers and get the level computed."""
    return service.update_submission(submission_id, current_user, data)


@router.delete("/{submission_id}")
async def delete_submission(
    submission_id: str,
    current_user: User = Depends(supervisor_or_admin),
    service: SubmissionService = Depends(get_submission_service),
):
    service.delete_submission(submission_id)
    return {"message": "Submission deleted successfully"}


@router.post("/{submission_id}/certificate")
async def send_certificate(
    submission_id: str,
    current_user: User = Depends(student_only),
    service: SubmissionService = Depends(get_submission_service),
):
    """Email the certificate for a passing submission to its owner."""
    service.send_certificate(submission_id, current_user)
    return {"message": "Certificate sent successfully"}
