from datetime import datetime, timedelta
from typing import Optional

from ..models import ExamConfig, Submission
from ..utils import utcnow


def deadline_for(submission: Submission, config: ExamConfig) -> datetime:
    return submission.created_at + timedelta(minutes=config.exam_length_in_minutes)


def is_expired(submission: Submission, config: ExamConfig, now: Optional[datetime] = None) -> bool:
    """True once the exam window that opened at submission creation has closed.

    Always evaluated against the current config, which may have changed since
    the submission was created.
    """
    now = now or utcnow()
    return now > deadline_for(submission, config)
