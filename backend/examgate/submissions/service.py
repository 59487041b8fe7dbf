"""Submission lifecycle: step eligibility, retakes, student edits and supervisor grading."""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from ..database import atomic
from ..errors import BadRequestError, ForbiddenError, NotFoundError
from ..exam_config.service import ExamConfigService
from ..models import Submission, User, Step, Level
from ..notifications import CertificateNotice, EmailNotifier
from .deadline import is_expired
from .grading import compute_level
from .schemas import SubmissionCreate, SubmissionUpdate, QuestionAnswer

logger = logging.getLogger(__name__)

# Step that must be passed with READY_TO_PROCEED before a step can be taken
PREREQUISITE_STEP = {
    Step.B: Step.A,
    Step.C: Step.B,
}

LEVEL_LABELS = {
    Level.FAIL: "Fail",
    Level.ONE: "Level 1",
    Level.TWO: "Level 2",
    Level.READY_TO_PROCEED: "Ready to proceed",
}


def _dump_answers(answers: list[QuestionAnswer]) -> list[dict]:
    return [answer.model_dump() for answer in answers]


def _has_self_grading(answers: Optional[list[QuestionAnswer]]) -> bool:
    return any(answer.correct for answer in answers or [])


class SubmissionService:
    def __init__(self, db: Session, notifier: Optional[EmailNotifier] = None):
        self.db = db
        self.notifier = notifier or EmailNotifier()

    def get_submission(self, submission_id: str, for_update: bool = False) -> Submission:
        query = self.db.query(Submission).filter(Submission.id == submission_id)
        if for_update:
            query = query.with_for_update()
        submission = query.first()
        if submission is None:
            raise NotFoundError("Submission not found")
        return submission

    def find_for_step(self, student_id: str, step: Step, for_update: bool = False) -> Optional[Submission]:
        query = self.db.query(Submission).filter(
            Submission.submitted_by_id == student_id, Submission.step == step
        )
        if for_update:
            query = query.with_for_update()
        return query.first()

    def list_submissions(
        self,
        actor: User,
        step: Optional[Step] = None,
        level: Optional[Level] = None,
    ) -> list[Submission]:
        """List submissions; students only ever see their own."""
        query = self.db.query(Submission)
        if actor.is_student:
            query = query.filter(Submission.submitted_by_id == actor.id)
        if step is not None:
            query = query.filter(Submission.step == step)
        if level is not None:
            query = query.filter(Submission.level == level)
        return query.order_by(Submission.created_at.desc()).all()

    def create_submission(self, student_id: str, data: SubmissionCreate) -> Submission:
        """Start (or retake) a step.

        A retake replaces the student's record for that step. The eligibility
        read, the delete and the create commit together; if the create fails the
        previous record is kept. Losing a race against a concurrent attempt at
        the same step is reported like any other premature resubmission.
        """
        if _has_self_grading(data.questions_and_answers):
            raise ForbiddenError("Students cannot grade their own answers")

        try:
            with atomic(self.db):
                existing = self.find_for_step(student_id, data.step, for_update=True)
                self._check_eligibility(student_id, data.step, existing)
                if existing is not None:
                    self.db.delete(existing)
                    # Delete must reach the database before the insert hits the unique constraint
                    self.db.flush()
                submission = Submission(
                    submitted_by_id=student_id,
                    step=data.step,
                    questions_and_answers=_dump_answers(data.questions_and_answers),
                )
                self.db.add(submission)
        except (IntegrityError, StaleDataError) as e:
            logger.warning(f"Concurrent attempt at step {data.step.value} for student {student_id}: {e}")
            raise BadRequestError("You cannot resubmit before evaluation") from e

        if existing is not None:
            logger.info(f"Student {student_id} retook step {data.step.value}")
        else:
            logger.info(f"Student {student_id} started step {data.step.value}")
        return submission

    def _check_eligibility(self, student_id: str, step: Step, existing: Optional[Submission]) -> None:
        if existing is not None and existing.level is None:
            raise BadRequestError("You cannot resubmit before evaluation")
        if step == Step.A and existing is not None and existing.level == Level.FAIL:
            raise BadRequestError(
                "You cannot resubmit after failing step A. "
                "Contact your instructor for further assistance."
            )
        prerequisite = PREREQUISITE_STEP.get(step)
        if prerequisite is not None:
            previous = self.find_for_step(student_id, prerequisite)
            if previous is None or previous.level != Level.READY_TO_PROCEED:
                raise BadRequestError(
                    f"You are not eligible to submit step {step.value}. Please ensure you have "
                    f"completed step {prerequisite.value} with ready to proceed level."
                )

    def update_submission(self, submission_id: str, actor: User, data: SubmissionUpdate) -> Submission:
        """Apply a student's answers or a supervisor's corrections."""
        with atomic(self.db):
            submission = self.get_submission(submission_id, for_update=True)
            if actor.is_student:
                self._apply_student_update(submission, actor, data)
            elif actor.is_supervisor:
                self._apply_grading(submission, actor, data)
            else:
                raise ForbiddenError("You do not have permission to update this submission")
        return submission

    def _apply_student_update(self, submission: Submission, student: User, data: SubmissionUpdate) -> None:
        if submission.submitted_by_id != student.id or _has_self_grading(data.questions_and_answers):
            raise ForbiddenError("You do not have permission to update this submission")
        if submission.is_graded:
            raise ForbiddenError("This submission has already been evaluated")
        config = ExamConfigService(self.db).get_config()
        if is_expired(submission, config):
            raise ForbiddenError("The exam time for this submission has expired")
        if data.questions_and_answers is not None:
            submission.questions_and_answers = _dump_answers(data.questions_and_answers)

    def _apply_grading(self, submission: Submission, supervisor: User, data: SubmissionUpdate) -> None:
        if data.questions_and_answers is not None:
            answers = _dump_answers(data.questions_and_answers)
        else:
            answers = list(submission.questions_and_answers or [])
        level = compute_level(answers)
        submission.questions_and_answers = answers
        submission.examined_by_id = supervisor.id
        submission.level = level
        logger.info(f"Submission {submission.id} graded {level.value} by {supervisor.id}")

    def delete_submission(self, submission_id: str) -> None:
        with atomic(self.db):
            submission = self.get_submission(submission_id)
            self.db.delete(submission)
        logger.info(f"Submission {submission_id} deleted")

    def send_certificate(self, submission_id: str, requester: User) -> CertificateNotice:
        """Email a certificate for the requester's own passing submission."""
        submission = self.get_submission(submission_id)
        if submission.submitted_by_id != requester.id:
            raise ForbiddenError("You do not have permission to access this submission")
        if not submission.is_graded:
            raise BadRequestError("This submission has not been evaluated yet")
        if not submission.is_passing:
            raise BadRequestError("Certificates are only issued for passing levels")

        student = submission.submitted_by
        examiner = submission.examined_by
        notice = CertificateNotice(
            recipient_email=student.email,
            display_name=student.name or student.email,
            step_label=f"Step {submission.step.value}",
            level_label=LEVEL_LABELS[submission.level],
            examiner_name=examiner.name if examiner is not None else None,
        )
        self.notifier.send_certificate(notice)
        logger.info(f"Certificate for submission {submission.id} sent to {student.email}")
        return notice
