"""Access to the exam configuration singleton."""
import logging

from sqlalchemy.orm import Session

from ..config import DEFAULT_EXAM_LENGTH_MINUTES
from ..database import atomic
from ..errors import NotFoundError
from ..models import ExamConfig
from .schemas import ExamConfigUpdate

logger = logging.getLogger(__name__)


class ExamConfigService:
    def __init__(self, db: Session):
        self.db = db

    def get_config(self) -> ExamConfig:
        config = self.db.query(ExamConfig).order_by(ExamConfig.id).first()
        if config is None:
            raise NotFoundError("Exam configuration has not been initialised")
        return config

    def update_config(self, data: ExamConfigUpdate) -> ExamConfig:
        """Apply a partial update to the one existing configuration row."""
        with atomic(self.db):
            config = self.get_config()
            for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
                setattr(config, field, value)
        logger.info(f"Exam configuration updated: {config.exam_length_in_minutes} minutes")
        return config

    def ensure_config(self) -> ExamConfig:
        """Create the singleton with defaults if it does not exist yet."""
        config = self.db.query(ExamConfig).order_by(ExamConfig.id).first()
        if config is not None:
            return config
        with atomic(self.db):
            config = ExamConfig(exam_length_in_minutes=DEFAULT_EXAM_LENGTH_MINUTES)
            self.db.add(config)
        logger.info("Default exam configuration created")
        return config
