from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth.service import any_role, admin_only
from ..database import get_db
from ..models import User
from .schemas import ExamConfigResponse, ExamConfigUpdate
from .service import ExamConfigService

router = APIRouter(prefix="/config", tags=["Config"])


@router.get("", response_model=ExamConfigResponse)
async def get_config(
    current_user: User = Depends(any_role),
    db: Session = Depends(get_db),
):
    return ExamConfigService(db).get_config()


@router.patch("", response_model=ExamConfigResponse)
async def update_config(
    data: ExamConfigUpdate,
    current_user: User = Depends(admin_only),
    db: Session = Depends(get_db),
):
    return ExamConfigService(db).update_config(data)
