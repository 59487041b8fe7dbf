from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth.models import UserResponse
from ..auth.service import any_role, admin_only
from ..database import get_db
from ..models import User, Role
from .schemas import UserCreate, UserUpdate
from .service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    current_user: User = Depends(admin_only),
    service: UserService = Depends(get_user_service),
):
    return service.create_user(data)


@router.get("", response_model=list[UserResponse])
async def list_users(
    role: Optional[Role] = None,
    active: Optional[bool] = None,
    current_user: User = Depends(admin_only),
    service: UserService = Depends(get_user_service),
):
    return service.list_users(role=role, active=active)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    current_user: User = Depends(admin_only),
    service: UserService = Depends(get_user_service),
):
    return service.get_user(user_id)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    data: UserUpdate,
    current_user: User = Depends(any_role),
    service: UserService = Depends(get_user_service),
):
    return service.update_user(user_id, current_user, data)


@router.delete("/{user_id}", response_model=UserResponse)
async def delete_user(
    user_id: str,
    current_user: User = Depends(admin_only),
    service: UserService = Depends(get_user_service),
):
    return service.delete_user(user_id)
