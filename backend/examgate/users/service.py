"""User administration. Users are never physically deleted."""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..database import atomic
from ..errors import BadRequestError, ForbiddenError, NotFoundError
from ..models import User, Role
from .schemas import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

# Fields a non-admin may change on their own record
SELF_SERVICE_FIELDS = {"name"}


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def list_users(self, role: Optional[Role] = None, active: Optional[bool] = None) -> list[User]:
        query = self.db.query(User)
        if role is not None:
            query = query.filter(User.role == role)
        if active is not None:
            query = query.filter(User.active.is_(active))
        return query.order_by(User.created_at.desc()).all()

    def create_user(self, data: UserCreate) -> User:
        """Register a user with an explicit role."""
        self._ensure_email_free(data.email)
        with atomic(self.db):
            user = User(email=data.email, name=data.name, role=data.role)
            self.db.add(user)
        logger.info(f"Created {data.role.value} {data.email}")
        return user

    def update_user(self, user_id: str, actor: User, data: UserUpdate) -> User:
        # Only the name is nullable
        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field == "name"
        }
        if not actor.is_admin:
            if actor.id != user_id or not set(changes) <= SELF_SERVICE_FIELDS:
                raise ForbiddenError("You do not have permission to update this user")

        user = self.get_user(user_id)
        if changes.get("email") and changes["email"] != user.email:
            self._ensure_email_free(changes["email"])
        with atomic(self.db):
            for field, value in changes.items():
                setattr(user, field, value)
        return user

    def delete_user(self, user_id: str) -> User:
        """Deactivate the user; their submissions keep pointing at the record."""
        user = self.get_user(user_id)
        with atomic(self.db):
            user.active = False
        logger.info(f"Deactivated user {user_id}")
        return user

    def _ensure_email_free(self, email: str) -> None:
        if self.db.query(User).filter(User.email == email).first():
            raise BadRequestError("Email already registered")
