"""Test cases for user administration."""
import pytest
from fastapi import status

from examgate.errors import BadRequestError, ForbiddenError, NotFoundError
from examgate.models import Role
from examgate.users.schemas import UserCreate, UserUpdate
from examgate.users.service import UserService


@pytest.fixture
def service(db_session):
    return UserService(db_session)


class TestUserService:

    def test_create_user_normalizes_email(self, service):
        user = service.create_user(UserCreate(email=" New.Sup@Example.com", name="New", role=Role.SUPERVISOR))
        assert user.email == "new.sup@example.com"
        assert user.role == Role.SUPERVISOR
        assert user.active is True

    def test_duplicate_email(self, service, student):
        with pytest.raises(BadRequestError) as exc_info:
            service.create_user(UserCreate(email="STUDENT@example.com", role=Role.STUDENT))
        assert exc_info.value.message == "Email already registered"

    def test_list_filters(self, service, student, supervisor, admin):
        assert {u.id for u in service.list_users()} == {student.id, supervisor.id, admin.id}
        assert [u.id for u in service.list_users(role=Role.SUPERVISOR)] == [supervisor.id]

    def test_delete_is_logical(self, service, student):
        service.delete_user(student.id)

        user = service.get_user(student.id)
        assert user.active is False
        assert [u.id for u in service.list_users(active=False)] == [student.id]

    def test_get_missing_user(self, service):
        with pytest.raises(NotFoundError):
            service.get_user("missing")

    def test_user_renames_self(self, service, student):
        user = service.update_user(student.id, student, UserUpdate(name="Samantha"))
        assert user.name == "Samantha"

    def test_user_cannot_change_own_role(self, service, student):
        with pytest.raises(ForbiddenError):
            service.update_user(student.id, student, UserUpdate(role=Role.ADMIN))

    def test_user_cannot_edit_someone_else(self, service, student, other_student):
        with pytest.raises(ForbiddenError):
            service.update_user(other_student.id, student, UserUpdate(name="Hacked"))

    def test_admin_updates_role_and_email(self, service, admin, student):
        user = service.update_user(student.id, admin, UserUpdate(role=Role.SUPERVISOR, email="Promoted@example.com"))
        assert user.role == Role.SUPERVISOR
        assert user.email == "promoted@example.com"

    def test_admin_email_change_collision(self, service, admin, student, other_student):
        with pytest.raises(BadRequestError):
            service.update_user(student.id, admin, UserUpdate(email=other_student.email))


class TestUserEndpoints:

    def test_admin_creates_user(self, client, admin, auth_headers):
        response = client.post(
            "/users",
            json={"email": "sup@example.com", "name": "Sup", "role": "SUPERVISOR"},
            headers=auth_headers(admin),
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["role"] == "SUPERVISOR"

    def test_non_admin_cannot_list(self, client, student, auth_headers):
        response = client.get("/users", headers=auth_headers(student))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_deactivated_user_token_rejected(self, client, admin, student, auth_headers):
        headers = auth_headers(student)
        response = client.delete(f"/users/{student.id}", headers=auth_headers(admin))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["active"] is False

        response = client.get("/auth/me", headers=headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND
