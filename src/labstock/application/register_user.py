"""Application service: Register User use case (admin only)."""

from __future__ import annotations

from labstock.application.dto import UserDTO
from labstock.domain.events import EventPublisher, LifecycleEvent
from labstock.domain.exceptions import Forbidden, ValidationError
from labstock.domain.model.activity import LogAction
from labstock.domain.model.user import Role, User
from labstock.domain.repository.user_repository import UserRepository
from labstock.domain.security import PasswordHasher


class RegisterUserHandler:

    def __init__(
        self,
        user_repo: UserRepository,
        hasher: PasswordHasher,
        publisher: EventPublisher,
    ) -> None:
        self._user_repo = user_repo
        self._hasher = hasher
        self._publisher = publisher

    def handle(
        self,
        actor: User,
        first_name: str,
        last_name: str,
        password: str,
        role: str,
        email: str | None = None,
    ) -> UserDTO:
        if not actor.is_admin:
            raise Forbidden("Only admins can add users")
        if not first_name or not last_name or not password or not role:
            raise ValidationError("First name, last name, password and role are required")

        parsed_role = Role.parse(role)
        if self._user_repo.get_by_name(first_name, last_name) is not None:
            raise ValidationError(
                f"A user named {first_name} {last_name} already exists"
            )

        user = User(
            id=None,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            password_hash=self._hasher.hash(password),
            role=parsed_role,
            email=email or None,
        )
        self._user_repo.save(user)

        self._publisher.publish(
            LifecycleEvent(
                action=LogAction.USER_REGISTER,
                actor=actor,
                details=f"User added: {user.display_name} ({parsed_role.value})",
                metadata={"newUserId": user.id, "email": user.email, "role": parsed_role.value},
            )
        )
        return UserDTO.from_domain(user)


class ListUsersHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, actor: User) -> list[UserDTO]:
        if not actor.is_admin:
            raise Forbidden("Only admins can list users")
        return [UserDTO.from_domain(u) for u in self._user_repo.list_all()]


class BootstrapAdminHandler:
    """Create the very first admin account.  Refused once any user exists."""

    def __init__(self, user_repo: UserRepository, hasher: PasswordHasher) -> None:
        self._user_repo = user_repo
        self._hasher = hasher

    def handle(
        self,
        first_name: str,
        last_name: str,
        password: str,
        email: str | None = None,
    ) -> UserDTO:
        if self._user_repo.list_all():
            raise Forbidden("Users already exist; ask an admin to add you")
        if not first_name or not last_name or not password:
            raise ValidationError("First name, last name and password are required")

        admin = User(
            id=None,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            password_hash=self._hasher.hash(password),
            role=Role.ADMIN,
            email=email or None,
        )
        self._user_repo.save(admin)
        return UserDTO.from_domain(admin)
