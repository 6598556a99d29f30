"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from datetime import timedelta

from labstock.application.activity import ActivityRecorder, ShowActivityHandler
from labstock.application.add_item import AddItemHandler
from labstock.application.authenticate import AccessService, LoginHandler
from labstock.application.cancel_request import CancelRequestHandler
from labstock.application.confirm_return import ConfirmReturnHandler
from labstock.application.create_request import CreateRequestHandler
from labstock.application.delete_item import DeleteItemHandler
from labstock.application.initiate_return import InitiateReturnHandler
from labstock.application.list_requests import ListRequestsHandler
from labstock.application.register_user import (
    BootstrapAdminHandler,
    ListUsersHandler,
    RegisterUserHandler,
)
from labstock.application.request_actions import RequestActionHandler
from labstock.application.review_request import ReviewRequestHandler
from labstock.application.show_inventory import ShowInventoryHandler
from labstock.application.update_item import UpdateItemHandler
from labstock.domain.events import EventPublisher
from labstock.domain.service.write_guard import WriteGuard, shared_guard
from labstock.infrastructure.config import Settings
from labstock.infrastructure.persistence.json_activity_log_repository import (
    JsonActivityLogRepository,
)
from labstock.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)
from labstock.infrastructure.persistence.json_record_store import JsonRecordStore
from labstock.infrastructure.persistence.json_request_repository import (
    JsonRequestRepository,
)
from labstock.infrastructure.persistence.json_user_repository import JsonUserRepository
from labstock.infrastructure.security.bcrypt_hasher import BcryptPasswordHasher
from labstock.infrastructure.security.jwt_tokens import JwtTokenService


class Container:
    """Holds the shared adapters and builds handlers on demand."""

    def __init__(self, settings: Settings, guard: WriteGuard | None = None) -> None:
        self.settings = settings
        self.guard = guard or shared_guard()

        self.store = JsonRecordStore(settings.data_dir)
        self.inventory_repo = JsonInventoryRepository(self.store)
        self.request_repo = JsonRequestRepository(self.store)
        self.user_repo = JsonUserRepository(self.store)
        self.log_repo = JsonActivityLogRepository(self.store)

        self.hasher = BcryptPasswordHasher(settings.bcrypt_rounds)
        self.tokens = JwtTokenService(
            settings.jwt_secret, timedelta(days=settings.token_ttl_days)
        )
        self.publisher = EventPublisher([ActivityRecorder(self.log_repo)])
        self.access = AccessService(self.user_repo, self.tokens)

    # --- Identity -------------------------------------------------------------

    def login(self) -> LoginHandler:
        return LoginHandler(self.user_repo, self.hasher, self.tokens, self.publisher)

    def register_user(self) -> RegisterUserHandler:
        return RegisterUserHandler(self.user_repo, self.hasher, self.publisher)

    def bootstrap_admin(self) -> BootstrapAdminHandler:
        return BootstrapAdminHandler(self.user_repo, self.hasher)

    def list_users(self) -> ListUsersHandler:
        return ListUsersHandler(self.user_repo)

    # --- Inventory ------------------------------------------------------------

    def add_item(self) -> AddItemHandler:
        return AddItemHandler(self.inventory_repo, self.publisher)

    def update_item(self) -> UpdateItemHandler:
        return UpdateItemHandler(self.inventory_repo, self.publisher, self.guard)

    def delete_item(self) -> DeleteItemHandler:
        return DeleteItemHandler(self.inventory_repo, self.publisher, self.guard)

    def show_inventory(self) -> ShowInventoryHandler:
        return ShowInventoryHandler(self.inventory_repo)

    # --- Requests -------------------------------------------------------------

    def create_request(self) -> CreateRequestHandler:
        return CreateRequestHandler(
            self.request_repo, self.inventory_repo, self.publisher, self.guard
        )

    def list_requests(self) -> ListRequestsHandler:
        return ListRequestsHandler(self.request_repo)

    def review_request(self) -> ReviewRequestHandler:
        return ReviewRequestHandler(
            self.request_repo, self.inventory_repo, self.publisher, self.guard
        )

    def cancel_request(self) -> CancelRequestHandler:
        return CancelRequestHandler(self.request_repo, self.publisher, self.guard)

    def initiate_return(self) -> InitiateReturnHandler:
        return InitiateReturnHandler(
            self.request_repo, self.inventory_repo, self.publisher, self.guard
        )

    def confirm_return(self) -> ConfirmReturnHandler:
        return ConfirmReturnHandler(
            self.request_repo, self.inventory_repo, self.publisher, self.guard
        )

    def request_action(self) -> RequestActionHandler:
        return RequestActionHandler(
            self.review_request(), self.initiate_return(), self.confirm_return()
        )

    # --- Activity log ---------------------------------------------------------

    def show_activity(self) -> ShowActivityHandler:
        return ShowActivityHandler(self.log_repo)


def build_container(settings: Settings | None = None) -> Container:
    return Container(settings or Settings.from_env())
