"""User service: account lookups and auth-provider upserts"""

import logging
from typing import Any, Tuple

from recipestore.domain.schemas import UserRead, UserUpsert
from recipestore.exceptions import NotFoundError
from recipestore.repositories import UserRepository
from recipestore.store import DataStore, parse_payload

logger = logging.getLogger("recipestore.services.users")


class UserService:
    """Business logic for user accounts"""

    @staticmethod
    def upsert_user(store: DataStore, data: Any) -> Tuple[UserRead, bool]:
        """
        Insert a user by id, or refresh the profile fields of an existing one.

        Called on every login through an external auth provider, which owns the id.
        Billing and premium fields are left untouched on update.
        Returns a tuple of (UserRead, created_flag).

        Raises:
            ServiceValidationError: invalid profile data
            ConflictError: the e-mail belongs to another user
        """
        data = parse_payload(UserUpsert, data)
        values = data.model_dump(exclude_none=True)
        with store.session_scope() as db:
            users = UserRepository(db)
            user = users.get_by_id(data.id)
            created = user is None
            if created:
                user = users.create(values)
            else:
                profile = data.model_dump(exclude={"id"}, exclude_unset=True)
                user = users.update(user, profile)
            result = UserRead.model_validate(user)

        logger.info(f"user_upserted user_id={result.id} created={created}")
        return result, created

    @staticmethod
    def get_by_email(store: DataStore, email: str) -> UserRead:
        with store.session_scope() as db:
            user = UserRepository(db).get_by_email(email.strip())
            if user is None:
                logger.warning("user_not_found_by_email")
                raise NotFoundError("No user with that email", code="not_found")
            return UserRead.model_validate(user)
