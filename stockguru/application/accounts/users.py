"""
Use cases: Register and look up dashboard users.

Failure cases: UsernameTakenError on registration, UserNotFoundError on lookup.
"""

import logging
from collections.abc import Callable
from uuid import UUID

from stockguru.application.accounts.dtos import RegisterUserCommand
from stockguru.domain.accounts.entities import User
from stockguru.domain.accounts.errors import UsernameTakenError, UserNotFoundError
from stockguru.domain.accounts.ports import UserRepository

logger = logging.getLogger(__name__)


class RegisterUserUseCase:
    """Creates a user, storing only a hash of the password."""

    def __init__(
        self,
        users: UserRepository,
        hash_password: Callable[[str], str],
    ) -> None:
        self._users = users
        self._hash_password = hash_password

    def execute(self, command: RegisterUserCommand) -> User:
        """Run the registration use case.

        Raises:
            UsernameTakenError: If the username is already registered.
        """
        if self._users.get_by_username(command.username) is not None:
            raise UsernameTakenError(command.username)
        user = self._users.add(
            User(
                username=command.username,
                password_hash=self._hash_password(command.password),
            )
        )
        logger.info("Registered user id=%s", user.id)
        return user


class GetUserUseCase:
    """Returns a user by ID."""

    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: UUID) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user
