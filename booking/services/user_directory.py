import logging
from typing import List, Optional

from booking.auth.argon import PasswordService
from booking.database import RecordStore
from booking.errors import InvalidArgument, NotFound
from booking.logging_config import get_logger
from booking.models.ticket import Ticket
from booking.models.user import User


class UserDirectory:
    """
    Accounts loaded once from a RecordStore. Only `hashed_password` is ever
    written; a plaintext password on an incoming User is hashed on sign up
    and dropped on serialization.
    """

    def __init__(
        self,
        store: RecordStore[User],
        passwords: Optional[PasswordService] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._store = store
        self._passwords = passwords or PasswordService()
        self._logger = logger or get_logger(__name__)
        self._users: List[User] = store.load()

    @property
    def lock(self):
        return self._store.lock

    def find_by_id(self, user_id: str) -> Optional[User]:
        with self.lock:
            index = self._index_of(user_id)
            return self._users[index].model_copy(deep=True) if index != -1 else None

    def sign_up(self, user: User) -> bool:
        if user is None:
            raise InvalidArgument("User object must be provided for sign up.")
        if not user.user_id or not user.user_id.strip():
            raise InvalidArgument("Cannot sign up user: user_id is required.")

        with self.lock:
            # an existing id is a reportable outcome, whatever else the request holds
            if self._index_of(user.user_id) != -1:
                self._logger.warning(
                    "User with ID %s already exists.", user.user_id, extra={"event": "duplicate_signup", "user_id": user.user_id}
                )
                return False
            if not user.name or not user.name.strip():
                raise InvalidArgument(f"Cannot sign up user {user.user_id}: name is required.")
            if not user.password and not user.hashed_password:
                raise InvalidArgument(f"Cannot sign up user {user.user_id}: no password given.")
            record = user.model_copy(deep=True)
            if not record.hashed_password:
                record.hashed_password = self._passwords.hash(user.password)
            record.password = None
            self._commit(self._users + [record])
        self._logger.info("User signed up: %s", user.name, extra={"event": "user_signed_up", "user_id": user.user_id})
        return True

    def authenticate(self, candidate: User) -> Optional[User]:
        """Stored record matching both the name and the password, or None."""
        if candidate is None:
            raise InvalidArgument("User object must be provided for login.")
        with self.lock:
            users = list(self._users)
        for user in users:
            if user.name == candidate.name and self._passwords.verify(candidate.password, user.hashed_password):
                return user.model_copy(deep=True)
        return None

    def login(self, candidate: User) -> bool:
        return self.authenticate(candidate) is not None

    def fetch_bookings(self, candidate: User) -> Optional[List[Ticket]]:
        if candidate is None:
            raise InvalidArgument("User object must be provided to fetch bookings.")
        user = self.authenticate(candidate)
        if user is None:
            self._logger.warning("User %s not found.", candidate.name, extra={"event": "user_not_found"})
            return None
        return user.tickets_booked

    def update(self, user: User) -> None:
        if user is None:
            raise InvalidArgument("User object must be provided for update.")
        with self.lock:
            index = self._index_of(user.user_id)
            if index == -1:
                raise NotFound(f"Cannot update user {user.user_id}: no such user.")
            record = user.model_copy(deep=True)
            record.password = None
            if not record.hashed_password:
                record.hashed_password = self._users[index].hashed_password
            users = list(self._users)
            users[index] = record
            self._commit(users)
        self._logger.info("User updated: %s", user.user_id, extra={"event": "user_updated", "user_id": user.user_id})

    def _commit(self, users: List[User]) -> None:
        self._store.save(users)
        self._users = users

    def _index_of(self, user_id: str) -> int:
        for index, user in enumerate(self._users):
            if user.user_id == user_id:
                return index
        return -1
