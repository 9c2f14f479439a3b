"""User repository for data access operations."""

from collections.abc import Iterator
from datetime import datetime

from sqlalchemy import or_, update
from sqlmodel import Session, col, select

from src.marketplace.entities.core._base import utc_now
from src.marketplace.entities.core.user.entity import User
from src.marketplace.entities.core.user.table import UserTable


class UserRepository:
    """Data-access layer for users.

    Repositories flush but never commit; the calling service owns the
    transaction boundary.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, user_id: str) -> User | None:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def create(self, user: User) -> User:
        row = UserTable.model_validate(user.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return User.model_validate(row, from_attributes=True)

    def find_first_by_any(
        self,
        email: str | None = None,
        username: str | None = None,
        phone_number: str | None = None,
    ) -> User | None:
        """Return the first user matching any of the given identifiers."""
        conditions = []
        if email:
            conditions.append(UserTable.email == email)
        if username:
            conditions.append(UserTable.username == username)
        if phone_number:
            conditions.append(UserTable.phone_number == phone_number)
        if not conditions:
            return None

        statement = (
            select(UserTable)
            .where(or_(*conditions))
            .order_by(col(UserTable.created_at), col(UserTable.id))
        )
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def find_by_phone(self, phone_number: str) -> User | None:
        """Exact match on the stored phone value."""
        return self.find_first_by_any(phone_number=phone_number)

    def iter_phone_numbers(self) -> Iterator[tuple[str, str]]:
        """Yield ``(user_id, phone_number)`` for every user with a phone."""
        statement = (
            select(UserTable.id, UserTable.phone_number)
            .where(col(UserTable.phone_number).is_not(None))
            .order_by(col(UserTable.created_at), col(UserTable.id))
        )
        for user_id, phone_number in self._session.exec(statement):
            yield user_id, phone_number

    def set_otp(self, user_id: str, code: str, expires_at: datetime) -> None:
        """Store a code and its expiry in one statement, replacing any previous code."""
        self._session.execute(
            update(UserTable)
            .where(col(UserTable.id) == user_id)
            .values(otp=code, otp_expires_at=expires_at, updated_at=utc_now())
        )
        self._session.flush()

    def consume_otp(self, user_id: str, code: str, mark_verified: bool = False) -> bool:
        """Clear a stored code if it still equals ``code``.

        The equality predicate makes consumption single-use even when two
        verifications race: only one UPDATE can match.
        """
        values: dict = {"otp": None, "otp_expires_at": None, "updated_at": utc_now()}
        if mark_verified:
            values["is_verified"] = True
        result = self._session.execute(
            update(UserTable)
            .where(col(UserTable.id) == user_id, col(UserTable.otp) == code)
            .values(**values)
        )
        self._session.flush()
        return result.rowcount == 1

    def set_verified(self, user_id: str, verified: bool) -> None:
        self._session.execute(
            update(UserTable)
            .where(col(UserTable.id) == user_id)
            .values(is_verified=verified, updated_at=utc_now())
        )
        self._session.flush()

    def set_deleted_at(self, user_id: str, deleted_at: datetime | None) -> bool:
        result = self._session.execute(
            update(UserTable)
            .where(col(UserTable.id) == user_id)
            .values(deleted_at=deleted_at, updated_at=utc_now())
        )
        self._session.flush()
        return result.rowcount == 1

    def refresh(self, user_id: str) -> User | None:
        """Reload a user after bulk updates bypassed the identity map."""
        row = self._session.get(UserTable, user_id, populate_existing=True)
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)
