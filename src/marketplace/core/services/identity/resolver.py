"""Resolve a login payload to exactly one user."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from loguru import logger

from src.marketplace.core.models.auth import IdentifierFields
from src.marketplace.core.services.phone import PhoneNormalizer, normalize_phone
from src.marketplace.entities.core.user import User, UserRepository

MIN_FUZZY_LENGTH = 7
LONG_SUFFIX = 9
SHORT_SUFFIX = 7


@dataclass(frozen=True)
class LoginIdentifiers:
    """Lookup candidates extracted from a request; ``phone`` is digits-only."""

    email: str | None = None
    username: str | None = None
    phone: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.email or self.username or self.phone)


def resolve_identifiers(payload: IdentifierFields) -> LoginIdentifiers:
    """Pick the email, username and phone candidates out of ``payload``."""
    email = payload.email
    phone = payload.phone_number or payload.phone

    if payload.email_or_phone:
        if "@" in payload.email_or_phone:
            email = payload.email_or_phone
        else:
            phone = payload.email_or_phone

    return LoginIdentifiers(
        email=email or None,
        username=payload.username or None,
        phone=normalize_phone(phone),
    )


class PhoneMatcher(ABC):
    """Last-resort phone lookup, used when no stored value matches exactly."""

    @abstractmethod
    def match(self, normalized_phone: str) -> str | None:
        """Return the id of the matching user, or ``None``."""


class ScanPhoneMatcher(PhoneMatcher):
    """Normalizes every stored phone number and compares in memory.

    Cost grows linearly with the user table. A normalized phone column with
    an index can replace this without changing :class:`IdentifierResolver`.
    """

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def match(self, normalized_phone: str) -> str | None:
        stored = [
            (user_id, digits)
            for user_id, phone_number in self._user_repo.iter_phone_numbers()
            if (digits := normalize_phone(phone_number))
        ]
        logger.debug("Scanning {} stored phone numbers", len(stored))

        for user_id, digits in stored:
            if digits == normalized_phone:
                return user_id

        if len(normalized_phone) >= LONG_SUFFIX:
            suffix = normalized_phone[-LONG_SUFFIX:]
            for user_id, digits in stored:
                if digits[-LONG_SUFFIX:] == suffix:
                    return user_id

        if len(normalized_phone) >= SHORT_SUFFIX:
            suffix = normalized_phone[-SHORT_SUFFIX:]
            for user_id, digits in stored:
                if len(digits) >= SHORT_SUFFIX and digits[-SHORT_SUFFIX:] == suffix:
                    return user_id

        return None


class IdentifierResolver:
    """Three-stage user lookup: exact, phone variants, then the phone matcher."""

    def __init__(
        self,
        user_repo: UserRepository,
        normalizer: PhoneNormalizer,
        phone_matcher: PhoneMatcher | None = None,
    ) -> None:
        self._user_repo = user_repo
        self._normalizer = normalizer
        self._phone_matcher = phone_matcher or ScanPhoneMatcher(user_repo)

    def find(self, identifiers: LoginIdentifiers) -> User | None:
        if identifiers.is_empty:
            return None

        user = self._user_repo.find_first_by_any(
            email=identifiers.email,
            username=identifiers.username,
            phone_number=identifiers.phone,
        )
        if user is not None or identifiers.phone is None:
            return user

        phone = identifiers.phone
        for variant in self._normalizer.candidates(phone):
            if variant == phone:
                continue
            user = self._user_repo.find_by_phone(variant)
            if user is not None:
                logger.debug("Matched user {} by phone variant", user.id)
                return user

        if len(phone) < MIN_FUZZY_LENGTH:
            return None

        user_id = self._phone_matcher.match(phone)
        if user_id is None:
            logger.debug("No user matched the submitted phone number")
            return None
        return self._user_repo.get(user_id)
