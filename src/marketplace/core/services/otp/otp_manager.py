"""One-time code issuance and verification."""

import hmac
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta

from loguru import logger
from sqlmodel import Session

from src.marketplace.core.exceptions import OtpInvalidOrExpiredError
from src.marketplace.core.services.sms import SmsGateway
from src.marketplace.entities.core._base import as_utc, utc_now
from src.marketplace.entities.core.user import User, UserRepository
from src.marketplace.runtime.context import get_config


@dataclass(frozen=True)
class IssuedOtp:
    code: str
    expires_at: datetime


def generate_otp_code(length: int) -> str:
    """Uniformly random numeric code; leading zeros are kept."""
    return f"{secrets.randbelow(10**length):0{length}d}"


class OtpManager:
    """Per-user code lifecycle: ``NoOtp -> Issued -> (Consumed | Expired) -> NoOtp``.

    A user holds at most one code. Issuing overwrites the previous one and
    a successful verification clears it, so every code works at most once.
    Concurrent issuance for the same user is last-writer-wins.
    """

    def __init__(self, session: Session, sms_gateway: SmsGateway) -> None:
        self._session = session
        self._users = UserRepository(session)
        self._sms_gateway = sms_gateway

    def issue(self, user: User, destination_phone: str | None = None) -> IssuedOtp:
        """Store a fresh code for ``user`` and hand it to the SMS gateway.

        The code stays valid whatever the delivery outcome.
        """
        config = get_config()
        code = generate_otp_code(config.otp.length)
        expires_at = utc_now() + timedelta(minutes=config.otp.expiry_minutes)

        self._users.set_otp(user.id, code, expires_at)
        self._session.commit()

        if not config.app.is_production:
            logger.debug("Issued OTP {} for user {} (expires {})", code, user.id, expires_at)
        else:
            logger.info("Issued OTP for user {}", user.id)

        phone = destination_phone or user.phone_number
        if phone:
            self._deliver(phone, code)

        return IssuedOtp(code=code, expires_at=expires_at)

    def _deliver(self, phone: str, code: str) -> None:
        try:
            result = self._sms_gateway.send_otp(phone, code)
        except Exception as e:
            logger.error("Error sending OTP SMS: {}: {}", type(e).__name__, e)
            return
        if result.success:
            logger.info("OTP SMS sent (message id {})", result.message_id)
        else:
            logger.warning("Failed to send OTP SMS: {}", result.error)

    def verify(self, user: User, code: str, mark_verified: bool = False) -> User:
        """Consume ``code`` for ``user`` or raise :class:`OtpInvalidOrExpiredError`.

        Missing, wrong and expired codes raise the same error after the same
        amount of work.
        """
        stored = user.otp or ""
        # compare against a same-length placeholder when nothing is stored
        matches = hmac.compare_digest(
            (stored or "\x00" * len(code)).encode(), code.encode()
        )
        not_expired = (
            user.otp_expires_at is not None and utc_now() <= as_utc(user.otp_expires_at)
        )
        if not (stored and matches and not_expired):
            raise OtpInvalidOrExpiredError()

        if not self._users.consume_otp(user.id, code, mark_verified=mark_verified):
            self._session.rollback()
            raise OtpInvalidOrExpiredError()
        self._session.commit()

        verified = self._users.refresh(user.id)
        if verified is None:
            raise OtpInvalidOrExpiredError()
        logger.info("OTP verified for user {}", user.id)
        return verified
