from __future__ import annotations

import pytest
from sqlmodel import Session

from src.marketplace.core.services import (
    LoginFlowService,
    PhoneNormalizer,
    SmsGateway,
    SmsResult,
)

__all__ = ["RecordingSmsGateway", "normalizer", "sms_gateway", "login_flow"]


class RecordingSmsGateway(SmsGateway):
    """Keeps every message in memory instead of delivering it."""

    def __init__(self, succeed: bool = True, raise_error: bool = False):
        super().__init__(PhoneNormalizer(), "Code {code} ({minutes} min)", 10)
        self.sent: list[tuple[str, str]] = []
        self.succeed = succeed
        self.raise_error = raise_error

    def send_otp(self, phone_number: str, code: str) -> SmsResult:
        if self.raise_error:
            raise RuntimeError("gateway exploded")
        self.sent.append((phone_number, code))
        if not self.succeed:
            return SmsResult(success=False, error="undeliverable")
        return SmsResult(success=True, message_id=f"msg-{len(self.sent)}")

    @property
    def last_code(self) -> str | None:
        return self.sent[-1][1] if self.sent else None


@pytest.fixture
def normalizer() -> PhoneNormalizer:
    return PhoneNormalizer("962", 9)


@pytest.fixture
def sms_gateway() -> RecordingSmsGateway:
    return RecordingSmsGateway()


@pytest.fixture
def login_flow(session: Session, sms_gateway: RecordingSmsGateway) -> LoginFlowService:
    return LoginFlowService(session, sms_gateway)
