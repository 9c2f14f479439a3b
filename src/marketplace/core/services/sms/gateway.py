"""Outbound SMS delivery for one-time codes."""

from abc import ABC, abstractmethod

import httpx
from loguru import logger
from pydantic import BaseModel

from src.marketplace.core.services.phone import PhoneNormalizer
from src.marketplace.runtime.config.config_data import ConfigData


class SmsResult(BaseModel):
    success: bool
    message_id: str | None = None
    error: str | None = None


class SmsGateway(ABC):
    """Delivers a code to a phone. Implementations report failure, never raise."""

    def __init__(
        self, normalizer: PhoneNormalizer, message_template: str, expiry_minutes: int
    ):
        self._normalizer = normalizer
        self._message_template = message_template
        self._expiry_minutes = expiry_minutes

    def render_message(self, code: str) -> str:
        return self._message_template.format(code=code, minutes=self._expiry_minutes)

    @abstractmethod
    def send_otp(self, phone_number: str, code: str) -> SmsResult:
        """Send ``code`` to ``phone_number`` in whatever format it was given."""


class ConsoleSmsGateway(SmsGateway):
    """Logs messages instead of sending them. Reports failure in production."""

    def __init__(
        self,
        normalizer: PhoneNormalizer,
        message_template: str,
        expiry_minutes: int,
        production: bool = False,
    ):
        super().__init__(normalizer, message_template, expiry_minutes)
        self._production = production

    def send_otp(self, phone_number: str, code: str) -> SmsResult:
        to = self._normalizer.to_e164(phone_number)
        if self._production:
            logger.warning("No SMS provider configured; OTP for {} was not delivered", to)
            return SmsResult(success=False, error="SMS provider not configured")
        logger.info("SMS to {}: {}", to, self.render_message(code))
        return SmsResult(success=True, message_id="console")


class TwilioSmsGateway(SmsGateway):
    """Sends messages through the Twilio Messages REST API."""

    def __init__(
        self,
        normalizer: PhoneNormalizer,
        message_template: str,
        expiry_minutes: int,
        account_sid: str,
        auth_token: str,
        from_number: str,
        api_base_url: str = "https://api.twilio.com/2010-04-01",
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ):
        super().__init__(normalizer, message_template, expiry_minutes)
        self._account_sid = account_sid
        self._from_number = from_number
        self._url = f"{api_base_url.rstrip('/')}/Accounts/{account_sid}/Messages.json"
        self._client = client or httpx.Client(
            timeout=timeout, auth=(account_sid, auth_token)
        )

    def send_otp(self, phone_number: str, code: str) -> SmsResult:
        to = self._normalizer.to_e164(phone_number)
        if to is None:
            return SmsResult(success=False, error="Invalid phone number")

        payload = {"To": to, "From": self._from_number, "Body": self.render_message(code)}
        try:
            resp = self._client.post(self._url, data=payload)
        except httpx.HTTPError as e:
            return SmsResult(success=False, error=f"{type(e).__name__}: {e}")

        if 200 <= resp.status_code < 300:
            return SmsResult(success=True, message_id=resp.json().get("sid"))

        return SmsResult(
            success=False, error=f"Twilio {resp.status_code}: {resp.text[:200]}"
        )

    def close(self) -> None:
        self._client.close()


def build_sms_gateway(config: ConfigData) -> SmsGateway:
    """Twilio when fully configured, otherwise the console gateway."""
    normalizer = PhoneNormalizer.from_config(config.phone)
    sms = config.sms
    if sms.provider == "twilio":
        if sms.account_sid and sms.auth_token and sms.from_number:
            return TwilioSmsGateway(
                normalizer,
                sms.message_template,
                config.otp.expiry_minutes,
                account_sid=sms.account_sid,
                auth_token=sms.auth_token,
                from_number=sms.from_number,
                api_base_url=sms.api_base_url,
                timeout=sms.timeout_seconds,
            )
        logger.warning("Twilio selected but not fully configured; using console SMS gateway")
    return ConsoleSmsGateway(
        normalizer,
        sms.message_template,
        config.otp.expiry_minutes,
        production=config.app.is_production,
    )
