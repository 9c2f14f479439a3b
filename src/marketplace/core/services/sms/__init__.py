from .gateway import (
    ConsoleSmsGateway,
    SmsGateway,
    SmsResult,
    TwilioSmsGateway,
    build_sms_gateway,
)

__all__ = [
    "ConsoleSmsGateway",
    "SmsGateway",
    "SmsResult",
    "TwilioSmsGateway",
    "build_sms_gateway",
]
