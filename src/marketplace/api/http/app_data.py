from dataclasses import dataclass

from src.marketplace.core.services import (
    DbSessionService,
    JwtGeneratorService,
    JwtVerificationService,
    SmsGateway,
)


@dataclass
class ApplicationDependencies:
    """Process-wide collaborators, created at startup and closed at shutdown."""

    database_service: DbSessionService
    sms_gateway: SmsGateway
    jwt_generation_service: JwtGeneratorService
    jwt_verify_service: JwtVerificationService
