from .login_flow import LoginFlowService, VerificationResult
from .session_issuer import AuthSession, AuthSessionIssuer

__all__ = [
    "AuthSession",
    "AuthSessionIssuer",
    "LoginFlowService",
    "VerificationResult",
]
