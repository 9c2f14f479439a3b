"""Session token verification."""

from datetime import UTC, datetime

from authlib.jose import JoseError, JsonWebToken
from loguru import logger

from src.marketplace.core.exceptions import ConfigurationError, NotAuthenticatedError
from src.marketplace.core.models.session import SessionClaims
from src.marketplace.runtime.context import get_config


class JwtVerificationService:
    def verify_session_token(self, token: str) -> SessionClaims:
        """Check signature, issuer and expiry of a session token.

        Raises:
            NotAuthenticatedError: For malformed, forged or expired tokens
            ConfigurationError: If the signing secret is unset
        """
        cfg = get_config()
        secret = cfg.app.session_signing_secret
        if not secret:
            logger.error("Session signing secret is not configured")
            raise ConfigurationError("session signing secret not configured")

        claims_options = {
            "iss": {"essential": True, "values": [cfg.jwt.gen_issuer]},
            "sub": {"essential": True},
            "exp": {"essential": True},
        }
        try:
            claims = JsonWebToken(cfg.jwt.allowed_algorithms).decode(
                token, secret, claims_options=claims_options
            )
            claims.validate(leeway=cfg.jwt.clock_skew)
        except (JoseError, ValueError) as exc:
            logger.debug("Rejected session token: {}", exc)
            raise NotAuthenticatedError("Invalid or expired token") from exc

        role = claims.get("role")
        if not role:
            raise NotAuthenticatedError("Invalid or expired token")

        return SessionClaims(
            user_id=claims["sub"],
            role=role,
            exp=datetime.fromtimestamp(claims["exp"], UTC),
            iat=datetime.fromtimestamp(claims.get("iat", claims["exp"]), UTC),
            jti=claims.get("jti"),
        )
