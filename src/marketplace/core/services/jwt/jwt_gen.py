import time
from typing import Any

from authlib.common.security import generate_token
from authlib.jose import JoseError, jwt
from loguru import logger

from src.marketplace.core.exceptions import ConfigurationError
from src.marketplace.runtime.config.config_data import ConfigData
from src.marketplace.runtime.context import get_config

RESERVED_CLAIMS = {"iss", "sub", "exp", "iat", "nbf", "jti"}


class JwtGeneratorService:
    """Service for generating signed session tokens."""

    @staticmethod
    def require_signing_secret() -> str:
        """Return the configured session secret.

        Raises:
            ConfigurationError: If the secret is unset
        """
        secret = get_config().app.session_signing_secret
        if not secret:
            logger.error("Session signing secret is not configured")
            raise ConfigurationError("session signing secret not configured")
        return secret

    def generate_jwt(
        self,
        subject: str,
        claims: dict[str, Any] | None = None,
        expires_in_seconds: int = 3600,
        issuer: str | None = None,
        algorithm: str = "HS256",
        include_jti: bool = True,
        secret: str | None = None,
    ) -> str:
        """Generate a signed JWT using authlib.

        Args:
            subject: Subject (sub) claim, the user id
            claims: Additional claims; registered claim names are ignored
            expires_in_seconds: Token lifetime in seconds
            issuer: Issuer (iss) claim (defaults to config issuer)
            algorithm: Signing algorithm, must be in the configured allowlist
            include_jti: Whether to include a unique JWT ID claim
            secret: Signing secret (defaults to the configured session secret)

        Raises:
            ConfigurationError: If the signing secret is unset or the
                algorithm is not allowed
        """
        config: ConfigData = get_config()
        secret = secret or self.require_signing_secret()

        if algorithm not in config.jwt.allowed_algorithms:
            logger.error(
                "Attempted to use disallowed algorithm: {}, only {} are allowed",
                algorithm,
                config.jwt.allowed_algorithms,
            )
            raise ConfigurationError(f"algorithm {algorithm} not allowed")

        now = int(time.time())
        payload: dict[str, Any] = {
            "iss": issuer or config.jwt.gen_issuer,
            "sub": subject,
            "exp": now + expires_in_seconds,
            "iat": now,
            "nbf": now,
        }
        if include_jti:
            payload["jti"] = generate_token(16)

        if claims:
            payload.update({k: v for k, v in claims.items() if k not in RESERVED_CLAIMS})

        try:
            token = jwt.encode({"alg": algorithm, "typ": "JWT"}, payload, secret)
        except JoseError as e:
            logger.error("JWT encoding failed: {}", e)
            raise ConfigurationError(f"JWT encoding failed: {e}") from e

        return token.decode() if isinstance(token, bytes) else token

    def generate_session_token(self, user_id: str, role: str) -> str:
        """Session token carrying ``sub`` and ``role``, valid for the configured TTL."""
        return self.generate_jwt(
            subject=user_id,
            claims={"role": role},
            expires_in_seconds=get_config().app.session_ttl_seconds,
        )
