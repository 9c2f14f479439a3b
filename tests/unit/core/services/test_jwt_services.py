import pytest

from src.marketplace.core.exceptions import ConfigurationError, NotAuthenticatedError
from src.marketplace.core.services import (
    AuthSessionIssuer,
    JwtGeneratorService,
    JwtVerificationService,
)
from src.marketplace.runtime.config.config_data import AppConfig, ConfigData, JWTConfig
from src.marketplace.runtime.context import with_context


class TestSessionTokens:
    @pytest.fixture
    def generator(self) -> JwtGeneratorService:
        return JwtGeneratorService()

    @pytest.fixture
    def verifier(self) -> JwtVerificationService:
        return JwtVerificationService()

    def test_round_trip(self, generator, verifier):
        token = generator.generate_session_token("user-1", "customer")
        claims = verifier.verify_session_token(token)

        assert claims.user_id == "user-1"
        assert claims.role == "customer"
        assert claims.jti is not None
        assert (claims.exp - claims.iat).total_seconds() == 24 * 60 * 60

    def test_ttl_is_configurable(self, generator, verifier):
        with with_context(ConfigData(app=AppConfig(session_ttl_seconds=60))):
            claims = verifier.verify_session_token(
                generator.generate_session_token("user-1", "admin")
            )
        assert (claims.exp - claims.iat).total_seconds() == 60

    def test_reserved_claims_cannot_be_overridden(self, generator, verifier):
        token = generator.generate_jwt("user-1", claims={"sub": "someone-else", "role": "x"})
        assert verifier.verify_session_token(token).user_id == "user-1"

    def test_expired_token_is_rejected(self, generator, verifier):
        with with_context(ConfigData(jwt=JWTConfig(clock_skew=0))):
            token = generator.generate_jwt("user-1", claims={"role": "customer"}, expires_in_seconds=-10)
            with pytest.raises(NotAuthenticatedError):
                verifier.verify_session_token(token)

    def test_forged_signature_is_rejected(self, generator, verifier):
        token = generator.generate_jwt("user-1", claims={"role": "admin"}, secret="other-secret")
        with pytest.raises(NotAuthenticatedError) as exc_info:
            verifier.verify_session_token(token)
        assert exc_info.value.status_code == 401

    def test_foreign_issuer_is_rejected(self, generator, verifier):
        token = generator.generate_jwt("user-1", claims={"role": "admin"}, issuer="elsewhere")
        with pytest.raises(NotAuthenticatedError):
            verifier.verify_session_token(token)

    def test_token_without_role_is_rejected(self, generator, verifier):
        token = generator.generate_jwt("user-1")
        with pytest.raises(NotAuthenticatedError):
            verifier.verify_session_token(token)

    @pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
    def test_garbage_is_rejected(self, verifier, token):
        with pytest.raises(NotAuthenticatedError):
            verifier.verify_session_token(token)

    def test_missing_secret_is_a_configuration_error(self, generator, verifier):
        config = ConfigData(app=AppConfig(session_signing_secret=None))
        with with_context(config):
            with pytest.raises(ConfigurationError) as exc_info:
                generator.generate_session_token("user-1", "customer")
            assert exc_info.value.status_code == 500
            assert exc_info.value.detail == "Server configuration error"

            with pytest.raises(ConfigurationError):
                verifier.verify_session_token("a.b.c")

    def test_disallowed_algorithm(self, generator):
        with pytest.raises(ConfigurationError):
            generator.generate_jwt("user-1", algorithm="HS512")


class TestAuthSessionIssuer:
    def test_issues_token_and_redacted_user(self, customer):
        result = AuthSessionIssuer().issue(customer)

        claims = JwtVerificationService().verify_session_token(result.token)
        assert claims.user_id == customer.id
        assert claims.role == "customer"
        dumped = result.model_dump(by_alias=True)
        assert "otp" not in dumped["user"]
        assert "passwordHash" not in dumped["user"]
        assert dumped["vendorStatus"] is None
