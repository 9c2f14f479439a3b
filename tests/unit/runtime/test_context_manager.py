import pytest

from src.marketplace.runtime.config.config_data import (
    AppConfig,
    ConfigData,
    OtpConfig,
    PhoneConfig,
)
from src.marketplace.runtime.context import get_config, with_context


class TestWithContext:
    def test_partial_override_inherits_the_rest(self):
        before = get_config()
        with with_context(ConfigData(otp=OtpConfig(expiry_minutes=1))):
            current = get_config()
            assert current.otp.expiry_minutes == 1
            assert current.otp.length == before.otp.length
            assert current.app.session_signing_secret == before.app.session_signing_secret
        assert get_config().otp.expiry_minutes == before.otp.expiry_minutes

    def test_nested_overrides(self):
        with with_context(ConfigData(phone=PhoneConfig(country_code="44"))):
            with with_context(ConfigData(app=AppConfig(environment="production"))):
                assert get_config().phone.country_code == "44"
                assert get_config().app.is_production
            assert not get_config().app.is_production

    def test_none_is_a_no_op(self):
        before = get_config()
        with with_context(None):
            assert get_config() is before

    def test_rejects_other_types(self):
        with pytest.raises(ValueError):
            with with_context({"otp": {"length": 4}}):
                pass

    def test_test_environment_is_loaded(self):
        assert get_config().app.environment == "test"
        assert get_config().app.session_signing_secret == "test-signing-secret"
