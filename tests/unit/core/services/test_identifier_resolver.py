import pytest

from src.marketplace.core.models import LoginRequest
from src.marketplace.core.services import (
    IdentifierResolver,
    LoginIdentifiers,
    PhoneMatcher,
    ScanPhoneMatcher,
    resolve_identifiers,
)
from src.marketplace.entities import UserRepository


class SpyMatcher(PhoneMatcher):
    def __init__(self, result: str | None = None):
        self.calls: list[str] = []
        self.result = result

    def match(self, normalized_phone: str) -> str | None:
        self.calls.append(normalized_phone)
        return self.result


class TestResolveIdentifiers:
    def test_email_or_phone_with_at_sign_is_an_email(self):
        ids = resolve_identifiers(LoginRequest(email_or_phone="a@b.com"))
        assert ids == LoginIdentifiers(email="a@b.com")

    def test_email_or_phone_without_at_sign_is_a_phone(self):
        ids = resolve_identifiers(LoginRequest(email_or_phone="+962 79 123 4567"))
        assert ids == LoginIdentifiers(phone="962791234567")

    def test_phone_number_wins_over_phone(self):
        ids = resolve_identifiers(LoginRequest(phone_number="0791", phone="0792"))
        assert ids.phone == "0791"

    def test_camel_case_payload(self):
        ids = resolve_identifiers(LoginRequest.model_validate({"phoneNumber": "079-1"}))
        assert ids.phone == "0791"

    def test_empty_payload(self):
        assert resolve_identifiers(LoginRequest()).is_empty


class TestIdentifierResolver:
    @pytest.fixture
    def users(self, session) -> UserRepository:
        return UserRepository(session)

    @pytest.fixture
    def resolver(self, users, normalizer) -> IdentifierResolver:
        return IdentifierResolver(users, normalizer)

    def test_exact_username(self, resolver, customer):
        assert resolver.find(LoginIdentifiers(username="layla")).id == customer.id

    def test_exact_email(self, resolver, customer):
        assert resolver.find(LoginIdentifiers(email="layla@example.com")).id == customer.id

    def test_international_input_matches_trunk_stored_phone(self, resolver, customer):
        # stored as 0791234567
        found = resolver.find(LoginIdentifiers(phone="962791234567"))
        assert found.id == customer.id

    def test_trunk_input_matches_international_stored_phone(self, resolver, bakery_owner):
        # stored as +962780000002
        found = resolver.find(LoginIdentifiers(phone="0780000002"))
        assert found.id == bakery_owner.id

    def test_national_input_matches_trunk_stored_phone(self, users, normalizer, customer):
        # stored as 0791234567
        spy = SpyMatcher()
        resolver = IdentifierResolver(users, normalizer, spy)

        found = resolver.find(LoginIdentifiers(phone="791234567"))

        assert found.id == customer.id
        assert spy.calls == []

    def test_formatted_stored_phone_falls_through_to_matcher(self, resolver, make_user):
        user = make_user(phone_number="(079) 555-1234")
        found = resolver.find(LoginIdentifiers(phone="962795551234"))
        assert found.id == user.id

    def test_unknown_identifier(self, resolver, customer):
        assert resolver.find(LoginIdentifiers(username="nobody")) is None

    def test_empty_identifiers(self, resolver, customer):
        assert resolver.find(LoginIdentifiers()) is None

    def test_short_phone_skips_matcher(self, users, normalizer):
        spy = SpyMatcher()
        resolver = IdentifierResolver(users, normalizer, phone_matcher=spy)
        assert resolver.find(LoginIdentifiers(phone="12345")) is None
        assert spy.calls == []

    def test_custom_matcher_is_used(self, users, normalizer, customer):
        spy = SpyMatcher(result=customer.id)
        resolver = IdentifierResolver(users, normalizer, phone_matcher=spy)
        assert resolver.find(LoginIdentifiers(phone="5550001111")).id == customer.id
        assert spy.calls == ["5550001111"]


class TestScanPhoneMatcher:
    def test_last_nine_digits(self, session, make_user):
        user = make_user(phone_number="(079) 123-4567")
        matcher = ScanPhoneMatcher(UserRepository(session))
        assert matcher.match("00962791234567") == user.id

    def test_last_seven_digits(self, session, make_user):
        user = make_user(phone_number="555-1234567")
        matcher = ScanPhoneMatcher(UserRepository(session))
        assert matcher.match("1234567") == user.id

    def test_earliest_created_user_wins_ties(self, session, make_user):
        first = make_user(phone_number="(079) 123-4567")
        make_user(phone_number="1 (079) 123-4567")
        matcher = ScanPhoneMatcher(UserRepository(session))
        assert matcher.match("00962791234567") == first.id

    def test_no_match(self, session, make_user):
        make_user(phone_number="0791234567")
        matcher = ScanPhoneMatcher(UserRepository(session))
        assert matcher.match("88888888") is None
