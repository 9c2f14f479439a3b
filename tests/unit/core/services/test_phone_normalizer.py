import pytest

from src.marketplace.core.services import PhoneNormalizer, normalize_phone


class TestNormalizePhone:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("+962 79-123-4567", "962791234567"),
            ("(079) 123 4567", "0791234567"),
            ("0791234567", "0791234567"),
            ("abc", None),
            ("", None),
            (None, None),
        ],
    )
    def test_strips_non_digits(self, raw, expected):
        assert normalize_phone(raw) == expected


class TestCandidates:
    def test_trunk_prefixed_national_number(self, normalizer: PhoneNormalizer):
        assert normalizer.candidates("0791234567") == [
            "+962791234567",
            "00962791234567",
            "962791234567",
            "0791234567",
            "791234567",
        ]

    @pytest.mark.parametrize(
        "raw", ["+962791234567", "00962791234567", "962 79 123 4567", "791234567"]
    )
    def test_every_national_form_yields_the_same_variants(self, normalizer, raw):
        variants = normalizer.candidates(raw)
        assert variants[:5] == [
            "+962791234567",
            "00962791234567",
            "962791234567",
            "0791234567",
            "791234567",
        ]

    def test_unrecognised_number_falls_back_to_prefixing(self, normalizer):
        assert normalizer.candidates("12345") == [
            "12345",
            "+96212345",
            "0096212345",
            "96212345",
            "012345",
            "+12345",
        ]

    @pytest.mark.parametrize("raw", ["0791234567", "+44 7700 900123", "12-34", "962791234567"])
    def test_digits_only_form_is_always_a_candidate(self, normalizer, raw):
        variants = normalizer.candidates(raw)
        assert normalize_phone(raw) in variants
        assert len(variants) == len(set(variants))

    def test_empty_input_has_no_candidates(self, normalizer):
        assert normalizer.candidates("--") == []

    def test_country_code_is_configurable(self):
        uk = PhoneNormalizer("44", 10)
        assert uk.national_number("07700900123") == "7700900123"
        assert uk.candidates("07700900123")[0] == "+447700900123"


class TestToE164:
    def test_national_number_gets_country_code(self, normalizer):
        assert normalizer.to_e164("079 123 4567") == "+962791234567"

    def test_explicit_international_number_is_kept(self, normalizer):
        assert normalizer.to_e164("+44 7700 900123") == "+447700900123"

    def test_missing_number(self, normalizer):
        assert normalizer.to_e164(None) is None
