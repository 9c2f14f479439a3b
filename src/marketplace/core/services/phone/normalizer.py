"""Phone number normalization and variant generation."""

import re

from src.marketplace.runtime.config.config_data import PhoneConfig

_NON_DIGITS = re.compile(r"\D")


def normalize_phone(raw: str | None) -> str | None:
    """Strip every non-digit character; ``None`` when nothing is left."""
    if not raw:
        return None
    digits = _NON_DIGITS.sub("", raw)
    return digits or None


class PhoneNormalizer:
    """Maps phone strings to comparable forms for one country calling code.

    All methods are pure: the same input always yields the same output.
    """

    def __init__(self, country_code: str = "962", national_length: int = 9) -> None:
        self.country_code = country_code
        self.national_length = national_length

    @classmethod
    def from_config(cls, config: PhoneConfig) -> "PhoneNormalizer":
        return cls(config.country_code, config.national_number_length)

    def normalize(self, raw: str | None) -> str | None:
        return normalize_phone(raw)

    def national_number(self, digits: str) -> str | None:
        """Reduce a digits-only string to its national number, if recognisable."""
        code = self.country_code
        n = self.national_length
        international = "00" + code
        if len(digits) == n:
            return digits
        if len(digits) == n + 1 and digits.startswith("0"):
            return digits[1:]
        if len(digits) == n + len(code) and digits.startswith(code):
            return digits[len(code):]
        if len(digits) == n + len(international) and digits.startswith(international):
            return digits[len(international):]
        return None

    def candidates(self, raw: str | None) -> list[str]:
        """Plausible stored representations of ``raw``, deduplicated, in a fixed order.

        The digits-only form of ``raw`` is always a member.
        """
        digits = self.normalize(raw)
        if digits is None:
            return []

        code = self.country_code
        national = self.national_number(digits)
        if national is not None:
            variants = [
                f"+{code}{national}",
                f"00{code}{national}",
                f"{code}{national}",
                f"0{national}",
                national,
                digits,
            ]
        else:
            variants = [
                digits,
                f"+{code}{digits}",
                f"00{code}{digits}",
                f"{code}{digits}",
                f"0{digits}",
                f"+{digits}",
            ]
        return list(dict.fromkeys(variants))

    def to_e164(self, raw: str | None) -> str | None:
        """Format ``raw`` as ``+<country><national>`` for outbound SMS."""
        digits = self.normalize(raw)
        if digits is None:
            return None
        if raw is not None and raw.strip().startswith("+"):
            return f"+{digits}"
        national = self.national_number(digits)
        if national is not None:
            return f"+{self.country_code}{national}"
        return f"+{digits}"
