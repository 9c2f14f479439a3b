from .normalizer import PhoneNormalizer, normalize_phone

__all__ = ["PhoneNormalizer", "normalize_phone"]
