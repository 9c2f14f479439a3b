from .resolver import (
    IdentifierResolver,
    LoginIdentifiers,
    PhoneMatcher,
    ScanPhoneMatcher,
    resolve_identifiers,
)

__all__ = [
    "IdentifierResolver",
    "LoginIdentifiers",
    "PhoneMatcher",
    "ScanPhoneMatcher",
    "resolve_identifiers",
]
