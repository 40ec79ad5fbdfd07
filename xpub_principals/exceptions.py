"""
xpub_principals exception hierarchy.

All exceptions inherit from XpubPrincipalsError for easy catching.
"""

from typing import Any


class XpubPrincipalsError(Exception):
    """Base exception for all xpub_principals errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class InputError(XpubPrincipalsError):
    """User-supplied input could not be used."""


class InvalidExtendedKeyError(InputError):
    """Extended public key string is malformed or not a public key."""


class DerivationError(XpubPrincipalsError):
    """Key-derivation collaborator failed to derive a child key."""

    def __init__(self, message: str, *, index: int | None = None) -> None:
        super().__init__(message, index=index)
        self.index = index


class EncodingError(XpubPrincipalsError):
    """Point, DER or text encoding failed on well-formed input."""


class PrincipalFormatError(XpubPrincipalsError):
    """Principal string cannot be decoded."""


class ChecksumMismatchError(PrincipalFormatError):
    """Principal checksum does not match its payload."""

    def __init__(self, message: str, *, expected: int, actual: int) -> None:
        super().__init__(message, expected=f"{expected:08x}", actual=f"{actual:08x}")
        self.expected = expected
        self.actual = actual
