"""
xpub_principals.

Derives self-authenticating principals for the public keys of an HD wallet
from a single extended public key.

Example:
    ```python
    from xpub_principals import PrincipalGenerator

    generator = PrincipalGenerator()
    for principal in generator.generate("xpub661MyMwAqRbc...", 8):
        print(principal)
    ```
"""

from xpub_principals.config import PrincipalsConfig
from xpub_principals.crypto.fingerprint import decode_principal, self_authenticating, verify_principal
from xpub_principals.exceptions import (
    ChecksumMismatchError,
    DerivationError,
    EncodingError,
    InputError,
    InvalidExtendedKeyError,
    PrincipalFormatError,
    XpubPrincipalsError,
)
from xpub_principals.generator import PrincipalGenerator
from xpub_principals.models.keys import CurvePoint, DecodedPrincipal, PrincipalTag

__version__ = "0.1.0"

__all__ = [
    # Main entry point
    "PrincipalGenerator",
    "PrincipalsConfig",
    # Encoding
    "self_authenticating",
    "decode_principal",
    "verify_principal",
    # Models
    "CurvePoint",
    "DecodedPrincipal",
    "PrincipalTag",
    # Exceptions
    "XpubPrincipalsError",
    "InputError",
    "InvalidExtendedKeyError",
    "DerivationError",
    "EncodingError",
    "PrincipalFormatError",
    "ChecksumMismatchError",
]
