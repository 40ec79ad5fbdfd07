"""
Domain models for xpub_principals.

These are immutable (frozen) dataclasses representing the core domain concepts.
"""

from xpub_principals.models.keys import (
    SECP256K1_ALGORITHM,
    AlgorithmIdentifierPair,
    CurvePoint,
    DecodedPrincipal,
    EncodedPublicKeyRecord,
    PrincipalTag,
)

__all__ = [
    "SECP256K1_ALGORITHM",
    "AlgorithmIdentifierPair",
    "CurvePoint",
    "DecodedPrincipal",
    "EncodedPublicKeyRecord",
    "PrincipalTag",
]
