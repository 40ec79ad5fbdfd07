"""
Public key and principal domain models.
"""

from dataclasses import dataclass
from enum import IntEnum


class PrincipalTag(IntEnum):
    """Identifier type discriminator stored as the last byte of a principal payload."""

    SELF_AUTHENTICATING = 0x02


@dataclass(frozen=True, kw_only=True)
class CurvePoint:
    """
    Affine point on secp256k1.

    Attributes:
        x: X coordinate.
        y: Y coordinate.
    """

    x: int
    y: int

    def __post_init__(self) -> None:
        if self.x >= 0 and self.y >= 0:
            return
        msg = "Curve point coordinates must be non-negative"
        raise ValueError(msg)


@dataclass(frozen=True, kw_only=True)
class AlgorithmIdentifierPair:
    """
    Object identifiers placed in the AlgorithmIdentifier of an EC public key.

    Attributes:
        algorithm_oid: Dotted OID of the public key algorithm.
        curve_oid: Dotted OID of the named curve.
    """

    algorithm_oid: str
    curve_oid: str


SECP256K1_ALGORITHM = AlgorithmIdentifierPair(
    algorithm_oid="1.2.840.10045.2.1",
    curve_oid="1.3.132.0.10",
)


@dataclass(frozen=True, kw_only=True)
class EncodedPublicKeyRecord:
    """
    DER-encoded SubjectPublicKeyInfo for an EC public key.

    Attributes:
        algorithm: Algorithm and curve identifiers.
        point_encoding: Uncompressed point carried in the BIT STRING.
        der: Complete DER serialization.
    """

    algorithm: AlgorithmIdentifierPair
    point_encoding: bytes
    der: bytes


@dataclass(frozen=True, kw_only=True)
class DecodedPrincipal:
    """
    Fields recovered from a principal string.

    Attributes:
        checksum: CRC-32 carried in the first four bytes.
        digest: Hash of the key encoding.
        tag: Identifier type byte. Unknown values are kept as plain ints.
    """

    checksum: int
    digest: bytes
    tag: int

    @property
    def is_self_authenticating(self) -> bool:
        return self.tag == PrincipalTag.SELF_AUTHENTICATING
