"""
DER encoding of EC public keys.

The record is a SubjectPublicKeyInfo restricted to named-curve EC keys:

    SEQUENCE {
      SEQUENCE {
        OBJECT IDENTIFIER  1.2.840.10045.2.1  (id-ecPublicKey)
        OBJECT IDENTIFIER  1.3.132.0.10       (secp256k1)
      }
      BIT STRING  0 unused bits || uncompressed point
    }
"""

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from xpub_principals.crypto.point_codec import (
    CURVE,
    UNCOMPRESSED_POINT_SIZE,
    encode_uncompressed_point,
    load_public_key,
)
from xpub_principals.exceptions import EncodingError
from xpub_principals.models.keys import SECP256K1_ALGORITHM, CurvePoint, EncodedPublicKeyRecord

# SEQUENCE(86) { SEQUENCE(16) { OID(7), OID(5) }, BIT STRING(66) { 0x00 } }
SPKI_PREFIX = bytes.fromhex("3056301006072a8648ce3d020106052b8104000a034200")
SPKI_SIZE = len(SPKI_PREFIX) + UNCOMPRESSED_POINT_SIZE


def encode_public_key_der(point: CurvePoint) -> bytes:
    """
    Serialize a secp256k1 public key to DER SubjectPublicKeyInfo.

    Args:
        point: Point on secp256k1.

    Returns:
        88-byte DER encoding.

    Raises:
        EncodingError: If the point is invalid or the serializer output has an
            unexpected layout.
    """
    public_key = load_public_key(point)
    try:
        der = public_key.public_bytes(
            serialization.Encoding.DER,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        )
    except ValueError as e:
        msg = f"DER serialization failed: {e}"
        raise EncodingError(msg) from e
    _validate_layout(der)
    return der


def encode_public_key_record(point: CurvePoint) -> EncodedPublicKeyRecord:
    """Build the full encoded record (identifiers, point bytes and DER) for a point."""
    return EncodedPublicKeyRecord(
        algorithm=SECP256K1_ALGORITHM,
        point_encoding=encode_uncompressed_point(point),
        der=encode_public_key_der(point),
    )


def decode_public_key_der(der: bytes) -> CurvePoint:
    """
    Parse a DER SubjectPublicKeyInfo back into a point.

    Args:
        der: DER bytes.

    Returns:
        The encoded secp256k1 point.

    Raises:
        EncodingError: If the bytes are not an EC public key on secp256k1.
    """
    try:
        public_key = serialization.load_der_public_key(der)
    except (ValueError, UnsupportedAlgorithm) as e:
        msg = f"Invalid DER public key: {e}"
        raise EncodingError(msg) from e

    if not isinstance(public_key, ec.EllipticCurvePublicKey):
        msg = f"Not an EC public key: {type(public_key).__name__}"
        raise EncodingError(msg)
    if public_key.curve.name != CURVE.name:
        msg = f"Unsupported curve: {public_key.curve.name}"
        raise EncodingError(msg)

    numbers = public_key.public_numbers()
    return CurvePoint(x=numbers.x, y=numbers.y)


def _validate_layout(der: bytes) -> None:
    if len(der) == SPKI_SIZE and der.startswith(SPKI_PREFIX):
        return
    msg = f"Unexpected SubjectPublicKeyInfo layout: {der[: len(SPKI_PREFIX)].hex()}"
    raise EncodingError(msg)
