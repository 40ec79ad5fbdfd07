"""
SEC1 point encoding for secp256k1 public keys.
"""

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from xpub_principals.exceptions import EncodingError
from xpub_principals.models.keys import CurvePoint

CURVE = ec.SECP256K1()
FIELD_SIZE = (CURVE.key_size + 7) // 8
UNCOMPRESSED_POINT_MARKER = 0x04
UNCOMPRESSED_POINT_SIZE = 1 + 2 * FIELD_SIZE


def load_public_key(point: CurvePoint) -> ec.EllipticCurvePublicKey:
    """
    Build a cryptography public key object for a point.

    Raises:
        EncodingError: If the point is not on secp256k1.
    """
    try:
        return ec.EllipticCurvePublicNumbers(point.x, point.y, CURVE).public_key()
    except ValueError as e:
        msg = f"Point is not on {CURVE.name}: {e}"
        raise EncodingError(msg) from e


def encode_uncompressed_point(point: CurvePoint) -> bytes:
    """
    Encode a point as 0x04 || X || Y, each coordinate padded to the field size.

    Args:
        point: Point on secp256k1.

    Returns:
        65-byte uncompressed point encoding.

    Raises:
        EncodingError: If the point is not on the curve.
    """
    encoded = load_public_key(point).public_bytes(
        serialization.Encoding.X962,
        serialization.PublicFormat.UncompressedPoint,
    )
    if len(encoded) != UNCOMPRESSED_POINT_SIZE or encoded[0] != UNCOMPRESSED_POINT_MARKER:
        msg = f"Unexpected uncompressed point encoding: {len(encoded)} bytes"
        raise EncodingError(msg)
    return encoded


def decode_uncompressed_point(data: bytes) -> CurvePoint:
    """
    Decode a SEC1 point encoding.

    Compressed encodings are accepted as well and decompressed.

    Raises:
        EncodingError: If the bytes are not a valid secp256k1 point.
    """
    try:
        public_key = ec.EllipticCurvePublicKey.from_encoded_point(CURVE, data)
    except ValueError as e:
        msg = f"Invalid {CURVE.name} point encoding: {e}"
        raise EncodingError(msg) from e
    numbers = public_key.public_numbers()
    return CurvePoint(x=numbers.x, y=numbers.y)
