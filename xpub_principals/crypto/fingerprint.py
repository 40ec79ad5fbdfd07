"""
Self-authenticating principal encoding.

A principal is derived from the DER encoding of a public key:

    payload   = SHA-224(der) || tag
    data      = CRC-32(payload) (big-endian) || payload
    principal = lowercase unpadded base32(data), in hyphen-separated groups of 5

The checksum comes first so a verifier can check integrity before looking at
the payload. With a 28-byte digest the text is always 53 characters in
11 groups, 63 characters overall.
"""

import base64
import binascii
import hashlib
import hmac
import zlib

from xpub_principals.exceptions import ChecksumMismatchError, EncodingError, PrincipalFormatError
from xpub_principals.models.keys import DecodedPrincipal, PrincipalTag

DIGEST_SIZE = hashlib.sha224().digest_size
CHECKSUM_SIZE = 4
CHUNK_SIZE = 5
CHUNK_SEPARATOR = "-"
ENCODED_LENGTH = 53
PRINCIPAL_LENGTH = ENCODED_LENGTH + (ENCODED_LENGTH - 1) // CHUNK_SIZE

_BASE32_ALPHABET = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ234567")


def self_authenticating(der: bytes) -> str:
    """
    Compute the self-authenticating principal of a DER-encoded public key.

    Args:
        der: DER SubjectPublicKeyInfo bytes.

    Returns:
        63-character lowercase principal.

    Raises:
        EncodingError: If the produced text does not have the fixed length.
    """
    payload = hashlib.sha224(der).digest() + bytes([PrincipalTag.SELF_AUTHENTICATING])
    text = _encode_text(_prepend_checksum(payload))
    principal = CHUNK_SEPARATOR.join(split_chunks(text, CHUNK_SIZE))
    if len(principal) != PRINCIPAL_LENGTH:
        msg = f"Principal has unexpected length: {len(principal)}"
        raise EncodingError(msg)
    return principal


def split_chunks(text: str, size: int) -> list[str]:
    """
    Split text into consecutive groups of `size` characters.

    The last group holds the remainder. Text no longer than `size` is a single group.

    Raises:
        ValueError: If size is not positive.
    """
    if size <= 0:
        msg = "'size' must be a strictly positive integer."
        raise ValueError(msg)
    if len(text) <= size:
        return [text]
    return [text[i : i + size] for i in range(0, len(text), size)]


def decode_principal(text: str) -> DecodedPrincipal:
    """
    Parse a principal back into checksum, digest and tag.

    A tag other than SELF_AUTHENTICATING is returned as-is; callers decide
    whether they handle that identifier type.

    Args:
        text: Principal, with or without hyphens, in any letter case.

    Returns:
        The decoded fields.

    Raises:
        PrincipalFormatError: If the text is not canonical base32, is too short,
            or is a self-authenticating principal with the wrong digest size.
        ChecksumMismatchError: If the checksum does not match the payload.
    """
    compact = text.strip().replace(CHUNK_SEPARATOR, "").upper()
    if not compact or not set(compact) <= _BASE32_ALPHABET:
        msg = "Principal contains characters outside the base32 alphabet"
        raise PrincipalFormatError(msg, principal=text)

    data = _decode_text(compact, text)
    if len(data) <= CHECKSUM_SIZE:
        msg = f"Principal payload too short: {len(data)} bytes"
        raise PrincipalFormatError(msg, principal=text)

    expected = int.from_bytes(data[:CHECKSUM_SIZE], "big")
    payload = data[CHECKSUM_SIZE:]
    actual = zlib.crc32(payload)
    if expected != actual:
        msg = "Principal checksum mismatch"
        raise ChecksumMismatchError(msg, expected=expected, actual=actual)

    tag = payload[-1]
    if tag == PrincipalTag.SELF_AUTHENTICATING and len(payload) != DIGEST_SIZE + 1:
        msg = f"Self-authenticating principal has wrong digest size: {len(payload) - 1} bytes"
        raise PrincipalFormatError(msg, principal=text)

    return DecodedPrincipal(checksum=expected, digest=payload[:-1], tag=tag)


def verify_principal(principal: str, der: bytes) -> bool:
    """
    Check that a principal was derived from the given DER public key.

    Malformed principals and other identifier types yield False.
    """
    try:
        decoded = decode_principal(principal)
    except PrincipalFormatError:
        return False
    if not decoded.is_self_authenticating:
        return False
    return hmac.compare_digest(decoded.digest, hashlib.sha224(der).digest())


def _prepend_checksum(payload: bytes) -> bytes:
    return zlib.crc32(payload).to_bytes(CHECKSUM_SIZE, "big") + payload


def _encode_text(data: bytes) -> str:
    return base64.b32encode(data).decode("ascii").rstrip("=").lower()


def _decode_text(compact: str, original: str) -> bytes:
    padded = compact + "=" * (-len(compact) % 8)
    try:
        data = base64.b32decode(padded)
    except binascii.Error as e:
        msg = f"Invalid base32 length: {len(compact)} characters"
        raise PrincipalFormatError(msg, principal=original) from e
    # Unused trailing bits must be zero so each payload has one spelling.
    if _encode_text(data) != compact.lower():
        msg = "Principal is not canonical base32"
        raise PrincipalFormatError(msg, principal=original)
    return data
