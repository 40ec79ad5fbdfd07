"""
Cryptographic operations for xpub_principals.

This module provides:
- SEC1 point encoding for secp256k1
- DER SubjectPublicKeyInfo encoding of EC public keys
- Self-authenticating principal encoding and verification
- HD public key derivation through a swappable backend
"""

from xpub_principals.crypto.bip_utils_backend import BipUtilsBackend, BipUtilsExtendedKey
from xpub_principals.crypto.der import (
    decode_public_key_der,
    encode_public_key_der,
    encode_public_key_record,
)
from xpub_principals.crypto.fingerprint import (
    decode_principal,
    self_authenticating,
    split_chunks,
    verify_principal,
)
from xpub_principals.crypto.point_codec import decode_uncompressed_point, encode_uncompressed_point
from xpub_principals.crypto.protocol import ExtendedPublicKey, KeyDerivationBackend

__all__ = [
    "ExtendedPublicKey",
    "KeyDerivationBackend",
    "BipUtilsBackend",
    "BipUtilsExtendedKey",
    "encode_uncompressed_point",
    "decode_uncompressed_point",
    "encode_public_key_der",
    "encode_public_key_record",
    "decode_public_key_der",
    "self_authenticating",
    "split_chunks",
    "decode_principal",
    "verify_principal",
]
