"""
Key-derivation backend protocol definition.

This defines the interface for HD public key derivation, allowing different
implementations (bip_utils, another BIP32 library, test doubles) to be swapped
without changing the principal pipeline.
"""

from typing import Protocol, runtime_checkable

from xpub_principals.models.keys import CurvePoint


@runtime_checkable
class ExtendedPublicKey(Protocol):
    """Protocol for a node of an HD public key tree."""

    def derive_child(self, index: int) -> "ExtendedPublicKey":
        """
        Derive a non-hardened child key.

        Args:
            index: Child index, below the hardened offset (2**31).

        Returns:
            The child extended public key.

        Raises:
            DerivationError: If the child cannot be derived.
        """
        ...

    def public_key_point(self) -> CurvePoint:
        """Get the affine point of this node's public key."""
        ...


@runtime_checkable
class KeyDerivationBackend(Protocol):
    """
    Abstract interface for parsing serialized extended public keys.

    Implementations can use bip_utils or any other BIP32 library.
    """

    def parse_extended_key(self, text: str) -> ExtendedPublicKey:
        """
        Parse a Base58Check-encoded extended public key.

        Args:
            text: Serialized extended public key (xpub, tpub).

        Returns:
            The root node of the key tree.

        Raises:
            InvalidExtendedKeyError: If the string is not a usable extended public key.
        """
        ...
