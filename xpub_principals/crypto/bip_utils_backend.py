"""
BIP32 public derivation on secp256k1 backed by bip_utils.

Serialized keys are tried against each accepted network's version bytes.
Only public-only nodes are handed out, and children are derived with
non-hardened indices.
"""

from collections.abc import Iterable
from dataclasses import dataclass

import structlog
from bip_utils import Bip32KeyNetVersions, Bip32Slip10Secp256k1

from xpub_principals.config import SUPPORTED_NETWORKS
from xpub_principals.exceptions import DerivationError, InvalidExtendedKeyError
from xpub_principals.models.keys import CurvePoint

logger = structlog.get_logger(__name__)

HARDENED_OFFSET = 0x80000000

# Version bytes (public, private) of BIP32 serialized keys.
NET_VERSIONS = {
    "mainnet": Bip32KeyNetVersions(bytes.fromhex("0488b21e"), bytes.fromhex("0488ade4")),
    "testnet": Bip32KeyNetVersions(bytes.fromhex("043587cf"), bytes.fromhex("04358394")),
}


@dataclass
class BipUtilsExtendedKey:
    """Wrapper around a public-only bip_utils BIP32 node to implement ExtendedPublicKey protocol."""

    _key: Bip32Slip10Secp256k1

    @property
    def depth(self) -> int:
        return self._key.Depth().ToInt()

    def derive_child(self, index: int) -> "BipUtilsExtendedKey":
        """
        Derive a non-hardened child key.

        Raises:
            DerivationError: If the index is hardened or out of range, or the
                library cannot derive the child.
        """
        if not 0 <= index < HARDENED_OFFSET:
            msg = f"Child index outside the non-hardened range: {index}"
            raise DerivationError(msg, index=index)
        try:
            child = self._key.ChildKey(index)
        except Exception as e:
            msg = f"Failed to derive child key: {e}"
            raise DerivationError(msg, index=index) from e
        return BipUtilsExtendedKey(_key=child)

    def public_key_point(self) -> CurvePoint:
        point = self._key.PublicKey().KeyObject().Point()
        return CurvePoint(x=point.X(), y=point.Y())

    def to_extended(self) -> str:
        """Serialize this node back to its Base58Check extended key string."""
        return self._key.PublicKey().ToExtended()


class BipUtilsBackend:
    """
    Key-derivation backend implementation using bip_utils.

    Example:
        backend = BipUtilsBackend()
        root = backend.parse_extended_key("xpub...")
        point = root.derive_child(0).derive_child(7).public_key_point()
    """

    def __init__(self, networks: Iterable[str] = SUPPORTED_NETWORKS) -> None:
        """
        Args:
            networks: Names of the version byte sets accepted by the parser, tried in order.
        """
        self._networks = tuple(networks)
        unknown = [n for n in self._networks if n not in NET_VERSIONS]
        if unknown:
            msg = f"Unknown networks: {', '.join(unknown)}"
            raise ValueError(msg)

    def parse_extended_key(self, text: str) -> BipUtilsExtendedKey:
        """
        Parse a Base58Check extended public key.

        Args:
            text: Serialized extended public key.

        Returns:
            BipUtilsExtendedKey wrapper for the root node.

        Raises:
            InvalidExtendedKeyError: If the string cannot be parsed for any accepted
                network, or holds a private key.
        """
        key = self._load(text.strip())
        if not key.IsPublicOnly():
            msg = "Extended key is private; an extended public key is required"
            raise InvalidExtendedKeyError(msg)
        return BipUtilsExtendedKey(_key=key)

    def _load(self, text: str) -> Bip32Slip10Secp256k1:
        errors = []
        for network in self._networks:
            try:
                key = Bip32Slip10Secp256k1.FromExtendedKey(text, key_net_ver=NET_VERSIONS[network])
            except Exception as e:
                errors.append(f"{network}: {e}")
                continue
            logger.debug("Parsed extended key", network=network, depth=key.Depth().ToInt())
            return key

        msg = f"Invalid extended public key: {'; '.join(errors)}"
        raise InvalidExtendedKeyError(msg)
