"""
Principal generator facade.

This is the main entry point for users of the library. It wires the
key-derivation backend to the derivation service behind a string-in,
strings-out API.
"""

from collections.abc import Iterator

import structlog

from xpub_principals.config import PrincipalsConfig
from xpub_principals.crypto.bip_utils_backend import BipUtilsBackend
from xpub_principals.crypto.protocol import ExtendedPublicKey, KeyDerivationBackend
from xpub_principals.services.derivation_service import DerivationService

logger = structlog.get_logger(__name__)


class PrincipalGenerator:
    """
    Generates principals from serialized extended public keys.

    Example:
        ```python
        generator = PrincipalGenerator()

        for principal in generator.generate("xpub661MyMwAqRbc...", 3):
            print(principal)

        # Concurrent variant
        principals = await generator.generate_async("xpub661MyMwAqRbc...", 100)
        ```

    Args:
        config: Configuration. Uses defaults if not provided.
        backend: Key-derivation backend. Defaults to BipUtilsBackend.
    """

    def __init__(
        self,
        config: PrincipalsConfig | None = None,
        *,
        backend: KeyDerivationBackend | None = None,
    ) -> None:
        self._config = config or PrincipalsConfig()
        self._backend = backend if backend is not None else BipUtilsBackend(self._config.networks)
        self._service = DerivationService(self._config)

    @property
    def config(self) -> PrincipalsConfig:
        return self._config

    def parse(self, xpub: str) -> ExtendedPublicKey:
        """
        Parse a serialized extended public key.

        Raises:
            InvalidExtendedKeyError: If the key cannot be parsed.
        """
        return self._backend.parse_extended_key(xpub)

    def generate(self, xpub: str, count: int | None = None) -> list[str]:
        """
        Generate principals for the first `count` leaves below the account key.

        Args:
            xpub: Serialized extended public key.
            count: Number of principals. Defaults to `config.default_count`.

        Returns:
            Principals in index order.

        Raises:
            InvalidExtendedKeyError: If the key cannot be parsed.
            DerivationError: If a child key cannot be derived.
        """
        return self._service.generate(self.parse(xpub), self._resolve_count(count))

    def iter_principals(self, xpub: str, count: int | None = None) -> Iterator[str]:
        """Lazily generate principals in index order."""
        yield from self._service.iter_principals(self.parse(xpub), self._resolve_count(count))

    async def generate_async(self, xpub: str, count: int | None = None) -> list[str]:
        """Generate principals concurrently; results are in index order."""
        return await self._service.generate_async(self.parse(xpub), self._resolve_count(count))

    def _resolve_count(self, count: int | None) -> int:
        if count is None:
            return self._config.default_count
        return count
