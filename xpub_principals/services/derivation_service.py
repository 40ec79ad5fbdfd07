"""
Principal derivation service.

Walks the HD key tree below a root extended public key and turns each leaf
public key into a principal: root -> account (index 0) -> leaf i.
"""

import asyncio
from collections.abc import Iterator

import structlog

from xpub_principals.config import PrincipalsConfig
from xpub_principals.crypto.der import encode_public_key_der
from xpub_principals.crypto.fingerprint import self_authenticating
from xpub_principals.crypto.protocol import ExtendedPublicKey
from xpub_principals.exceptions import DerivationError
from xpub_principals.models.keys import CurvePoint

logger = structlog.get_logger(__name__)

ACCOUNT_INDEX = 0


def principal_for_point(point: CurvePoint) -> str:
    """Compute the principal of a public key point."""
    return self_authenticating(encode_public_key_der(point))


class DerivationService:
    """
    Service for deriving principals from an extended public key.

    Every index is independent; a failure at any index aborts the whole run.
    """

    def __init__(self, config: PrincipalsConfig | None = None) -> None:
        """
        Args:
            config: Configuration. Uses defaults if not provided.
        """
        self._config = config or PrincipalsConfig()

    def generate(self, root: ExtendedPublicKey, count: int) -> list[str]:
        """
        Derive `count` principals in index order.

        Args:
            root: Root extended public key.
            count: Number of principals; 0 yields an empty list.

        Returns:
            Principals for leaf indices 0..count-1.

        Raises:
            ValueError: If count is negative.
            DerivationError: If any key cannot be derived.
        """
        return list(self.iter_principals(root, count))

    def iter_principals(self, root: ExtendedPublicKey, count: int) -> Iterator[str]:
        """
        Lazily derive principals in index order.

        Principals already yielded stay valid if a later index fails.
        """
        _validate_count(count)
        account = self._derive_account(root)
        for index in range(count):
            yield self._principal_at(account, index)
        logger.debug("Generated principals", count=count)

    async def generate_async(self, root: ExtendedPublicKey, count: int) -> list[str]:
        """
        Derive principals concurrently in worker threads.

        At most `max_concurrency` indices are processed at once. Results are
        returned in index order; the first failure propagates after the
        remaining indices are cancelled.
        """
        _validate_count(count)
        account = await asyncio.to_thread(self._derive_account, root)
        semaphore = asyncio.Semaphore(self._config.max_concurrency)

        async def _bounded(index: int) -> str:
            async with semaphore:
                return await asyncio.to_thread(self._principal_at, account, index)

        tasks = [asyncio.create_task(_bounded(index)) for index in range(count)]
        try:
            principals = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        logger.debug("Generated principals", count=count, concurrency=self._config.max_concurrency)
        return list(principals)

    def principal_for_key(self, key: ExtendedPublicKey) -> str:
        """Compute the principal of an extended key's own public key."""
        return principal_for_point(key.public_key_point())

    @staticmethod
    def _derive_account(root: ExtendedPublicKey) -> ExtendedPublicKey:
        logger.debug("Deriving account key", index=ACCOUNT_INDEX)
        return _derive(root, ACCOUNT_INDEX)

    def _principal_at(self, account: ExtendedPublicKey, index: int) -> str:
        child = _derive(account, index)
        try:
            point = child.public_key_point()
        except Exception as e:
            msg = f"Failed to read child public key: {e}"
            raise DerivationError(msg, index=index) from e
        principal = principal_for_point(point)
        logger.debug("Derived principal", index=index)
        return principal


def _derive(parent: ExtendedPublicKey, index: int) -> ExtendedPublicKey:
    try:
        return parent.derive_child(index)
    except DerivationError:
        raise
    except Exception as e:
        msg = f"Failed to derive child key: {e}"
        raise DerivationError(msg, index=index) from e


def _validate_count(count: int) -> None:
    if count >= 0:
        return
    msg = "count must be non-negative"
    raise ValueError(msg)
