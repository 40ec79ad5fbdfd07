from unittest.mock import Mock

import pytest

from xpub_principals.config import PrincipalsConfig
from xpub_principals.crypto.bip_utils_backend import BipUtilsBackend
from xpub_principals.exceptions import InvalidExtendedKeyError
from xpub_principals.generator import PrincipalGenerator
from xpub_principals.tests.constants import (
    PRINCIPALS_VECTOR_1,
    PRINCIPALS_VECTOR_2,
    TPUB_VECTOR_1,
    XPRV_VECTOR_1,
    XPUB_VECTOR_1,
    XPUB_VECTOR_2,
)


def test_generator_defaults_to_bip_utils_backend() -> None:
    generator = PrincipalGenerator()

    assert isinstance(generator._backend, BipUtilsBackend)
    assert generator.config == PrincipalsConfig()


def test_generate_uses_default_count() -> None:
    generator = PrincipalGenerator(PrincipalsConfig(default_count=2))

    assert generator.generate(XPUB_VECTOR_2) == PRINCIPALS_VECTOR_2[:2]


def test_generate_with_explicit_count() -> None:
    assert PrincipalGenerator().generate(XPUB_VECTOR_1, 3) == PRINCIPALS_VECTOR_1


def test_generate_default_count_is_eight() -> None:
    principals = PrincipalGenerator().generate(XPUB_VECTOR_1)

    assert len(principals) == 8
    assert len(set(principals)) == 8
    assert principals[:3] == PRINCIPALS_VECTOR_1


def test_generate_testnet_key_matches_mainnet() -> None:
    generator = PrincipalGenerator()

    assert generator.generate(TPUB_VECTOR_1, 3) == generator.generate(XPUB_VECTOR_1, 3)


def test_generate_rejects_private_key() -> None:
    with pytest.raises(InvalidExtendedKeyError):
        PrincipalGenerator().generate(XPRV_VECTOR_1, 1)


def test_iter_principals_is_lazy() -> None:
    backend = Mock()
    generator = PrincipalGenerator(backend=backend)

    backend.parse_extended_key.side_effect = InvalidExtendedKeyError("Invalid extended public key")

    iterator = generator.iter_principals(XPUB_VECTOR_1, 1)

    backend.parse_extended_key.assert_not_called()
    with pytest.raises(InvalidExtendedKeyError):
        next(iterator)
    backend.parse_extended_key.assert_called_once_with(XPUB_VECTOR_1)


def test_generate_uses_injected_backend() -> None:
    backend = BipUtilsBackend(networks=("mainnet",))
    generator = PrincipalGenerator(backend=backend)

    with pytest.raises(InvalidExtendedKeyError):
        generator.generate(TPUB_VECTOR_1, 1)


@pytest.mark.asyncio
async def test_generate_async_matches_generate() -> None:
    generator = PrincipalGenerator()

    assert await generator.generate_async(XPUB_VECTOR_2, 3) == PRINCIPALS_VECTOR_2
