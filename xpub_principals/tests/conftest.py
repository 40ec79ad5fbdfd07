from collections.abc import Callable, Iterator
from unittest.mock import Mock

import pytest
import structlog

from xpub_principals.crypto.bip_utils_backend import BipUtilsBackend
from xpub_principals.models.keys import CurvePoint
from xpub_principals.tests.constants import GENERATOR_X, GENERATOR_Y


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


@pytest.fixture
def generator_point() -> CurvePoint:
    return CurvePoint(x=GENERATOR_X, y=GENERATOR_Y)


@pytest.fixture
def backend() -> BipUtilsBackend:
    return BipUtilsBackend()


@pytest.fixture
def make_key_tree(generator_point: CurvePoint) -> Callable[..., Mock]:
    """Build a mock root -> account -> leaf tree where every leaf has the same point."""

    def _make(leaf_error_at: int | None = None) -> Mock:
        leaf = Mock()
        leaf.public_key_point.return_value = generator_point

        def _derive_leaf(index: int) -> Mock:
            if index == leaf_error_at:
                raise RuntimeError("index exhausted")
            return leaf

        account = Mock()
        account.derive_child.side_effect = _derive_leaf
        root = Mock()
        root.derive_child.return_value = account
        return root

    return _make
