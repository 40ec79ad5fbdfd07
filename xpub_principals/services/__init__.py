"""
Business logic services for xpub_principals.
"""

from xpub_principals.services.derivation_service import (
    ACCOUNT_INDEX,
    DerivationService,
    principal_for_point,
)

__all__ = [
    "ACCOUNT_INDEX",
    "DerivationService",
    "principal_for_point",
]
