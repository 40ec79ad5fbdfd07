"""
Principal generation configuration.
"""

from dataclasses import dataclass

SUPPORTED_NETWORKS = ("mainnet", "testnet")


@dataclass(frozen=True, kw_only=True)
class PrincipalsConfig:
    """
    Attributes:
        default_count: Number of principals generated when no count is given.
        max_concurrency: Maximum number of child keys processed concurrently
            by the async driver.
        networks: Extended key version sets accepted when parsing, tried in order.
    """

    default_count: int = 8
    max_concurrency: int = 4
    networks: tuple[str, ...] = SUPPORTED_NETWORKS

    def __post_init__(self) -> None:
        if self.default_count < 0:
            msg = "default_count must be non-negative"
            raise ValueError(msg)
        if self.max_concurrency <= 0:
            msg = "max_concurrency must be positive"
            raise ValueError(msg)
        if not self.networks:
            msg = "networks must not be empty"
            raise ValueError(msg)
        unknown = [n for n in self.networks if n not in SUPPORTED_NETWORKS]
        if unknown:
            msg = f"Unknown networks: {', '.join(unknown)}"
            raise ValueError(msg)
