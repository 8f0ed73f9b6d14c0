"""Value types returned by contract façades and handles."""

import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from .constants import (
    DEFAULT_QUERY_ALL_COUNT,
    MAX_UINT256,
    NATIVE_TOKEN_ADDRESS,
    ZERO_ADDRESS,
    ZERO_BYTES32,
)


def is_native_currency(currency: str) -> bool:
    return currency.lower() in (NATIVE_TOKEN_ADDRESS.lower(), ZERO_ADDRESS)


@dataclass
class TransactionResult:
    """Receipt of a confirmed transaction."""

    receipt: Any


@dataclass
class TransactionResultWithId(TransactionResult):
    """
    Receipt plus the id of the token the transaction created.

    ``data()`` fetches the created token lazily.
    """

    id: int = 0
    fetch: Optional[Callable[[], Awaitable[Any]]] = field(default=None, repr=False)

    async def data(self) -> Any:
        if self.fetch is None:
            raise ValueError(f"No data fetcher available for token {self.id}")
        return await self.fetch()


@dataclass
class NFT:
    """On-chain token plus its resolved metadata."""

    metadata: Dict[str, Any]
    owner: str
    type: str
    supply: int
    quantity_owned: Optional[int] = None


@dataclass
class QueryAllParams:
    """Pagination for enumeration queries."""

    start: int = 0
    count: int = DEFAULT_QUERY_ALL_COUNT


@dataclass
class ClaimCondition:
    """
    One phase of a drop's claim conditions.

    Defaults describe an open, free, unlimited phase starting now.
    """

    start_timestamp: int = field(default_factory=lambda: int(time.time()))
    max_claimable_supply: int = MAX_UINT256
    supply_claimed: int = 0
    quantity_limit_per_wallet: int = MAX_UINT256
    merkle_root: bytes = ZERO_BYTES32
    price_per_token: int = 0
    currency: str = NATIVE_TOKEN_ADDRESS
    metadata: str = ""

    def to_tuple(self) -> Tuple:
        return (
            self.start_timestamp,
            self.max_claimable_supply,
            self.supply_claimed,
            self.quantity_limit_per_wallet,
            self.merkle_root,
            self.price_per_token,
            self.currency,
            self.metadata,
        )

    @classmethod
    def from_tuple(cls, raw) -> "ClaimCondition":
        return cls(*raw)

    @property
    def is_native(self) -> bool:
        return is_native_currency(self.currency)


@dataclass
class ClaimOptions:
    """
    Overrides for a claim.

    Attributes:
        price_per_token: Price to pay, defaults to the active phase's price
        currency: Currency to pay with, defaults to the active phase's
        proofs: Merkle proof for allowlisted wallets
        quantity_limit_per_wallet: Allowlist limit matching ``proofs``
    """

    price_per_token: Optional[int] = None
    currency: Optional[str] = None
    proofs: List[bytes] = field(default_factory=list)
    quantity_limit_per_wallet: int = 0


@dataclass
class SignedPayload:
    """A mint request and the signature of an authorized minter."""

    payload: Dict[str, Any]
    signature: bytes
