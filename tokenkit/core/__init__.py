"""Contract call plumbing shared by façades and capability handles."""
from .context import Connection, ContractContext
from .handle import CapabilityHandle
from .resolver import ContractResolver, ResolvedContract
from .storage import IpfsStorage, Storage
from .types import (
    NFT,
    ClaimCondition,
    ClaimOptions,
    QueryAllParams,
    SignedPayload,
    TransactionResult,
    TransactionResultWithId,
)

__all__ = [
    "CapabilityHandle",
    "ClaimCondition",
    "ClaimOptions",
    "Connection",
    "ContractContext",
    "ContractResolver",
    "IpfsStorage",
    "NFT",
    "QueryAllParams",
    "ResolvedContract",
    "SignedPayload",
    "Storage",
    "TransactionResult",
    "TransactionResultWithId",
]
