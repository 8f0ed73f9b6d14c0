"""Capability names, standard families and support levels."""

from enum import Enum, IntEnum


class StandardFamily(str, Enum):
    """Token standard a façade wraps."""

    ERC20 = "ERC20"
    ERC721 = "ERC721"
    ERC1155 = "ERC1155"

    def __str__(self) -> str:
        return self.value


class CapabilityName(str, Enum):
    """
    Optional extension tags.

    Stable across standard families; each family applies its own subset
    (see ``registry.requirements_for``).
    """

    ENUMERABLE = "Enumerable"
    MINTABLE = "Mintable"
    BATCH_MINTABLE = "BatchMintable"
    BURNABLE = "Burnable"
    LAZY_MINTABLE = "LazyMintable"
    CLAIMABLE = "Claimable"
    CLAIMABLE_WITH_CONDITIONS = "ClaimableWithConditions"
    SIGNATURE_MINTABLE = "SignatureMintable"
    REVEALABLE = "Revealable"

    def __str__(self) -> str:
        return self.value


class SupportLevel(IntEnum):
    """
    How much of a capability's interface a contract exposes.

    NONE < PARTIAL < FULL. FULL means every required selector is present,
    PARTIAL means only the designated minimal subset is.
    """

    NONE = 0
    PARTIAL = 1
    FULL = 2
