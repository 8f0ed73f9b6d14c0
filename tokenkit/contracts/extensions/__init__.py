"""Capability handles for optional token extensions."""
from .burnable import Erc20Burnable, Erc721Burnable, Erc1155Burnable
from .claim import (
    ClaimConditions,
    Erc20ClaimConditions,
    Erc721Claimable,
    Erc721ClaimConditions,
    Erc1155Claimable,
    Erc1155ClaimConditions,
)
from .enumerable import (
    Erc721Enumerable,
    Erc721LogScanEnumerable,
    Erc1155Enumerable,
    Erc1155LogScanEnumerable,
)
from .lazy_mint import Erc721LazyMintable, Erc1155LazyMintable, LazyMintable
from .log_scan import scan_logs
from .mintable import (
    Erc20BatchMintable,
    Erc20Mintable,
    Erc721BatchMintable,
    Erc721Mintable,
    Erc1155BatchMintable,
    Erc1155Mintable,
)
from .reveal import DelayedReveal, Erc721DelayedReveal, Erc1155DelayedReveal
from .signature_mint import (
    Erc20SignatureMintable,
    Erc721SignatureMintable,
    Erc1155SignatureMintable,
    SignatureMintable,
)

__all__ = [
    "ClaimConditions",
    "DelayedReveal",
    "Erc20BatchMintable",
    "Erc20Burnable",
    "Erc20ClaimConditions",
    "Erc20Mintable",
    "Erc20SignatureMintable",
    "Erc721BatchMintable",
    "Erc721Burnable",
    "Erc721Claimable",
    "Erc721ClaimConditions",
    "Erc721DelayedReveal",
    "Erc721Enumerable",
    "Erc721LazyMintable",
    "Erc721LogScanEnumerable",
    "Erc721Mintable",
    "Erc721SignatureMintable",
    "Erc1155BatchMintable",
    "Erc1155Burnable",
    "Erc1155Claimable",
    "Erc1155ClaimConditions",
    "Erc1155DelayedReveal",
    "Erc1155Enumerable",
    "Erc1155LazyMintable",
    "Erc1155LogScanEnumerable",
    "Erc1155Mintable",
    "Erc1155SignatureMintable",
    "LazyMintable",
    "SignatureMintable",
    "scan_logs",
]
