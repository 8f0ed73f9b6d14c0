"""
ERC721 façade.

Non-fungible token operations plus the optional enumeration, minting,
burning, lazy minting, claiming, signature minting and delayed reveal
extensions.
"""

import asyncio
from typing import Any, Dict, List, Optional, Sequence

from ..core.storage import Metadata
from ..core.types import NFT, ClaimOptions, QueryAllParams, TransactionResult, TransactionResultWithId
from ..exceptions import NotFoundError
from ..features.factory import HandleTypes
from ..features.names import CapabilityName, StandardFamily
from .extensions import (
    Erc721BatchMintable,
    Erc721Burnable,
    Erc721Claimable,
    Erc721ClaimConditions,
    Erc721DelayedReveal,
    Erc721Enumerable,
    Erc721LazyMintable,
    Erc721LogScanEnumerable,
    Erc721Mintable,
    Erc721SignatureMintable,
)
from .facade import BaseFacade
from .metadata import fetch_token_metadata, get_erc721_nft


class Erc721(BaseFacade):
    """Standard ERC721 NFT collection."""

    FAMILY = StandardFamily.ERC721
    HANDLE_TYPES = {
        CapabilityName.ENUMERABLE: HandleTypes(Erc721Enumerable, Erc721LogScanEnumerable),
        CapabilityName.MINTABLE: HandleTypes(Erc721Mintable),
        CapabilityName.BATCH_MINTABLE: HandleTypes(Erc721BatchMintable),
        CapabilityName.BURNABLE: HandleTypes(Erc721Burnable),
        CapabilityName.LAZY_MINTABLE: HandleTypes(Erc721LazyMintable),
        CapabilityName.CLAIMABLE: HandleTypes(Erc721Claimable),
        CapabilityName.CLAIMABLE_WITH_CONDITIONS: HandleTypes(Erc721ClaimConditions),
        CapabilityName.SIGNATURE_MINTABLE: HandleTypes(Erc721SignatureMintable),
        CapabilityName.REVEALABLE: HandleTypes(Erc721DelayedReveal),
    }

    async def get(self, token_id: int) -> NFT:
        """Get one NFT with its owner and metadata."""
        return await get_erc721_nft(self.context, self.storage, token_id)

    async def owner_of(self, token_id: int) -> str:
        return await self.context.read("ownerOf", token_id)

    async def balance_of(self, address: str) -> int:
        return await self.context.read("balanceOf", address)

    async def balance(self) -> int:
        return await self.balance_of(await self.context.get_signer_address())

    async def is_approved(self, owner: str, operator: str) -> bool:
        return await self.context.read("isApprovedForAll", owner, operator)

    async def transfer(self, to: str, token_id: int) -> TransactionResult:
        """Transfer an NFT from the connected wallet."""
        sender = await self.context.get_signer_address()
        return await self.context.send_transaction(
            "safeTransferFrom(address,address,uint256)", [sender, to, token_id]
        )

    async def set_approval_for_all(self, operator: str, approved: bool) -> TransactionResult:
        return await self.context.send_transaction("setApprovalForAll", [operator, approved])

    async def set_approval_for_token(self, operator: str, token_id: int) -> TransactionResult:
        return await self.context.send_transaction("approve", [operator, token_id])

    async def get_token_metadata(self, token_id: int) -> Dict[str, Any]:
        uri = await self.context.read("tokenURI", token_id)
        return await fetch_token_metadata(token_id, uri, self.storage)

    async def next_token_id_to_mint(self) -> int:
        """
        Id the next minted token will get.

        Raises:
            NotFoundError: If the contract exposes neither
                ``nextTokenIdToMint`` nor ``totalSupply``
        """
        if self.context.has_function("nextTokenIdToMint"):
            return await self.context.read("nextTokenIdToMint")
        if self.context.has_function("totalSupply"):
            return await self.context.read("totalSupply")
        raise NotFoundError(
            "Contract requires either a nextTokenIdToMint or totalSupply function"
        )

    # Enumerable

    async def get_all(
        self, params: Optional[QueryAllParams] = None, abort: Optional[asyncio.Event] = None
    ) -> List[NFT]:
        """
        Get a page of every NFT in the collection.

        Args:
            params: Start index and page size
            abort: Stops a log-scan fallback before its next block window

        Raises:
            ExtensionNotImplemented: If the contract is not enumerable
            AbortedOperation: If ``abort`` was set during a log scan
        """
        handle = self._require(CapabilityName.ENUMERABLE)
        return await handle.get_all(params, abort=abort)

    async def total_count(self, abort: Optional[asyncio.Event] = None) -> int:
        handle = self._require(CapabilityName.ENUMERABLE)
        return await handle.total_count(abort=abort)

    async def get_owned(
        self, wallet: Optional[str] = None, abort: Optional[asyncio.Event] = None
    ) -> List[NFT]:
        handle = self._require(CapabilityName.ENUMERABLE)
        wallet = wallet or await self.context.get_signer_address()
        return await handle.get_owned(wallet, abort=abort)

    async def get_owned_token_ids(
        self, wallet: Optional[str] = None, abort: Optional[asyncio.Event] = None
    ) -> List[int]:
        handle = self._require(CapabilityName.ENUMERABLE)
        wallet = wallet or await self.context.get_signer_address()
        return await handle.get_owned_token_ids(wallet, abort=abort)

    # Mintable / BatchMintable

    async def mint(self, metadata: Metadata) -> TransactionResultWithId:
        return await self.mint_to(await self.context.get_signer_address(), metadata)

    async def mint_to(self, receiver: str, metadata: Metadata) -> TransactionResultWithId:
        """
        Mint one NFT.

        Args:
            receiver: Wallet receiving the NFT
            metadata: Metadata object to upload, or an existing URI

        Raises:
            ExtensionNotImplemented: If the contract is not mintable
        """
        handle = self._require(CapabilityName.MINTABLE)
        return await handle.to(receiver, metadata)

    async def mint_batch(self, metadatas: Sequence[Metadata]) -> List[TransactionResultWithId]:
        return await self.mint_batch_to(await self.context.get_signer_address(), metadatas)

    async def mint_batch_to(
        self, receiver: str, metadatas: Sequence[Metadata]
    ) -> List[TransactionResultWithId]:
        handle = self._require(CapabilityName.BATCH_MINTABLE)
        return await handle.to(receiver, metadatas)

    # Burnable

    async def burn(self, token_id: int) -> TransactionResult:
        handle = self._require(CapabilityName.BURNABLE)
        return await handle.token(token_id)

    # LazyMintable

    async def lazy_mint(
        self, metadatas: Sequence[Metadata], data: bytes = b""
    ) -> List[TransactionResultWithId]:
        handle = self._require(CapabilityName.LAZY_MINTABLE)
        return await handle.lazy_mint(metadatas, data)

    # Claimable / ClaimableWithConditions

    @property
    def claim_conditions(self) -> Erc721ClaimConditions:
        return self._require(CapabilityName.CLAIMABLE_WITH_CONDITIONS)

    async def claim(self, quantity: int, options: Optional[ClaimOptions] = None) -> TransactionResult:
        return await self.claim_to(await self.context.get_signer_address(), quantity, options)

    async def claim_to(
        self, receiver: str, quantity: int, options: Optional[ClaimOptions] = None
    ) -> TransactionResult:
        """
        Claim NFTs, preferring the drop's claim phases when it has them.

        Raises:
            ExtensionNotImplemented: If the contract has neither claim phases
                nor a plain claim function
        """
        if self.is_supported(CapabilityName.CLAIMABLE_WITH_CONDITIONS):
            handle = self._require(CapabilityName.CLAIMABLE_WITH_CONDITIONS)
            return await handle.to(receiver, quantity, options=options)
        handle = self._require(CapabilityName.CLAIMABLE)
        return await handle.to(receiver, quantity)

    async def prepare_claim(
        self, receiver: str, quantity: int, options: Optional[ClaimOptions] = None
    ) -> Dict[str, Any]:
        handle = self._require(CapabilityName.CLAIMABLE_WITH_CONDITIONS)
        return await handle.prepare(receiver, quantity, options=options)

    # SignatureMintable / Revealable

    @property
    def signature(self) -> Erc721SignatureMintable:
        return self._require(CapabilityName.SIGNATURE_MINTABLE)

    @property
    def revealer(self) -> Erc721DelayedReveal:
        return self._require(CapabilityName.REVEALABLE)
