"""
ERC1155 façade.

Multi-edition token operations plus the optional enumeration, minting,
burning, lazy minting, claiming, signature minting and delayed reveal
extensions.
"""

import asyncio
from typing import Any, Dict, List, Optional, Sequence

from ..core.storage import Metadata
from ..core.types import NFT, ClaimOptions, QueryAllParams, TransactionResult, TransactionResultWithId
from ..features.factory import HandleTypes
from ..features.names import CapabilityName, StandardFamily
from .extensions import (
    Erc1155BatchMintable,
    Erc1155Burnable,
    Erc1155Claimable,
    Erc1155ClaimConditions,
    Erc1155DelayedReveal,
    Erc1155Enumerable,
    Erc1155LazyMintable,
    Erc1155LogScanEnumerable,
    Erc1155Mintable,
    Erc1155SignatureMintable,
)
from .facade import BaseFacade
from .metadata import fetch_token_metadata, get_erc1155_nft


class Erc1155(BaseFacade):
    """
    Standard ERC1155 edition collection.

    Every optional extension is reached through a guarded accessor: calling
    ``mint_to`` on a contract without ``IMintableERC1155`` raises
    ``ExtensionNotImplemented("Mintable", "ERC1155")`` naming the interface
    to implement.
    """

    FAMILY = StandardFamily.ERC1155
    HANDLE_TYPES = {
        CapabilityName.ENUMERABLE: HandleTypes(Erc1155Enumerable, Erc1155LogScanEnumerable),
        CapabilityName.MINTABLE: HandleTypes(Erc1155Mintable),
        CapabilityName.BATCH_MINTABLE: HandleTypes(Erc1155BatchMintable),
        CapabilityName.BURNABLE: HandleTypes(Erc1155Burnable),
        CapabilityName.LAZY_MINTABLE: HandleTypes(Erc1155LazyMintable),
        CapabilityName.CLAIMABLE: HandleTypes(Erc1155Claimable),
        CapabilityName.CLAIMABLE_WITH_CONDITIONS: HandleTypes(Erc1155ClaimConditions),
        CapabilityName.SIGNATURE_MINTABLE: HandleTypes(Erc1155SignatureMintable),
        CapabilityName.REVEALABLE: HandleTypes(Erc1155DelayedReveal),
    }

    async def get(self, token_id: int) -> NFT:
        return await get_erc1155_nft(self.context, self.storage, token_id)

    async def total_supply(self, token_id: int) -> int:
        return await self.context.read("totalSupply(uint256)", token_id)

    async def balance_of(self, address: str, token_id: int) -> int:
        return await self.context.read("balanceOf", address, token_id)

    async def balance(self, token_id: int) -> int:
        return await self.balance_of(await self.context.get_signer_address(), token_id)

    async def is_approved(self, owner: str, operator: str) -> bool:
        return await self.context.read("isApprovedForAll", owner, operator)

    async def transfer(
        self, to: str, token_id: int, amount: int, data: bytes = b""
    ) -> TransactionResult:
        """Transfer editions from the connected wallet."""
        sender = await self.context.get_signer_address()
        return await self.context.send_transaction(
            "safeTransferFrom", [sender, to, token_id, amount, data]
        )

    async def set_approval_for_all(self, operator: str, approved: bool) -> TransactionResult:
        return await self.context.send_transaction("setApprovalForAll", [operator, approved])

    async def airdrop(
        self, token_id: int, addresses: Sequence[Dict[str, Any]], data: bytes = b""
    ) -> TransactionResult:
        """
        Send editions of one token to many wallets in one transaction.

        Args:
            token_id: Token to airdrop
            addresses: ``{"address": str, "quantity": int}`` entries;
                quantity defaults to 1

        Returns:
            TransactionResult

        Raises:
            ValueError: If the connected wallet holds too few editions
        """
        sender = await self.context.get_signer_address()
        total = sum(entry.get("quantity", 1) for entry in addresses)
        held = await self.balance_of(sender, token_id)
        if held < total:
            raise ValueError(
                f"The caller owns {held} editions of token {token_id}, "
                f"but wants to airdrop {total}"
            )
        encoded = [
            self.context.encode(
                "safeTransferFrom",
                [sender, entry["address"], token_id, entry.get("quantity", 1), data],
            )
            for entry in addresses
        ]
        return await self.context.multicall(encoded)

    async def get_token_metadata(self, token_id: int) -> Dict[str, Any]:
        uri = await self.context.read("uri", token_id)
        return await fetch_token_metadata(token_id, uri, self.storage)

    async def next_token_id_to_mint(self) -> int:
        if not self.context.has_function("nextTokenIdToMint"):
            raise ValueError("Contract does not expose nextTokenIdToMint")
        return await self.context.read("nextTokenIdToMint")

    # Enumerable

    async def get_all(
        self, params: Optional[QueryAllParams] = None, abort: Optional[asyncio.Event] = None
    ) -> List[NFT]:
        handle = self._require(CapabilityName.ENUMERABLE)
        return await handle.get_all(params, abort=abort)

    async def total_count(self, abort: Optional[asyncio.Event] = None) -> int:
        handle = self._require(CapabilityName.ENUMERABLE)
        return await handle.total_count(abort=abort)

    async def total_circulating_supply(self, abort: Optional[asyncio.Event] = None) -> int:
        handle = self._require(CapabilityName.ENUMERABLE)
        return await handle.total_circulating_supply(abort=abort)

    async def get_owned(
        self, wallet: Optional[str] = None, abort: Optional[asyncio.Event] = None
    ) -> List[NFT]:
        """
        Get every edition held by a wallet, defaulting to the connected one.

        Raises:
            ExtensionNotImplemented: If the contract is not enumerable
            AbortedOperation: If ``abort`` was set during a log scan
        """
        handle = self._require(CapabilityName.ENUMERABLE)
        wallet = wallet or await self.context.get_signer_address()
        return await handle.get_owned(wallet, abort=abort)

    # Mintable / BatchMintable

    async def mint(self, metadata_with_supply: Dict[str, Any]) -> TransactionResultWithId:
        return await self.mint_to(await self.context.get_signer_address(), metadata_with_supply)

    async def mint_to(
        self, receiver: str, metadata_with_supply: Dict[str, Any]
    ) -> TransactionResultWithId:
        """
        Create a new token and mint its initial supply.

        Args:
            receiver: Wallet receiving the supply
            metadata_with_supply: ``{"metadata": Metadata, "supply": int}``

        Raises:
            ExtensionNotImplemented: If the contract is not mintable
        """
        handle = self._require(CapabilityName.MINTABLE)
        return await handle.to(receiver, metadata_with_supply)

    async def mint_additional_supply(
        self, token_id: int, additional_supply: int
    ) -> TransactionResultWithId:
        return await self.mint_additional_supply_to(
            await self.context.get_signer_address(), token_id, additional_supply
        )

    async def mint_additional_supply_to(
        self, receiver: str, token_id: int, additional_supply: int
    ) -> TransactionResultWithId:
        handle = self._require(CapabilityName.MINTABLE)
        return await handle.additional_supply_to(receiver, token_id, additional_supply)

    async def mint_batch(
        self, metadata_with_supply: Sequence[Dict[str, Any]]
    ) -> List[TransactionResultWithId]:
        return await self.mint_batch_to(await self.context.get_signer_address(), metadata_with_supply)

    async def mint_batch_to(
        self, receiver: str, metadata_with_supply: Sequence[Dict[str, Any]]
    ) -> List[TransactionResultWithId]:
        handle = self._require(CapabilityName.BATCH_MINTABLE)
        return await handle.to(receiver, metadata_with_supply)

    # Burnable

    async def burn(self, token_id: int, amount: int) -> TransactionResult:
        handle = self._require(CapabilityName.BURNABLE)
        return await handle.tokens(token_id, amount)

    async def burn_from(self, holder: str, token_id: int, amount: int) -> TransactionResult:
        handle = self._require(CapabilityName.BURNABLE)
        return await handle.from_address(holder, token_id, amount)

    async def burn_batch(self, token_ids: Sequence[int], amounts: Sequence[int]) -> TransactionResult:
        handle = self._require(CapabilityName.BURNABLE)
        return await handle.batch(token_ids, amounts)

    async def burn_batch_from(
        self, holder: str, token_ids: Sequence[int], amounts: Sequence[int]
    ) -> TransactionResult:
        handle = self._require(CapabilityName.BURNABLE)
        return await handle.batch_from(holder, token_ids, amounts)

    # LazyMintable

    async def lazy_mint(
        self, metadatas: Sequence[Metadata], data: bytes = b""
    ) -> List[TransactionResultWithId]:
        handle = self._require(CapabilityName.LAZY_MINTABLE)
        return await handle.lazy_mint(metadatas, data)

    # Claimable / ClaimableWithConditions

    @property
    def claim_conditions(self) -> Erc1155ClaimConditions:
        return self._require(CapabilityName.CLAIMABLE_WITH_CONDITIONS)

    async def claim(
        self, token_id: int, quantity: int, options: Optional[ClaimOptions] = None
    ) -> TransactionResult:
        return await self.claim_to(
            await self.context.get_signer_address(), token_id, quantity, options
        )

    async def claim_to(
        self,
        receiver: str,
        token_id: int,
        quantity: int,
        options: Optional[ClaimOptions] = None,
    ) -> TransactionResult:
        """
        Claim editions, preferring the drop's claim phases when it has them.

        Raises:
            ExtensionNotImplemented: If the contract has neither claim phases
                nor a plain claim function
        """
        if self.is_supported(CapabilityName.CLAIMABLE_WITH_CONDITIONS):
            handle = self._require(CapabilityName.CLAIMABLE_WITH_CONDITIONS)
            return await handle.to(receiver, quantity, token_id=token_id, options=options)
        handle = self._require(CapabilityName.CLAIMABLE)
        return await handle.to(receiver, token_id, quantity)

    async def prepare_claim(
        self,
        receiver: str,
        token_id: int,
        quantity: int,
        options: Optional[ClaimOptions] = None,
    ) -> Dict[str, Any]:
        handle = self._require(CapabilityName.CLAIMABLE_WITH_CONDITIONS)
        return await handle.prepare(receiver, quantity, token_id=token_id, options=options)

    # SignatureMintable / Revealable

    @property
    def signature(self) -> Erc1155SignatureMintable:
        return self._require(CapabilityName.SIGNATURE_MINTABLE)

    @property
    def revealer(self) -> Erc1155DelayedReveal:
        return self._require(CapabilityName.REVEALABLE)
