"""
Minting handles.

``Mintable`` handles issue one mint per call; ``BatchMintable`` handles
bundle several ``mintTo`` calls into one ``multicall`` transaction.
"""

from typing import Any, Dict, List, Sequence

from ...core.constants import MAX_UINT256
from ...core.handle import CapabilityHandle
from ...core.storage import Metadata
from ...core.types import TransactionResult, TransactionResultWithId
from ..metadata import get_erc721_nft, get_erc1155_nft, upload_or_extract_uri, upload_or_extract_uris


class Erc20Mintable(CapabilityHandle):
    """Mint fungible tokens with ``mintTo(address,uint256)``."""

    async def to(self, receiver: str, amount: int) -> TransactionResult:
        """
        Mint tokens to a wallet.

        Args:
            receiver: Wallet receiving the tokens
            amount: Amount in smallest units

        Returns:
            TransactionResult
        """
        if amount <= 0:
            raise ValueError("Mint amount must be greater than 0")
        return await self.context.send_transaction("mintTo", [receiver, amount])


class Erc20BatchMintable(CapabilityHandle):
    """Mint to several wallets in one transaction."""

    async def to(self, items: Sequence[Dict[str, Any]]) -> TransactionResult:
        """
        Args:
            items: ``{"to_address": ..., "amount": ...}`` entries
        """
        if not items:
            raise ValueError("At least one mint is required")
        encoded = [
            self.context.encode("mintTo", [item["to_address"], item["amount"]])
            for item in items
        ]
        return await self.context.multicall(encoded)


class Erc721MintResults(CapabilityHandle):
    """Turns mint receipts into results carrying the minted token ids."""

    def _minted_ids(self, receipt) -> List[int]:
        events = [e for e in self.context.parse_events(receipt, "Transfer") if "tokenId" in e]
        if not events:
            raise ValueError("Transfer event not found in mint receipt")
        return [event["tokenId"] for event in events]

    def _with_id(self, result: TransactionResult, token_id: int) -> TransactionResultWithId:
        return TransactionResultWithId(
            receipt=result.receipt,
            id=token_id,
            fetch=lambda: get_erc721_nft(self.context, self.storage, token_id),
        )


class Erc721Mintable(Erc721MintResults):
    """Mint unique tokens with ``mintTo(address,string)``."""

    async def to(self, receiver: str, metadata: Metadata) -> TransactionResultWithId:
        """
        Mint one NFT.

        Args:
            receiver: Wallet receiving the NFT
            metadata: Metadata object to upload, or an existing URI

        Returns:
            Result holding the minted token id
        """
        uri = await upload_or_extract_uri(metadata, self.storage)
        result = await self.context.send_transaction("mintTo", [receiver, uri])
        token_id = self._minted_ids(result.receipt)[0]
        return self._with_id(result, token_id)


class Erc721BatchMintable(Erc721MintResults):
    """Mint several NFTs to one wallet in one transaction."""

    async def to(self, receiver: str, metadatas: Sequence[Metadata]) -> List[TransactionResultWithId]:
        if not metadatas:
            raise ValueError("At least one metadata entry is required")
        uris = await upload_or_extract_uris(metadatas, self.storage)
        encoded = [self.context.encode("mintTo", [receiver, uri]) for uri in uris]
        result = await self.context.multicall(encoded)
        return [self._with_id(result, token_id) for token_id in self._minted_ids(result.receipt)]


class Erc1155MintResults(CapabilityHandle):
    """Turns mint receipts into results carrying the minted token ids."""

    def _minted_ids(self, receipt) -> List[int]:
        events = self.context.parse_events(receipt, "TransferSingle")
        if not events:
            raise ValueError("TransferSingle event not found in mint receipt")
        return [event["id"] for event in events]

    def _with_id(self, result: TransactionResult, token_id: int) -> TransactionResultWithId:
        return TransactionResultWithId(
            receipt=result.receipt,
            id=token_id,
            fetch=lambda: get_erc1155_nft(self.context, self.storage, token_id),
        )


class Erc1155Mintable(Erc1155MintResults):
    """
    Mint editions with ``mintTo(address,uint256,string,uint256)``.

    Passing ``MAX_UINT256`` as the token id asks the contract to create a
    new token; any other id adds supply to an existing one.
    """

    async def to(self, receiver: str, metadata_with_supply: Dict[str, Any]) -> TransactionResultWithId:
        """
        Create a new token and mint its initial supply.

        Args:
            receiver: Wallet receiving the supply
            metadata_with_supply: ``{"metadata": ..., "supply": int}``

        Returns:
            Result holding the new token id
        """
        supply = metadata_with_supply["supply"]
        if supply <= 0:
            raise ValueError("Supply must be greater than 0")
        uri = await upload_or_extract_uri(metadata_with_supply["metadata"], self.storage)
        result = await self.context.send_transaction("mintTo", [receiver, MAX_UINT256, uri, supply])
        return self._with_id(result, self._minted_ids(result.receipt)[0])

    async def additional_supply_to(
        self, receiver: str, token_id: int, additional_supply: int
    ) -> TransactionResultWithId:
        """Increase the supply of an existing token."""
        if additional_supply <= 0:
            raise ValueError("Additional supply must be greater than 0")
        uri = await self.context.read("uri", token_id)
        result = await self.context.send_transaction(
            "mintTo", [receiver, token_id, uri, additional_supply]
        )
        return self._with_id(result, token_id)


class Erc1155BatchMintable(Erc1155MintResults):
    """Create several new tokens in one transaction."""

    async def to(
        self, receiver: str, metadata_with_supply: Sequence[Dict[str, Any]]
    ) -> List[TransactionResultWithId]:
        if not metadata_with_supply:
            raise ValueError("At least one metadata entry is required")
        uris = await upload_or_extract_uris(
            [item["metadata"] for item in metadata_with_supply], self.storage
        )
        encoded = [
            self.context.encode("mintTo", [receiver, MAX_UINT256, uri, item["supply"]])
            for uri, item in zip(uris, metadata_with_supply)
        ]
        result = await self.context.multicall(encoded)
        return [self._with_id(result, token_id) for token_id in self._minted_ids(result.receipt)]
