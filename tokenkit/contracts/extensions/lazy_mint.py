"""
Lazy minting handles.

Lazy minting uploads a batch of metadata under one base URI and records
the token id range on-chain; the tokens themselves are minted later by
claims.
"""

import logging
from typing import List, Sequence

from ...core.handle import CapabilityHandle
from ...core.storage import Metadata
from ...core.types import TransactionResultWithId
from ..metadata import base_uri_of, get_erc721_nft, get_erc1155_nft, upload_or_extract_uris

logger = logging.getLogger(__name__)


class LazyMintable(CapabilityHandle):
    """Shared ``lazyMint(uint256,string,bytes)`` flow."""

    async def _fetch(self, token_id: int):
        raise NotImplementedError

    async def lazy_mint(
        self, metadatas: Sequence[Metadata], data: bytes = b""
    ) -> List[TransactionResultWithId]:
        """
        Create a batch of unminted tokens.

        Args:
            metadatas: Metadata objects to upload, or URIs sharing one base
            data: Extra bytes forwarded to the contract (encrypted base URI
                for delayed reveal batches)

        Returns:
            One result per token id reserved by the batch
        """
        if not metadatas:
            raise ValueError("At least one metadata entry is required")

        start_file_number = await self.context.read("nextTokenIdToMint")
        uris = await upload_or_extract_uris(metadatas, self.storage, start_file_number)
        base_uri = base_uri_of(uris)

        result = await self.context.send_transaction(
            "lazyMint", [len(uris), base_uri, data]
        )
        return self.results_from(result)

    def results_from(self, result) -> List[TransactionResultWithId]:
        events = self.context.parse_events(result.receipt, "TokensLazyMinted")
        if not events:
            raise ValueError("TokensLazyMinted event not found")
        start, end = events[0]["startTokenId"], events[0]["endTokenId"]
        logger.debug("Lazy minted token ids %d to %d on %s", start, end, self.context.address)
        return [
            TransactionResultWithId(
                receipt=result.receipt,
                id=token_id,
                fetch=lambda token_id=token_id: self._fetch(token_id),
            )
            for token_id in range(start, end + 1)
        ]


class Erc721LazyMintable(LazyMintable):

    async def _fetch(self, token_id: int):
        return await get_erc721_nft(self.context, self.storage, token_id)


class Erc1155LazyMintable(LazyMintable):

    async def _fetch(self, token_id: int):
        return await get_erc1155_nft(self.context, self.storage, token_id)
