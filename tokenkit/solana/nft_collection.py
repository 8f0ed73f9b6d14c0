"""
Read access to a Metaplex NFT collection on Solana.
"""

import logging
from typing import Optional, Union

from solana.rpc.async_api import AsyncClient
from solders.pubkey import Pubkey

from .editions import LEDGER_SIZE, count_printed_editions

logger = logging.getLogger(__name__)

TOKEN_METADATA_PROGRAM_ID = Pubkey.from_string("metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s")

# Edition marker accounts: 1-byte account key, then the ledger
EDITION_MARKER_KEY_SIZE = 1


def _pubkey(address: Union[str, Pubkey]) -> Pubkey:
    return address if isinstance(address, Pubkey) else Pubkey.from_string(address)


def edition_marker_address(mint: Union[str, Pubkey], marker: int) -> Pubkey:
    """
    Derive the edition marker PDA of one page.

    Marker ``n`` tracks editions ``248 * n`` onwards and is seeded with ``str(n)``.

    Args:
        mint: Mint address of the master edition
        marker: Marker page number

    Returns:
        Program derived address of the marker account
    """
    address, _bump = Pubkey.find_program_address(
        [
            b"metadata",
            bytes(TOKEN_METADATA_PROGRAM_ID),
            bytes(_pubkey(mint)),
            b"edition",
            str(marker).encode(),
        ],
        TOKEN_METADATA_PROGRAM_ID,
    )
    return address


class NFTCollection:
    """
    A Metaplex collection, read through a Solana RPC client.

    Args:
        address: Collection mint address
        client: Async Solana RPC client
    """

    def __init__(self, address: Union[str, Pubkey], client: AsyncClient):
        self.address = _pubkey(address)
        self.client = client

    async def _ledger(self, mint: Pubkey, marker: int) -> Optional[bytes]:
        response = await self.client.get_account_info(edition_marker_address(mint, marker))
        account = response.value
        if account is None:
            return None
        data = bytes(account.data)
        return data[EDITION_MARKER_KEY_SIZE:EDITION_MARKER_KEY_SIZE + LEDGER_SIZE]

    async def supply_of(self, nft_address: Union[str, Pubkey]) -> int:
        """
        Get the supply of a master edition NFT.

        Args:
            nft_address: Mint address of the master edition

        Returns:
            1 for the master plus every printed edition
        """
        mint = _pubkey(nft_address)
        supply = await count_printed_editions(lambda marker: self._ledger(mint, marker))
        logger.debug("Supply of %s is %d", mint, supply)
        return supply
