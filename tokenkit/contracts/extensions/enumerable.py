"""
Enumeration handles.

The full handles read the contract's on-chain index. The log-scan handles
are degraded fallbacks for contracts that expose a supply counter but no
index. They rebuild ownership by replaying every transfer log, which is slow
on long chains, and accept an ``abort`` event to bound the scan. Token ids
whose supply was burned to zero are not listed.
"""

import asyncio
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from ...core.constants import ZERO_ADDRESS
from ...core.handle import CapabilityHandle
from ...core.types import NFT, QueryAllParams
from ..metadata import get_erc721_nft, get_erc1155_nft
from .log_scan import scan_logs


def _page(token_ids: Iterable[int], params: Optional[QueryAllParams]) -> List[int]:
    params = params or QueryAllParams()
    ordered = sorted(token_ids)
    return ordered[params.start:params.start + params.count]


class Erc721Enumerable(CapabilityHandle):
    """Enumeration through ``IERC721Enumerable``."""

    async def total_count(self, abort: Optional[asyncio.Event] = None) -> int:
        return await self.context.read("totalSupply")

    async def get_all(
        self, params: Optional[QueryAllParams] = None, abort: Optional[asyncio.Event] = None
    ) -> List[NFT]:
        """
        Get a page of every NFT in the collection.

        Args:
            params: Start index and page size
            abort: Accepted for parity with the log-scan variant

        Returns:
            NFTs in index order
        """
        params = params or QueryAllParams()
        total = await self.total_count()
        end = min(params.start + params.count, total)
        token_ids = [await self.context.read("tokenByIndex", i) for i in range(params.start, end)]
        return [await get_erc721_nft(self.context, self.storage, t) for t in token_ids]

    async def get_owned_token_ids(
        self, wallet: str, abort: Optional[asyncio.Event] = None
    ) -> List[int]:
        balance = await self.context.read("balanceOf", wallet)
        return [
            await self.context.read("tokenOfOwnerByIndex", wallet, i)
            for i in range(balance)
        ]

    async def get_owned(self, wallet: str, abort: Optional[asyncio.Event] = None) -> List[NFT]:
        token_ids = await self.get_owned_token_ids(wallet)
        return [await get_erc721_nft(self.context, self.storage, t) for t in token_ids]


class Erc721LogScanEnumerable(Erc721Enumerable):
    """Enumeration rebuilt from ``Transfer`` logs."""

    degraded = True

    async def _owners(self, abort: Optional[asyncio.Event]) -> Dict[int, str]:
        owners: Dict[int, str] = {}
        for log in await scan_logs(self.context, "Transfer", abort):
            args = log["args"]
            if args["to"] == ZERO_ADDRESS:
                owners.pop(args["tokenId"], None)
            else:
                owners[args["tokenId"]] = args["to"]
        return owners

    async def total_count(self, abort: Optional[asyncio.Event] = None) -> int:
        return len(await self._owners(abort))

    async def get_all(
        self, params: Optional[QueryAllParams] = None, abort: Optional[asyncio.Event] = None
    ) -> List[NFT]:
        token_ids = _page((await self._owners(abort)).keys(), params)
        return [await get_erc721_nft(self.context, self.storage, t) for t in token_ids]

    async def get_owned_token_ids(
        self, wallet: str, abort: Optional[asyncio.Event] = None
    ) -> List[int]:
        wallet = wallet.lower()
        owners = await self._owners(abort)
        return sorted(t for t, owner in owners.items() if owner.lower() == wallet)

    async def get_owned(self, wallet: str, abort: Optional[asyncio.Event] = None) -> List[NFT]:
        token_ids = await self.get_owned_token_ids(wallet, abort)
        return [await get_erc721_nft(self.context, self.storage, t) for t in token_ids]


class Erc1155Enumerable(CapabilityHandle):
    """Enumeration through ``nextTokenIdToMint`` and per-token supply."""

    async def total_count(self, abort: Optional[asyncio.Event] = None) -> int:
        return await self.context.read("nextTokenIdToMint")

    async def total_circulating_supply(self, abort: Optional[asyncio.Event] = None) -> int:
        total = await self.total_count()
        supply = 0
        for token_id in range(total):
            supply += await self.context.read("totalSupply(uint256)", token_id)
        return supply

    async def get_all(
        self, params: Optional[QueryAllParams] = None, abort: Optional[asyncio.Event] = None
    ) -> List[NFT]:
        params = params or QueryAllParams()
        total = await self.total_count()
        end = min(params.start + params.count, total)
        return [
            await get_erc1155_nft(self.context, self.storage, token_id)
            for token_id in range(params.start, end)
        ]

    async def get_owned(self, wallet: str, abort: Optional[asyncio.Event] = None) -> List[NFT]:
        """
        Get every edition held by a wallet.

        Returns:
            NFTs with ``owner`` and ``quantity_owned`` set
        """
        token_ids = list(range(await self.total_count()))
        if not token_ids:
            return []
        balances = await self.context.read("balanceOfBatch", [wallet] * len(token_ids), token_ids)
        return await self._owned_nfts(wallet, zip(token_ids, balances))

    async def _owned_nfts(self, wallet: str, balances: Iterable[Tuple[int, int]]) -> List[NFT]:
        owned = []
        for token_id, balance in balances:
            if balance <= 0:
                continue
            nft = await get_erc1155_nft(self.context, self.storage, token_id)
            nft.owner = wallet
            nft.quantity_owned = balance
            owned.append(nft)
        return owned


class Erc1155LogScanEnumerable(Erc1155Enumerable):
    """Enumeration rebuilt from ``TransferSingle`` and ``TransferBatch`` logs."""

    degraded = True

    async def _transfers(self, abort: Optional[asyncio.Event]) -> List[Tuple[str, str, int, int]]:
        """Flatten both transfer events into ``(from, to, id, value)`` rows."""
        rows = []
        for log in await scan_logs(self.context, "TransferSingle", abort):
            args = log["args"]
            rows.append((args["from"], args["to"], args["id"], args["value"]))
        for log in await scan_logs(self.context, "TransferBatch", abort):
            args = log["args"]
            for token_id, value in zip(args["ids"], args["values"]):
                rows.append((args["from"], args["to"], token_id, value))
        return rows

    async def _ledger(self, abort: Optional[asyncio.Event]):
        balances: Dict[Tuple[str, int], int] = defaultdict(int)
        supply: Dict[int, int] = defaultdict(int)
        for sender, receiver, token_id, value in await self._transfers(abort):
            if sender == ZERO_ADDRESS:
                supply[token_id] += value
            else:
                balances[(sender.lower(), token_id)] -= value
            if receiver == ZERO_ADDRESS:
                supply[token_id] -= value
            else:
                balances[(receiver.lower(), token_id)] += value
        return balances, supply

    async def _live_token_ids(self, abort: Optional[asyncio.Event]) -> List[int]:
        """Token ids with a positive circulating supply; fully burned ids are dropped."""
        _balances, supply = await self._ledger(abort)
        return [token_id for token_id, amount in supply.items() if amount > 0]

    async def total_count(self, abort: Optional[asyncio.Event] = None) -> int:
        return len(await self._live_token_ids(abort))

    async def total_circulating_supply(self, abort: Optional[asyncio.Event] = None) -> int:
        _balances, supply = await self._ledger(abort)
        return sum(supply.values())

    async def get_all(
        self, params: Optional[QueryAllParams] = None, abort: Optional[asyncio.Event] = None
    ) -> List[NFT]:
        return [
            await get_erc1155_nft(self.context, self.storage, token_id)
            for token_id in _page(await self._live_token_ids(abort), params)
        ]

    async def get_owned(self, wallet: str, abort: Optional[asyncio.Event] = None) -> List[NFT]:
        balances, _supply = await self._ledger(abort)
        wallet_key = wallet.lower()
        held = sorted(
            (token_id, balance)
            for (holder, token_id), balance in balances.items()
            if holder == wallet_key
        )
        return await self._owned_nfts(wallet, held)
