"""Burning handles."""

from typing import Sequence

from ...core.handle import CapabilityHandle
from ...core.types import TransactionResult


class Erc20Burnable(CapabilityHandle):

    async def tokens(self, amount: int) -> TransactionResult:
        """Burn tokens held by the connected wallet."""
        if amount <= 0:
            raise ValueError("Burn amount must be greater than 0")
        return await self.context.send_transaction("burn", [amount])

    async def from_address(self, holder: str, amount: int) -> TransactionResult:
        """Burn tokens held by ``holder``; requires an allowance."""
        if amount <= 0:
            raise ValueError("Burn amount must be greater than 0")
        return await self.context.send_transaction("burnFrom", [holder, amount])


class Erc721Burnable(CapabilityHandle):

    async def token(self, token_id: int) -> TransactionResult:
        return await self.context.send_transaction("burn", [token_id])


class Erc1155Burnable(CapabilityHandle):
    """
    Burn editions.

    The contract enforces ownership or approval of ``holder``; the
    ``tokens`` and ``batch`` shortcuts burn from the connected wallet.
    """

    async def tokens(self, token_id: int, amount: int) -> TransactionResult:
        holder = await self.context.get_signer_address()
        return await self.from_address(holder, token_id, amount)

    async def from_address(self, holder: str, token_id: int, amount: int) -> TransactionResult:
        if amount <= 0:
            raise ValueError("Burn amount must be greater than 0")
        return await self.context.send_transaction("burn", [holder, token_id, amount])

    async def batch(self, token_ids: Sequence[int], amounts: Sequence[int]) -> TransactionResult:
        holder = await self.context.get_signer_address()
        return await self.batch_from(holder, token_ids, amounts)

    async def batch_from(
        self, holder: str, token_ids: Sequence[int], amounts: Sequence[int]
    ) -> TransactionResult:
        """
        Burn several token ids in one call.

        Raises:
            ValueError: If ``token_ids`` and ``amounts`` differ in length
        """
        if len(token_ids) != len(amounts):
            raise ValueError("token_ids and amounts must have the same length")
        return await self.context.send_transaction(
            "burnBatch", [holder, list(token_ids), list(amounts)]
        )
