"""
Claim handles.

``Claimable`` wraps the plain ``claim`` entry point of contracts without
claim phases. ``ClaimConditions`` wraps drop contracts: it reads and sets
the claim phases and prices a claim against the active one.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from ...core.constants import MAX_UINT256, ZERO_ADDRESS
from ...core.handle import CapabilityHandle
from ...core.types import ClaimCondition, ClaimOptions, TransactionResult, is_native_currency

logger = logging.getLogger(__name__)

ALLOWLIST_PROOF = "(bytes32[],uint256,uint256,address)"


class Erc721Claimable(CapabilityHandle):

    async def to(self, receiver: str, quantity: int) -> TransactionResult:
        if quantity <= 0:
            raise ValueError("Claim quantity must be greater than 0")
        return await self.context.send_transaction(
            "claim(address,uint256)", [receiver, quantity]
        )


class Erc1155Claimable(CapabilityHandle):

    async def to(self, receiver: str, token_id: int, quantity: int) -> TransactionResult:
        if quantity <= 0:
            raise ValueError("Claim quantity must be greater than 0")
        return await self.context.send_transaction(
            "claim(address,uint256,uint256)", [receiver, token_id, quantity]
        )


class ClaimConditions(CapabilityHandle):
    """
    Claim phases of a drop contract.

    Subclasses set ``TOKEN_SCOPED`` when every call takes a token id first
    (ERC-1155 drops keep one set of phases per token).
    """

    TOKEN_SCOPED = False
    CLAIM_FUNCTION = (
        f"claim(address,uint256,address,uint256,{ALLOWLIST_PROOF},bytes)"
    )

    def _scope(self, token_id: Optional[int]) -> List[int]:
        if not self.TOKEN_SCOPED:
            return []
        if token_id is None:
            raise ValueError("token_id is required for ERC1155 claim conditions")
        return [token_id]

    async def _price_unit(self) -> int:
        """Divisor turning ``price_per_token * quantity`` into a total price."""
        return 1

    async def get_active(self, token_id: Optional[int] = None) -> ClaimCondition:
        """
        Get the claim phase currently in effect.

        Args:
            token_id: Token id, ERC-1155 drops only

        Returns:
            ClaimCondition
        """
        scope = self._scope(token_id)
        condition_id = await self.context.read("getActiveClaimConditionId", *scope)
        raw = await self.context.read("getClaimConditionById", *scope, condition_id)
        return ClaimCondition.from_tuple(raw)

    async def set(
        self,
        conditions: Sequence[ClaimCondition],
        token_id: Optional[int] = None,
        reset_claim_eligibility: bool = False,
    ) -> TransactionResult:
        """
        Replace every claim phase.

        Args:
            conditions: New phases, ordered by start time
            token_id: Token id, ERC-1155 drops only
            reset_claim_eligibility: Let wallets that already claimed claim again

        Returns:
            TransactionResult
        """
        starts = [c.start_timestamp for c in conditions]
        if starts != sorted(starts):
            raise ValueError("Claim conditions must be ordered by start_timestamp")
        return await self.context.send_transaction(
            "setClaimConditions",
            [*self._scope(token_id), [c.to_tuple() for c in conditions], reset_claim_eligibility],
        )

    async def prepare(
        self,
        receiver: str,
        quantity: int,
        token_id: Optional[int] = None,
        options: Optional[ClaimOptions] = None,
    ) -> Dict[str, Any]:
        """
        Prepare a claim against the active phase without sending it.

        Args:
            receiver: Wallet receiving the claimed tokens
            quantity: Amount to claim
            token_id: Token id, ERC-1155 drops only
            options: Price, currency and allowlist overrides

        Returns:
            Dictionary with ``function``, ``args`` and ``value`` (in wei)
        """
        if quantity <= 0:
            raise ValueError("Claim quantity must be greater than 0")

        options = options or ClaimOptions()
        active = await self.get_active(token_id)
        price = active.price_per_token if options.price_per_token is None else options.price_per_token
        currency = options.currency or active.currency

        if options.proofs:
            proof = (list(options.proofs), options.quantity_limit_per_wallet, price, currency)
        else:
            proof = ([], 0, MAX_UINT256, ZERO_ADDRESS)

        total = price * quantity // await self._price_unit()
        args = [receiver, *self._scope(token_id), quantity, currency, price, proof, b""]

        return {
            "function": self.CLAIM_FUNCTION,
            "args": args,
            "value": total if is_native_currency(currency) else 0,
        }

    async def to(
        self,
        receiver: str,
        quantity: int,
        token_id: Optional[int] = None,
        options: Optional[ClaimOptions] = None,
    ) -> TransactionResult:
        prepared = await self.prepare(receiver, quantity, token_id, options)
        logger.debug("Claiming %d on %s for %s", quantity, self.context.address, receiver)
        return await self.context.send_transaction(
            prepared["function"], prepared["args"], value=prepared["value"]
        )


class Erc20ClaimConditions(ClaimConditions):
    """Drop phases of a fungible token; quantities are in smallest units."""

    async def _price_unit(self) -> int:
        return 10 ** await self.context.read("decimals")


class Erc721ClaimConditions(ClaimConditions):
    pass


class Erc1155ClaimConditions(ClaimConditions):
    TOKEN_SCOPED = True
    CLAIM_FUNCTION = (
        f"claim(address,uint256,uint256,address,uint256,{ALLOWLIST_PROOF},bytes)"
    )
