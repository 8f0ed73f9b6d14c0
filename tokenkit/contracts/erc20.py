"""
ERC20 façade.

Fungible token operations plus the optional mint, burn, drop and signature
mint extensions.
"""

from decimal import Decimal
from typing import Any, Dict, Optional, Sequence, Union

from ..core.types import ClaimOptions, TransactionResult
from ..features.factory import HandleTypes
from ..features.names import CapabilityName, StandardFamily
from .extensions import (
    Erc20BatchMintable,
    Erc20Burnable,
    Erc20ClaimConditions,
    Erc20Mintable,
    Erc20SignatureMintable,
)
from .facade import BaseFacade

Amount = Union[int, float, str, Decimal]


def to_units(amount: Amount, decimals: int) -> int:
    """
    Convert a human-readable amount to contract units.

    Args:
        amount: Amount in human-readable form (e.g., "100.5")
        decimals: Number of decimals of the token

    Returns:
        Amount in smallest units

    Raises:
        ValueError: If the amount has more precision than the token allows
    """
    units = Decimal(str(amount)) * (Decimal(10) ** decimals)
    if units != units.to_integral_value():
        raise ValueError(f"{amount} has more than {decimals} decimals")
    return int(units)


def from_units(amount: int, decimals: int) -> Decimal:
    """
    Convert a contract amount to human-readable form.

    Args:
        amount: Amount in smallest units
        decimals: Number of decimals of the token

    Returns:
        Exact decimal amount
    """
    return Decimal(amount) / (Decimal(10) ** decimals)


class Erc20(BaseFacade):
    """
    Standard ERC20 token.

    Amounts passed to and returned from this façade are human-readable
    (``Decimal``); they are scaled by ``decimals()`` on the way in and out.
    """

    FAMILY = StandardFamily.ERC20
    HANDLE_TYPES = {
        CapabilityName.MINTABLE: HandleTypes(Erc20Mintable),
        CapabilityName.BATCH_MINTABLE: HandleTypes(Erc20BatchMintable),
        CapabilityName.BURNABLE: HandleTypes(Erc20Burnable),
        CapabilityName.CLAIMABLE_WITH_CONDITIONS: HandleTypes(Erc20ClaimConditions),
        CapabilityName.SIGNATURE_MINTABLE: HandleTypes(Erc20SignatureMintable),
    }

    _decimals: Optional[int] = None

    async def name(self) -> str:
        return await self.context.read("name")

    async def symbol(self) -> str:
        return await self.context.read("symbol")

    async def decimals(self) -> int:
        if self._decimals is None:
            self._decimals = await self.context.read("decimals")
        return self._decimals

    async def _to_units(self, amount: Amount) -> int:
        return to_units(amount, await self.decimals())

    async def _from_units(self, amount: int) -> Decimal:
        return from_units(amount, await self.decimals())

    async def total_supply(self) -> Decimal:
        return await self._from_units(await self.context.read("totalSupply"))

    async def balance_of(self, address: str) -> Decimal:
        return await self._from_units(await self.context.read("balanceOf", address))

    async def balance(self) -> Decimal:
        """Balance of the connected wallet."""
        return await self.balance_of(await self.context.get_signer_address())

    async def allowance(self, spender: str, owner: Optional[str] = None) -> Decimal:
        owner = owner or await self.context.get_signer_address()
        return await self._from_units(await self.context.read("allowance", owner, spender))

    async def transfer(self, to: str, amount: Amount) -> TransactionResult:
        return await self.context.send_transaction("transfer", [to, await self._to_units(amount)])

    async def transfer_from(self, from_address: str, to: str, amount: Amount) -> TransactionResult:
        """Transfer on behalf of ``from_address``; requires an allowance."""
        return await self.context.send_transaction(
            "transferFrom", [from_address, to, await self._to_units(amount)]
        )

    async def set_allowance(self, spender: str, amount: Amount) -> TransactionResult:
        return await self.context.send_transaction("approve", [spender, await self._to_units(amount)])

    # Mintable

    async def mint(self, amount: Amount) -> TransactionResult:
        """Mint tokens to the connected wallet."""
        return await self.mint_to(await self.context.get_signer_address(), amount)

    async def mint_to(self, receiver: str, amount: Amount) -> TransactionResult:
        """
        Mint tokens to a wallet.

        Raises:
            ExtensionNotImplemented: If the contract is not mintable
        """
        handle = self._require(CapabilityName.MINTABLE)
        return await handle.to(receiver, await self._to_units(amount))

    async def mint_batch_to(self, items: Sequence[Dict[str, Any]]) -> TransactionResult:
        """
        Mint to several wallets in one transaction.

        Args:
            items: ``{"to_address": str, "amount": Amount}`` entries
        """
        handle = self._require(CapabilityName.BATCH_MINTABLE)
        scaled = [
            {"to_address": item["to_address"], "amount": await self._to_units(item["amount"])}
            for item in items
        ]
        return await handle.to(scaled)

    # Burnable

    async def burn(self, amount: Amount) -> TransactionResult:
        handle = self._require(CapabilityName.BURNABLE)
        return await handle.tokens(await self._to_units(amount))

    async def burn_from(self, holder: str, amount: Amount) -> TransactionResult:
        handle = self._require(CapabilityName.BURNABLE)
        return await handle.from_address(holder, await self._to_units(amount))

    # ClaimableWithConditions

    @property
    def claim_conditions(self) -> Erc20ClaimConditions:
        return self._require(CapabilityName.CLAIMABLE_WITH_CONDITIONS)

    async def claim(self, amount: Amount, options: Optional[ClaimOptions] = None) -> TransactionResult:
        return await self.claim_to(await self.context.get_signer_address(), amount, options)

    async def claim_to(
        self, receiver: str, amount: Amount, options: Optional[ClaimOptions] = None
    ) -> TransactionResult:
        handle = self._require(CapabilityName.CLAIMABLE_WITH_CONDITIONS)
        return await handle.to(receiver, await self._to_units(amount), options=options)

    async def prepare_claim(
        self, receiver: str, amount: Amount, options: Optional[ClaimOptions] = None
    ) -> Dict[str, Any]:
        handle = self._require(CapabilityName.CLAIMABLE_WITH_CONDITIONS)
        return await handle.prepare(receiver, await self._to_units(amount), options=options)

    # SignatureMintable

    @property
    def signature(self) -> Erc20SignatureMintable:
        return self._require(CapabilityName.SIGNATURE_MINTABLE)
