"""
Signature-based minting handles.

A wallet with the minter role signs a mint request off-chain; anyone
holding the request and its signature can then submit it. Producing the
signature is left to the caller's signer; these handles only verify and
submit signed payloads.
"""

from typing import Any, Dict, List, Sequence, Tuple

from ...core.handle import CapabilityHandle
from ...core.types import SignedPayload, TransactionResult, TransactionResultWithId, is_native_currency
from ..metadata import upload_or_extract_uri
from .mintable import Erc721MintResults, Erc1155MintResults


class SignatureMintable(CapabilityHandle):
    """
    Shared verify/submit flow.

    ``PAYLOAD_FIELDS`` lists the payload keys in the on-chain struct order.
    """

    PAYLOAD_FIELDS: Tuple[str, ...] = ()
    PRICE_FIELD = "price_per_token"

    async def _prepare_payload(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return payload

    def _request_tuple(self, payload: Dict[str, Any]) -> Tuple:
        missing = [f for f in self.PAYLOAD_FIELDS if f not in payload]
        if missing:
            raise ValueError(f"Signed payload is missing fields: {', '.join(missing)}")
        return tuple(payload[f] for f in self.PAYLOAD_FIELDS)

    def _price(self, payload: Dict[str, Any]) -> int:
        return payload[self.PRICE_FIELD] * payload["quantity"]

    async def verify(self, signed: SignedPayload) -> bool:
        """
        Check that the signature was produced by an authorized minter.

        Returns:
            True if the contract would accept the payload
        """
        payload = await self._prepare_payload(signed.payload)
        valid, _signer = await self.context.read(
            "verify", self._request_tuple(payload), signed.signature
        )
        return valid

    async def _mint(self, signed: SignedPayload) -> TransactionResult:
        payload = await self._prepare_payload(signed.payload)
        value = self._price(payload) if is_native_currency(payload["currency"]) else 0
        return await self.context.send_transaction(
            "mintWithSignature", [self._request_tuple(payload), signed.signature], value=value
        )

    async def _mint_batch(self, signed_payloads: Sequence[SignedPayload]) -> TransactionResult:
        if not signed_payloads:
            raise ValueError("At least one signed payload is required")
        encoded = []
        for signed in signed_payloads:
            payload = await self._prepare_payload(signed.payload)
            if is_native_currency(payload["currency"]) and self._price(payload) > 0:
                raise ValueError(
                    "Batch signature minting does not support native token payments"
                )
            encoded.append(
                self.context.encode("mintWithSignature", [self._request_tuple(payload), signed.signature])
            )
        return await self.context.multicall(encoded)


class Erc20SignatureMintable(SignatureMintable):
    PAYLOAD_FIELDS = (
        "to",
        "primary_sale_recipient",
        "quantity",
        "price",
        "currency",
        "validity_start_timestamp",
        "validity_end_timestamp",
        "uid",
    )
    PRICE_FIELD = "price"

    def _price(self, payload: Dict[str, Any]) -> int:
        # ERC20 requests carry the total price
        return payload["price"]

    async def mint(self, signed: SignedPayload) -> TransactionResult:
        return await self._mint(signed)

    async def mint_batch(self, signed_payloads: Sequence[SignedPayload]) -> TransactionResult:
        return await self._mint_batch(signed_payloads)


class NftSignatureMintable(SignatureMintable):
    """Signature minting for NFTs; payloads may carry ``metadata`` instead of ``uri``."""

    async def _prepare_payload(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if "uri" in payload or "metadata" not in payload:
            return payload
        uri = await upload_or_extract_uri(payload["metadata"], self.storage)
        return {**payload, "uri": uri}

    async def mint(self, signed: SignedPayload) -> TransactionResultWithId:
        result = await self._mint(signed)
        return self._with_id(result, self._minted_ids(result.receipt)[0])

    async def mint_batch(self, signed_payloads: Sequence[SignedPayload]) -> List[TransactionResultWithId]:
        result = await self._mint_batch(signed_payloads)
        return [self._with_id(result, token_id) for token_id in self._minted_ids(result.receipt)]


class Erc721SignatureMintable(NftSignatureMintable, Erc721MintResults):
    PAYLOAD_FIELDS = (
        "to",
        "royalty_recipient",
        "royalty_bps",
        "primary_sale_recipient",
        "uri",
        "quantity",
        "price_per_token",
        "currency",
        "validity_start_timestamp",
        "validity_end_timestamp",
        "uid",
    )


class Erc1155SignatureMintable(NftSignatureMintable, Erc1155MintResults):
    """
    Signature minting for editions.

    A ``token_id`` of ``MAX_UINT256`` creates a new token.
    """

    PAYLOAD_FIELDS = (
        "to",
        "royalty_recipient",
        "royalty_bps",
        "primary_sale_recipient",
        "token_id",
        "uri",
        "quantity",
        "price_per_token",
        "currency",
        "validity_start_timestamp",
        "validity_end_timestamp",
        "uid",
    )
