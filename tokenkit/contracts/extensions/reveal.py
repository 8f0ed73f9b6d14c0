"""
Delayed reveal handles.

A delayed reveal batch is lazy minted with placeholder metadata while the
real base URI is stored on-chain encrypted with a key derived from a
password. Revealing submits the key, and the contract swaps in the
decrypted base URI.
"""

import logging
from typing import Any, Dict, List, Sequence

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from web3 import Web3

from ...core.handle import CapabilityHandle
from ...core.storage import Metadata
from ...core.types import TransactionResult, TransactionResultWithId
from ..metadata import base_uri_of, upload_or_extract_uris
from .lazy_mint import Erc721LazyMintable, Erc1155LazyMintable, LazyMintable

logger = logging.getLogger(__name__)


class DelayedReveal(CapabilityHandle):
    """
    Create and reveal encrypted batches.

    Batch ids are the exclusive end token id of each lazy minted batch.
    """

    LAZY_MINT = LazyMintable
    TOKEN_URI_FUNCTION = "tokenURI"

    def __init__(self, context, storage=None):
        super().__init__(context, storage)
        self._lazy_mint = self.LAZY_MINT(context, storage)

    async def hash_password(self, password: str, batch_id: int) -> bytes:
        """
        Derive the encryption key of a batch.

        The key is bound to the chain, the batch and this contract, so the
        same password never yields the same key twice.
        """
        chain_id = await self.context.chain_id()
        return bytes(Web3.solidity_keccak(
            ["string", "uint256", "uint256", "address"],
            [password, chain_id, batch_id, self.context.address],
        ))

    async def _encrypted_uri(self, batch_id: int) -> bytes:
        data = bytes(await self.context.read("encryptedData", batch_id))
        if not data:
            return b""
        try:
            encrypted, _provenance = decode(["bytes", "bytes32"], data)
        except DecodingError:
            # Batches created before provenance hashes store the raw ciphertext
            return data
        return encrypted

    async def get_batches_to_reveal(self) -> List[Dict[str, Any]]:
        """
        List batches whose base URI is still encrypted.

        Returns:
            ``{"batch_index", "batch_id", "placeholder_uri"}`` per batch
        """
        count = await self.context.read("getBaseURICount")
        batch_ids = [await self.context.read("getBatchIdAtIndex", i) for i in range(count)]

        batches = []
        first_token_id = 0
        for index, batch_id in enumerate(batch_ids):
            if await self._encrypted_uri(batch_id):
                placeholder_uri = await self.context.read(self.TOKEN_URI_FUNCTION, first_token_id)
                batches.append({
                    "batch_index": index,
                    "batch_id": batch_id,
                    "placeholder_uri": placeholder_uri,
                })
            first_token_id = batch_id
        return batches

    async def reveal(self, batch_index: int, password: str) -> TransactionResult:
        """
        Reveal one batch.

        Args:
            batch_index: Position of the batch, see ``get_batches_to_reveal``
            password: Password the batch was created with

        Returns:
            TransactionResult

        Raises:
            ValueError: If the password is empty or wrong, or the batch is
                already revealed
        """
        if not password:
            raise ValueError("Password is required")

        batch_id = await self.context.read("getBatchIdAtIndex", batch_index)
        encrypted = await self._encrypted_uri(batch_id)
        if not encrypted:
            raise ValueError(f"Batch {batch_index} is already revealed")

        key = await self.hash_password(password, batch_id)
        decrypted = bytes(await self.context.read("encryptDecrypt", encrypted, key))
        try:
            uri = decrypted.decode("utf-8")
        except UnicodeDecodeError:
            uri = ""
        if "://" not in uri:
            raise ValueError("Invalid password")

        logger.info("Revealing batch %d of %s", batch_index, self.context.address)
        return await self.context.send_transaction("reveal", [batch_index, key])

    async def create_delayed_reveal_batch(
        self,
        placeholder: Metadata,
        metadatas: Sequence[Metadata],
        password: str,
    ) -> List[TransactionResultWithId]:
        """
        Lazy mint a batch whose real metadata stays hidden until revealed.

        Args:
            placeholder: Metadata shown for every token before the reveal
            metadatas: Real metadata, one entry per token
            password: Password needed to reveal the batch

        Returns:
            One result per token id reserved by the batch
        """
        if not password:
            raise ValueError("Password is required")
        if not metadatas:
            raise ValueError("At least one metadata entry is required")

        start_file_number = await self.context.read("nextTokenIdToMint")
        placeholder_uris = await upload_or_extract_uris([placeholder], self.storage)
        uris = await upload_or_extract_uris(metadatas, self.storage, start_file_number)
        base_uri = base_uri_of(uris).encode("utf-8")

        batch_id = start_file_number + len(metadatas)
        key = await self.hash_password(password, batch_id)
        encrypted = bytes(await self.context.read("encryptDecrypt", base_uri, key))
        chain_id = await self.context.chain_id()
        provenance = bytes(Web3.solidity_keccak(
            ["bytes", "bytes", "uint256"], [base_uri, key, chain_id]
        ))
        data = encode(["bytes", "bytes32"], [encrypted, provenance])

        result = await self.context.send_transaction(
            "lazyMint", [len(metadatas), base_uri_of(placeholder_uris), data]
        )
        return self._lazy_mint.results_from(result)


class Erc721DelayedReveal(DelayedReveal):
    LAZY_MINT = Erc721LazyMintable


class Erc1155DelayedReveal(DelayedReveal):
    LAZY_MINT = Erc1155LazyMintable
    TOKEN_URI_FUNCTION = "uri"
