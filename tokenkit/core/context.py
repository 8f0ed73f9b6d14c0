"""
Contract call plumbing.

``Connection`` is the shared, versioned signer/provider state. Every
``ContractContext`` is bound to the connection version it was created under;
once the connection moves on, the context and every handle built on it
report themselves stale and must be rebuilt rather than patched.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from web3 import AsyncWeb3, Web3
from web3.logs import DISCARD

from ..config import SDKOptions
from ..exceptions import SignerRequiredError, TransactionError
from .types import TransactionResult

logger = logging.getLogger(__name__)


class Connection:
    """
    Provider, signer and options shared by every contract of one SDK instance.

    Args:
        w3: Async web3 client
        signer_address: Account used for writes; falls back to the client's
            default account, then its first unlocked account
        options: SDK options
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        signer_address: Optional[str] = None,
        options: Optional[SDKOptions] = None,
    ):
        self.w3 = w3
        self.signer_address = signer_address
        self.options = options or SDKOptions()
        self.version = 0

    def update(self, w3: Optional[AsyncWeb3] = None, signer_address: Optional[str] = None) -> int:
        """
        Switch network and/or signer.

        Bumps the connection version, which marks every context built on the
        previous version as stale.

        Returns:
            The new version
        """
        if w3 is not None:
            self.w3 = w3
        self.signer_address = signer_address
        self.version += 1
        logger.info("Connection updated, now at version %d", self.version)
        return self.version

    async def get_signer_address(self) -> str:
        if self.signer_address:
            return Web3.to_checksum_address(self.signer_address)

        default = self.w3.eth.default_account
        if isinstance(default, str):
            return Web3.to_checksum_address(default)

        accounts = await self.w3.eth.accounts
        if accounts:
            return Web3.to_checksum_address(accounts[0])

        raise SignerRequiredError(
            "This operation requires a signer. Pass signer_address to the "
            "Connection or set a default account on the web3 client."
        )


class ContractContext:
    """
    Read, write and log access to one deployed contract.

    Args:
        connection: Shared connection
        address: Contract address
        abi: Effective ABI of the contract
    """

    def __init__(self, connection: Connection, address: str, abi: Sequence[Dict[str, Any]]):
        self.connection = connection
        self.address = Web3.to_checksum_address(address)
        self.abi = list(abi)
        self.version = connection.version
        self.contract = connection.w3.eth.contract(address=self.address, abi=self.abi)

    @property
    def is_stale(self) -> bool:
        return self.version != self.connection.version

    @property
    def options(self) -> SDKOptions:
        return self.connection.options

    def _find(self, item_type: str, name: str) -> Optional[Dict[str, Any]]:
        for item in self.abi:
            if item.get('type') == item_type and item.get('name') == name:
                return item
        return None

    def has_function(self, function_name: str) -> bool:
        return self._find('function', function_name.split('(')[0]) is not None

    def has_event(self, event_name: str) -> bool:
        return self._find('event', event_name) is not None

    def _function(self, function_name: str):
        if not self.has_function(function_name):
            raise ValueError(f"Function {function_name} not found in ABI")
        if '(' in function_name:
            return self.contract.get_function_by_signature(function_name)
        return self.contract.functions[function_name]

    async def read(self, function_name: str, *args) -> Any:
        """
        Call a view function.

        Args:
            function_name: Function name or full signature for overloads
            *args: Function arguments

        Returns:
            Decoded return value
        """
        return await self._function(function_name)(*args).call()

    async def get_signer_address(self) -> str:
        return await self.connection.get_signer_address()

    async def send_transaction(
        self,
        function_name: str,
        args: Sequence[Any] = (),
        value: int = 0,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> TransactionResult:
        """
        Submit a transaction and wait for its receipt.

        Args:
            function_name: Function name or full signature for overloads
            args: Function arguments
            value: Native token amount to send, in wei
            overrides: Extra transaction fields (gas, nonce, ...)

        Returns:
            TransactionResult holding the receipt

        Raises:
            TransactionError: If the transaction reverted
        """
        tx: Dict[str, Any] = {"from": await self.get_signer_address()}
        if value:
            tx["value"] = value
        tx.update(overrides or {})

        tx_hash = await self._function(function_name)(*args).transact(tx)
        logger.debug("Sent %s on %s: %s", function_name, self.address, bytes(tx_hash).hex())
        receipt = await self.connection.w3.eth.wait_for_transaction_receipt(tx_hash)
        if receipt.get("status") == 0:
            raise TransactionError(function_name, "0x" + bytes(tx_hash).hex())
        return TransactionResult(receipt=receipt)

    def encode(self, function_name: str, args: Sequence[Any] = ()) -> str:
        """ABI-encode a call, e.g. for a multicall batch."""
        self._function(function_name)
        return self.contract.encode_abi(function_name, args=list(args))

    async def multicall(self, encoded_calls: Sequence[str]) -> TransactionResult:
        return await self.send_transaction("multicall", [list(encoded_calls)])

    def parse_events(self, receipt: Any, event_name: str) -> List[Dict[str, Any]]:
        """
        Decode the events named ``event_name`` emitted by this contract.

        Returns:
            Event argument dictionaries, in log order
        """
        if not self.has_event(event_name):
            return []
        event = self.contract.events[event_name]()
        return [dict(e["args"]) for e in event.process_receipt(receipt, errors=DISCARD)]

    async def get_logs(
        self,
        event_name: str,
        from_block: int,
        to_block: int,
        argument_filters: Optional[Dict[str, Any]] = None,
    ) -> List[Any]:
        """Fetch decoded logs of one event over a block window."""
        event = self.contract.events[event_name]()
        return list(await event.get_logs(
            from_block=from_block,
            to_block=to_block,
            argument_filters=argument_filters,
        ))

    async def block_number(self) -> int:
        return await self.connection.w3.eth.block_number

    async def chain_id(self) -> int:
        return await self.connection.w3.eth.chain_id
