"""
Pytest configuration and fakes.

``FakeContext`` stands in for ``ContractContext``: reads are answered from
a dict, writes are recorded instead of sent, and receipts carry whatever
events the test queued.
"""

from typing import Any, Dict, List, Optional, Sequence

import pytest

from tokenkit.artifacts.loader import get_abi
from tokenkit.config import SDKOptions
from tokenkit.core.types import TransactionResult
from tokenkit.features.descriptor import InterfaceDescriptor

CONTRACT = "0x1111111111111111111111111111111111111111"
SIGNER = "0x2222222222222222222222222222222222222222"
OTHER = "0x3333333333333333333333333333333333333333"


def abi_of(*interfaces: str) -> List[Dict[str, Any]]:
    abi = []
    for name in interfaces:
        abi.extend(get_abi(name))
    return abi


def descriptor_of(*interfaces: str) -> InterfaceDescriptor:
    return InterfaceDescriptor.from_abi(abi_of(*interfaces))


def members_of(interface: str, *names: str) -> List[Dict[str, Any]]:
    """ABI items of ``interface`` with the given names."""
    return [item for item in get_abi(interface) if item.get("name") in names]


def log_scan_descriptor(family: str) -> InterfaceDescriptor:
    """Baseline plus the supply counter of the enumerable extension, without its index."""
    baseline = "IERC721" if family == "ERC721" else "IERC1155"
    abi = abi_of(baseline) + members_of(f"{baseline}Enumerable", "totalSupply")
    return InterfaceDescriptor.from_abi(abi)


class FakeConnection:
    def __init__(self, options: Optional[SDKOptions] = None):
        self.version = 0
        self.options = options or SDKOptions()

    def update(self, w3=None, signer_address=None) -> int:
        self.version += 1
        return self.version


class FakeContext:
    """In-memory contract context."""

    def __init__(
        self,
        interfaces: Sequence[str] = (),
        reads: Optional[Dict[str, Any]] = None,
        options: Optional[SDKOptions] = None,
    ):
        self.connection = FakeConnection(options)
        self.version = self.connection.version
        self.address = CONTRACT
        self.abi = abi_of(*interfaces)
        self.reads: Dict[str, Any] = dict(reads or {})
        self.sent: List[tuple] = []
        self.encoded: List[tuple] = []
        self.events: Dict[str, List[Dict[str, Any]]] = {}
        self.logs: Dict[str, List[tuple]] = {}
        self.log_windows: List[tuple] = []
        self.head = 0

    @property
    def is_stale(self) -> bool:
        return self.version != self.connection.version

    @property
    def options(self) -> SDKOptions:
        return self.connection.options

    def has_function(self, function_name: str) -> bool:
        name = function_name.split("(")[0]
        return function_name in self.reads or any(
            item.get("type") == "function" and item.get("name") == name for item in self.abi
        )

    def has_event(self, event_name: str) -> bool:
        return event_name in self.events

    async def read(self, function_name: str, *args) -> Any:
        value = self.reads[function_name]
        return value(*args) if callable(value) else value

    async def get_signer_address(self) -> str:
        return SIGNER

    async def send_transaction(self, function_name, args=(), value=0, overrides=None):
        self.sent.append((function_name, list(args), value))
        return TransactionResult(receipt={"status": 1, "function": function_name})

    def encode(self, function_name: str, args=()) -> str:
        self.encoded.append((function_name, list(args)))
        return f"0x{len(self.encoded):08x}"

    async def multicall(self, encoded_calls):
        return await self.send_transaction("multicall", [list(encoded_calls)])

    def parse_events(self, receipt, event_name: str) -> List[Dict[str, Any]]:
        return list(self.events.get(event_name, []))

    async def get_logs(self, event_name, from_block, to_block, argument_filters=None):
        self.log_windows.append((event_name, from_block, to_block))
        return [
            log for block, log in self.logs.get(event_name, [])
            if from_block <= block <= to_block
        ]

    async def block_number(self) -> int:
        return self.head

    async def chain_id(self) -> int:
        return 1


class MemoryStorage:
    """Storage keeping uploads in a dict."""

    def __init__(self):
        self.files: Dict[str, Dict[str, Any]] = {}

    async def upload(self, data):
        uri = f"ipfs://single{len(self.files)}/0"
        self.files[uri] = data
        return uri

    async def upload_batch(self, items, start_file_number=0):
        directory = f"ipfs://batch{len(self.files)}"
        uris = []
        for i, item in enumerate(items):
            uri = f"{directory}/{start_file_number + i}"
            self.files[uri] = item
            uris.append(uri)
        return uris

    async def download_json(self, uri):
        return dict(self.files[uri])


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def erc1155_context() -> FakeContext:
    """ERC1155 contract with the burnable extension only."""
    return FakeContext(["IERC1155", "IBurnableERC1155"])
