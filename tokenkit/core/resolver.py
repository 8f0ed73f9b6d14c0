"""
Contract resolver.

Turns an address plus an optional explicit ABI into the interface descriptor
the feature probe consumes, and the effective ABI the handles call through.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

import aiohttp
from web3 import Web3
from web3.exceptions import Web3Exception

from ..artifacts.loader import abi_signature, get_abi, list_available_interfaces
from ..exceptions import DescriptorFetchFailed
from ..features.descriptor import InterfaceDescriptor
from ..features.registry import function_selectors
from .context import Connection

logger = logging.getLogger(__name__)

# EIP-1967 implementation slot: keccak256("eip1967.proxy.implementation") - 1
IMPLEMENTATION_SLOT = int(
    "0x360894a13ba1a3210667c828492db98dca3e2076cc3735a920a3ca505d382bbc", 16
)

NETWORK_ERRORS = (Web3Exception, aiohttp.ClientError, OSError, asyncio.TimeoutError)


@dataclass(frozen=True)
class ResolvedContract:
    """Descriptor and effective ABI of one deployed contract."""

    address: str
    descriptor: InterfaceDescriptor
    abi: Tuple[Dict[str, Any], ...]


def known_abi(descriptor: InterfaceDescriptor) -> Tuple[Dict[str, Any], ...]:
    """
    Union of the bundled interface ABIs whose functions are all present.

    Args:
        descriptor: Descriptor derived from bytecode

    Returns:
        ABI entries, deduplicated by kind and signature
    """
    seen = set()
    abi = []
    for name in list_available_interfaces():
        if not function_selectors([name]) <= descriptor.selectors:
            continue
        for item in get_abi(name):
            key = (item.get('type'), abi_signature(item))
            if key not in seen:
                seen.add(key)
                abi.append(item)
    return tuple(abi)


class ContractResolver:
    """
    Resolves contracts over a connection.

    An explicit ABI always wins. Otherwise the deployed bytecode is scanned
    (following an EIP-1967 proxy to its implementation) and matched against
    the bundled interfaces. Failures are not retried here.

    Args:
        connection: Shared connection
    """

    def __init__(self, connection: Connection):
        self.connection = connection

    async def resolve(
        self, address: str, abi: Optional[Sequence[Dict[str, Any]]] = None
    ) -> ResolvedContract:
        """
        Materialize the interface descriptor of a contract.

        Args:
            address: Contract address
            abi: Explicit ABI; skips bytecode inspection when given

        Returns:
            ResolvedContract

        Raises:
            DescriptorFetchFailed: On network failure or when no contract is
                deployed at ``address``
        """
        address = Web3.to_checksum_address(address)

        if abi is not None:
            return ResolvedContract(address, InterfaceDescriptor.from_abi(abi), tuple(abi))

        try:
            code = bytes(await self.connection.w3.eth.get_code(address))
            if not code:
                raise DescriptorFetchFailed(address, "no contract code at this address")
            implementation = await self._implementation_address(address)
            if implementation is not None:
                logger.debug("%s is a proxy for %s", address, implementation)
                code += bytes(await self.connection.w3.eth.get_code(implementation))
        except NETWORK_ERRORS as exc:
            raise DescriptorFetchFailed(address, str(exc)) from exc

        descriptor = InterfaceDescriptor.from_bytecode(code)
        return ResolvedContract(address, descriptor, known_abi(descriptor))

    async def _implementation_address(self, address: str) -> Optional[str]:
        raw = bytes(await self.connection.w3.eth.get_storage_at(address, IMPLEMENTATION_SLOT))
        slot = raw[-20:]
        if not any(slot):
            return None
        return Web3.to_checksum_address(slot)
