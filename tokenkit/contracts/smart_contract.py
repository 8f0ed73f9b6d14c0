"""
Generic contract handle.

``SmartContract`` resolves a contract once, detects which token standards
it implements and builds one bound façade per standard. After a network or
signer change the whole generation is rebuilt from a fresh descriptor and
swapped in at once.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from ..core.context import Connection, ContractContext
from ..core.resolver import ContractResolver, ResolvedContract
from ..core.storage import Storage
from ..exceptions import ExtensionNotImplemented
from ..features.names import StandardFamily
from ..features.registry import BASELINE_INTERFACES, detect_families
from .erc20 import Erc20
from .erc721 import Erc721
from .erc1155 import Erc1155
from .facade import BaseFacade

logger = logging.getLogger(__name__)

FACADE_TYPES = {
    StandardFamily.ERC20: Erc20,
    StandardFamily.ERC721: Erc721,
    StandardFamily.ERC1155: Erc1155,
}


@dataclass(frozen=True)
class _Generation:
    """Everything derived from one descriptor fetch."""

    resolved: ResolvedContract
    context: ContractContext
    facades: Dict[StandardFamily, BaseFacade]


class SmartContract:
    """
    Any deployed contract, with guarded access to its token standards.

    Use ``await SmartContract.create(...)`` rather than the constructor.
    """

    def __init__(
        self,
        connection: Connection,
        storage: Optional[Storage] = None,
        resolver: Optional[ContractResolver] = None,
    ):
        self.connection = connection
        self.storage = storage
        self.resolver = resolver or ContractResolver(connection)
        self._generation: Optional[_Generation] = None
        self._abi: Optional[List[Dict[str, Any]]] = None
        self._address: Optional[str] = None

    @classmethod
    async def create(
        cls,
        address: str,
        connection: Connection,
        storage: Optional[Storage] = None,
        abi: Optional[Sequence[Dict[str, Any]]] = None,
        resolver: Optional[ContractResolver] = None,
    ) -> "SmartContract":
        """
        Resolve a contract and build its façades.

        Args:
            address: Contract address
            connection: Shared connection
            storage: Storage for metadata uploads
            abi: Explicit ABI; the bytecode is inspected when omitted
            resolver: Resolver to use instead of a fresh one

        Returns:
            Fully built SmartContract

        Raises:
            DescriptorFetchFailed: If the contract's interface could not be
                fetched; nothing is built in that case
        """
        contract = cls(connection, storage, resolver)
        contract._address = address
        contract._abi = list(abi) if abi is not None else None
        contract._generation = await contract._load()
        return contract

    async def _load(self) -> _Generation:
        resolved = await self.resolver.resolve(self._address, self._abi)
        context = ContractContext(self.connection, resolved.address, resolved.abi)
        facades = {
            family: FACADE_TYPES[family](context, self.storage).bind(resolved.descriptor)
            for family in detect_families(resolved.descriptor)
        }
        logger.debug(
            "Built %s for %s at connection version %d",
            ", ".join(str(f) for f in facades) or "no token façades",
            resolved.address, context.version,
        )
        return _Generation(resolved, context, facades)

    @property
    def _current(self) -> _Generation:
        if self._generation is None:
            raise ValueError("SmartContract was not loaded; use SmartContract.create()")
        return self._generation

    async def on_network_updated(
        self, w3=None, signer_address: Optional[str] = None
    ) -> None:
        """
        Switch network or signer and rebuild every façade.

        The previous façades and their handles turn stale immediately. The
        new generation replaces them only once it is completely built; if
        re-resolving fails the error propagates and the stale generation
        stays in place, failing with ``StaleContextError`` on use.
        """
        self.connection.update(w3=w3, signer_address=signer_address)
        generation = await self._load()
        self._generation = generation
        logger.info("Rebuilt façades for %s", generation.resolved.address)

    def get_address(self) -> str:
        return self._current.resolved.address

    @property
    def abi(self) -> List[Dict[str, Any]]:
        return list(self._current.resolved.abi)

    @property
    def families(self) -> List[StandardFamily]:
        return list(self._current.facades)

    @property
    def context(self) -> ContractContext:
        return self._current.context

    def _facade(self, family: StandardFamily) -> BaseFacade:
        facade = self._current.facades.get(family)
        if facade is None:
            interface = BASELINE_INTERFACES[family]
            raise ExtensionNotImplemented(
                family, family, f"Implement the {interface} interface to unlock it."
            )
        return facade

    @property
    def erc20(self) -> Erc20:
        """
        ERC20 façade.

        Raises:
            ExtensionNotImplemented: If the contract is not an ERC20 token
        """
        return self._facade(StandardFamily.ERC20)

    @property
    def erc721(self) -> Erc721:
        return self._facade(StandardFamily.ERC721)

    @property
    def erc1155(self) -> Erc1155:
        return self._facade(StandardFamily.ERC1155)

    async def call(self, function_name: str, *args, value: int = 0) -> Any:
        """
        Call any function of the contract.

        View and pure functions are read; everything else is sent as a
        transaction.
        """
        context = self.context
        item = next(
            (
                i for i in context.abi
                if i.get("type") == "function" and i.get("name") == function_name.split("(")[0]
            ),
            None,
        )
        if item is None:
            raise ValueError(f"Function {function_name} not found in ABI")
        if item.get("stateMutability") in ("view", "pure"):
            return await context.read(function_name, *args)
        return await context.send_transaction(function_name, list(args), value=value)
