"""
Capability façade base class.

A façade wraps one deployed contract as one token standard. It exposes the
standard's mandatory operations directly and every optional extension
through a guarded accessor that fails with ``ExtensionNotImplemented`` when
the contract lacks it.
"""

from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence

from ..core.context import Connection, ContractContext
from ..core.resolver import ContractResolver
from ..core.storage import Storage
from ..exceptions import FacadeNotBoundError
from ..features.descriptor import InterfaceDescriptor
from ..features.factory import ExtensionFactory, FeatureSet, HandleTypes
from ..features.guard import assert_enabled
from ..features.names import CapabilityName, StandardFamily
from ..features.registry import requirement


class FacadeState(Enum):
    UNBOUND = "unbound"
    BOUND = "bound"


class BaseFacade:
    """
    Shared façade plumbing.

    Subclasses set ``FAMILY`` and map every capability of that family to
    its handle classes in ``HANDLE_TYPES``.

    Args:
        context: Contract context shared with every handle
        storage: Storage handed to handles that upload metadata
    """

    FAMILY: StandardFamily
    HANDLE_TYPES: Mapping[CapabilityName, HandleTypes] = {}

    def __init__(self, context: ContractContext, storage: Optional[Storage] = None):
        self.context = context
        self.storage = storage
        self._factory = ExtensionFactory(self.FAMILY, self.HANDLE_TYPES)
        self._features: Optional[FeatureSet] = None

    @classmethod
    async def create(
        cls,
        address: str,
        connection: Connection,
        storage: Optional[Storage] = None,
        abi: Optional[Sequence[Dict[str, Any]]] = None,
        resolver: Optional[ContractResolver] = None,
    ):
        """
        Resolve a contract and return a bound façade for it.

        Args:
            address: Contract address
            connection: Shared connection
            storage: Storage for metadata uploads
            abi: Explicit ABI; the bytecode is inspected when omitted
            resolver: Resolver to use instead of a fresh one

        Returns:
            Bound façade

        Raises:
            DescriptorFetchFailed: If the contract's interface could not be fetched
        """
        resolver = resolver or ContractResolver(connection)
        resolved = await resolver.resolve(address, abi)
        context = ContractContext(connection, resolved.address, resolved.abi)
        return cls(context, storage).bind(resolved.descriptor)

    @property
    def state(self) -> FacadeState:
        return FacadeState.UNBOUND if self._features is None else FacadeState.BOUND

    def bind(self, descriptor: InterfaceDescriptor) -> "BaseFacade":
        """
        Run feature detection and attach every handle in one step.

        Raises:
            ValueError: If the façade is already bound
        """
        if self._features is not None:
            raise ValueError(
                f"{type(self).__name__} is already bound; create a new façade "
                f"to pick up a different descriptor"
            )
        self._features = self._factory.build(self.context, descriptor, self.storage)
        return self

    @property
    def features(self) -> FeatureSet:
        if self._features is None:
            raise FacadeNotBoundError(
                f"{type(self).__name__} for {self.context.address} has not run "
                f"feature detection yet"
            )
        return self._features

    def _require(self, capability: CapabilityName):
        features = self.features
        return assert_enabled(
            features.get(capability),
            requirement(self.FAMILY, capability),
            features.unsatisfied.get(capability),
        )

    def is_supported(self, capability) -> bool:
        """Whether the contract implements ``capability`` (degraded counts)."""
        return self.features.is_present(capability)

    def get_address(self) -> str:
        return self.context.address
