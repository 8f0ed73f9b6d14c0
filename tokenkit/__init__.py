"""
tokenkit

Runtime feature detection for deployed token contracts. Resolves a
contract's interface, detects which optional ERC20/ERC721/ERC1155
extensions it implements and exposes only those, failing with a
descriptive error when a missing extension is used.
"""

__version__ = "0.1.0"
__author__ = "tokenkit contributors"

from .artifacts.loader import (
    get_abi,
    get_event_topic,
    get_function_selector,
    list_available_interfaces,
    load_artifact,
)
from .config import SDKOptions
from .contracts import Erc20, Erc721, Erc1155, SmartContract
from .core import Connection, ContractResolver, IpfsStorage
from .exceptions import (
    AbortedOperation,
    CompositeCapabilityUnsatisfied,
    DescriptorFetchFailed,
    ExtensionNotImplemented,
    FacadeNotBoundError,
    StaleContextError,
    TokenKitError,
)
from .features import CapabilityName, InterfaceDescriptor, StandardFamily, SupportLevel

__all__ = [
    'get_abi',
    'get_event_topic',
    'get_function_selector',
    'list_available_interfaces',
    'load_artifact',
    'SDKOptions',
    'Erc20',
    'Erc721',
    'Erc1155',
    'SmartContract',
    'Connection',
    'ContractResolver',
    'IpfsStorage',
    'AbortedOperation',
    'CompositeCapabilityUnsatisfied',
    'DescriptorFetchFailed',
    'ExtensionNotImplemented',
    'FacadeNotBoundError',
    'StaleContextError',
    'TokenKitError',
    'CapabilityName',
    'InterfaceDescriptor',
    'StandardFamily',
    'SupportLevel',
]
