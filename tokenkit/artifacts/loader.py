"""
Artifact loader for bundled interface ABIs.

This module provides functions to load the ABI of every on-chain interface
the SDK knows how to detect, and to derive function selectors and event
topics from them.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, Any, List, Optional

from web3 import Web3

# Get the package root directory
PACKAGE_DIR = Path(__file__).parent.parent
# Interface artifacts ship inside the package
ARTIFACTS_DIR = PACKAGE_DIR / "data" / "interfaces"

# Interface name mappings
INTERFACE_PATHS = {
    # Token standards
    "IERC20": "IERC20.json",
    "IERC721": "IERC721.json",
    "IERC1155": "IERC1155.json",

    # Enumeration
    "IERC721Enumerable": "IERC721Enumerable.json",
    "IERC1155Enumerable": "IERC1155Enumerable.json",

    # Minting
    "IMintableERC20": "IMintableERC20.json",
    "IMintableERC721": "IMintableERC721.json",
    "IMintableERC1155": "IMintableERC1155.json",
    "IMulticall": "IMulticall.json",
    "ILazyMint": "ILazyMint.json",
    "ISignatureMintERC20": "ISignatureMintERC20.json",
    "ISignatureMintERC721": "ISignatureMintERC721.json",
    "ISignatureMintERC1155": "ISignatureMintERC1155.json",

    # Burning
    "IBurnableERC20": "IBurnableERC20.json",
    "IBurnableERC721": "IBurnableERC721.json",
    "IBurnableERC1155": "IBurnableERC1155.json",

    # Claiming
    "IClaimableERC721": "IClaimableERC721.json",
    "IClaimableERC1155": "IClaimableERC1155.json",
    "IDrop": "IDrop.json",
    "IDrop1155": "IDrop1155.json",

    # Reveal
    "IDelayedReveal": "IDelayedReveal.json",
}


@lru_cache(maxsize=None)
def _read_artifact(interface_name: str) -> str:
    artifact_path = ARTIFACTS_DIR / INTERFACE_PATHS[interface_name]

    if not artifact_path.exists():
        raise FileNotFoundError(
            f"Artifact file not found: {artifact_path}\n"
            f"Make sure the package was installed with its data files"
        )

    return artifact_path.read_text(encoding="utf-8")


def load_artifact(interface_name: str) -> Dict[str, Any]:
    """
    Load the complete artifact JSON for an interface.

    Args:
        interface_name: Name of the interface (e.g., 'IERC1155', 'IMintableERC721')

    Returns:
        Artifact dictionary with ``contractName`` and ``abi``

    Raises:
        FileNotFoundError: If the artifact file doesn't exist
        ValueError: If the interface name is not recognized
    """
    if interface_name not in INTERFACE_PATHS:
        available = ", ".join(INTERFACE_PATHS.keys())
        raise ValueError(
            f"Unknown interface: {interface_name}. "
            f"Available interfaces: {available}"
        )

    return json.loads(_read_artifact(interface_name))


def get_abi(interface_name: str) -> list:
    """
    Get the ABI for a specific interface.

    Args:
        interface_name: Name of the interface

    Returns:
        Interface ABI as a list
    """
    artifact = load_artifact(interface_name)
    return artifact.get('abi', [])


def canonical_type(param: Dict[str, Any]) -> str:
    """
    Build the canonical ABI type of a parameter, expanding tuples.

    Args:
        param: ABI input/output entry

    Returns:
        Canonical type string (e.g., ``(bytes32[],uint256)[]``)
    """
    abi_type = param['type']
    if not abi_type.startswith('tuple'):
        return abi_type

    inner = ','.join(canonical_type(c) for c in param.get('components', []))
    # Keep any array suffix, e.g. "tuple[]" -> "(...)[]"
    return f"({inner}){abi_type[len('tuple'):]}"


def abi_signature(item: Dict[str, Any]) -> str:
    """Return ``name(type1,type2)`` for a function or event ABI entry."""
    inputs = ','.join(canonical_type(inp) for inp in item.get('inputs', []))
    return f"{item['name']}({inputs})"


def selector_for_signature(signature: str, is_event: bool = False) -> str:
    """
    Hash a canonical signature into its selector.

    Functions are identified by the first 4 bytes of the keccak hash,
    events by the full 32-byte topic.

    Args:
        signature: Canonical signature, e.g. ``transfer(address,uint256)``
        is_event: Whether the signature belongs to an event

    Returns:
        Lower-case hex selector with ``0x`` prefix
    """
    digest = bytes(Web3.keccak(text=signature))
    if not is_event:
        digest = digest[:4]
    return "0x" + digest.hex()


def selector_for(item: Dict[str, Any]) -> Optional[str]:
    """
    Compute the selector of a function or event ABI entry.

    Args:
        item: ABI entry

    Returns:
        Selector hex string, or None for constructors, fallbacks and errors
    """
    item_type = item.get('type')
    if item_type == 'function':
        return selector_for_signature(abi_signature(item))
    if item_type == 'event' and not item.get('anonymous', False):
        return selector_for_signature(abi_signature(item), is_event=True)
    return None


def get_function_selector(interface_name: str, function_name: str) -> Optional[str]:
    """
    Get the function selector (4-byte signature) for a specific function.

    Args:
        interface_name: Name of the interface
        function_name: Name of the function

    Returns:
        Function selector as a hex string, or None if not found
    """
    for item in get_abi(interface_name):
        if item.get('type') == 'function' and item.get('name') == function_name:
            return selector_for(item)

    return None


def get_event_topic(interface_name: str, event_name: str) -> Optional[str]:
    """
    Get the topic hash for a specific event.

    Args:
        interface_name: Name of the interface
        event_name: Name of the event

    Returns:
        Event topic as a hex string, or None if not found
    """
    for item in get_abi(interface_name):
        if item.get('type') == 'event' and item.get('name') == event_name:
            return selector_for(item)

    return None


def list_available_interfaces() -> List[str]:
    """
    List all interfaces bundled with the package.

    Returns:
        List of interface names
    """
    return list(INTERFACE_PATHS.keys())


def validate_artifacts() -> Dict[str, bool]:
    """
    Validate that all expected artifacts are present.

    Returns:
        Dictionary mapping interface names to availability status
    """
    status = {}
    for interface_name in INTERFACE_PATHS:
        try:
            status[interface_name] = bool(get_abi(interface_name))
        except (FileNotFoundError, ValueError):
            status[interface_name] = False

    return status
