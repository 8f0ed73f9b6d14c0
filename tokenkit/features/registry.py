"""
Capability registry.

One ordered table per standard family, mapping each optional extension to
the selectors a contract must expose for it. The tables are derived once per
process from the bundled interface artifacts and are read-only afterwards.
Supporting a new extension means adding one entry below.
"""

from functools import lru_cache
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Sequence, Tuple

from ..artifacts.loader import get_abi, get_event_topic, get_function_selector, selector_for
from .descriptor import InterfaceDescriptor
from .names import CapabilityName, StandardFamily, SupportLevel
from .probe import CapabilityRequirement

# Mandatory interface of each family
BASELINE_INTERFACES = {
    StandardFamily.ERC20: "IERC20",
    StandardFamily.ERC721: "IERC721",
    StandardFamily.ERC1155: "IERC1155",
}

# (capability, interfaces, extra members, minimal members, depends_on)
# Members are (interface, function or event name) pairs. Extra members join the
# FULL set; minimal members must be a strict subset of it.
_Member = Tuple[str, str]
_Entry = Tuple[
    CapabilityName, Sequence[str], Sequence[_Member], Sequence[_Member], Tuple[CapabilityName, ...]
]

_TABLES: Dict[StandardFamily, List[_Entry]] = {
    StandardFamily.ERC20: [
        (CapabilityName.MINTABLE, ["IMintableERC20"], [], [], ()),
        (CapabilityName.BATCH_MINTABLE, ["IMulticall"], [], [], (CapabilityName.MINTABLE,)),
        (CapabilityName.BURNABLE, ["IBurnableERC20"], [], [], ()),
        (CapabilityName.CLAIMABLE_WITH_CONDITIONS, ["IDrop"], [], [], ()),
        (CapabilityName.SIGNATURE_MINTABLE, ["ISignatureMintERC20"], [], [], ()),
    ],
    StandardFamily.ERC721: [
        (
            CapabilityName.ENUMERABLE,
            ["IERC721Enumerable"],
            [("IERC721", "Transfer")],
            [("IERC721", "Transfer"), ("IERC721Enumerable", "totalSupply")],
            (),
        ),
        (CapabilityName.MINTABLE, ["IMintableERC721"], [], [], ()),
        (CapabilityName.BATCH_MINTABLE, ["IMulticall"], [], [], (CapabilityName.MINTABLE,)),
        (CapabilityName.BURNABLE, ["IBurnableERC721"], [], [], ()),
        (CapabilityName.LAZY_MINTABLE, ["ILazyMint"], [], [], ()),
        (CapabilityName.CLAIMABLE, ["IClaimableERC721"], [], [], ()),
        (CapabilityName.CLAIMABLE_WITH_CONDITIONS, ["IDrop"], [], [], ()),
        (CapabilityName.SIGNATURE_MINTABLE, ["ISignatureMintERC721"], [], [], ()),
        (CapabilityName.REVEALABLE, ["IDelayedReveal"], [], [], ()),
    ],
    StandardFamily.ERC1155: [
        (
            CapabilityName.ENUMERABLE,
            ["IERC1155Enumerable"],
            [("IERC1155", "TransferSingle"), ("IERC1155", "TransferBatch")],
            [
                ("IERC1155", "TransferSingle"),
                ("IERC1155", "TransferBatch"),
                ("IERC1155Enumerable", "totalSupply"),
            ],
            (),
        ),
        (CapabilityName.MINTABLE, ["IMintableERC1155"], [], [], ()),
        (CapabilityName.BATCH_MINTABLE, ["IMulticall"], [], [], (CapabilityName.MINTABLE,)),
        (CapabilityName.BURNABLE, ["IBurnableERC1155"], [], [], ()),
        (CapabilityName.LAZY_MINTABLE, ["ILazyMint"], [], [], ()),
        (CapabilityName.CLAIMABLE, ["IClaimableERC1155"], [], [], ()),
        (CapabilityName.CLAIMABLE_WITH_CONDITIONS, ["IDrop1155"], [], [], ()),
        (CapabilityName.SIGNATURE_MINTABLE, ["ISignatureMintERC1155"], [], [], ()),
        (CapabilityName.REVEALABLE, ["IDelayedReveal"], [], [], ()),
    ],
}


def _coerce_family(family) -> StandardFamily:
    try:
        return StandardFamily(family)
    except ValueError:
        available = ", ".join(f.value for f in StandardFamily)
        raise ValueError(
            f"Unknown standard family: {family}. "
            f"Available families: {available}"
        ) from None


def function_selectors(interface_names: Sequence[str]) -> FrozenSet[str]:
    """Function selectors declared by the given bundled interfaces."""
    selectors = set()
    for name in interface_names:
        for item in get_abi(name):
            if item.get('type') == 'function':
                selectors.add(selector_for(item))
    return frozenset(selectors)


def member_selectors(members: Sequence[Tuple[str, str]]) -> FrozenSet[str]:
    """Selectors or topics of single functions and events of bundled interfaces."""
    selectors = set()
    for interface, name in members:
        selector = get_event_topic(interface, name) or get_function_selector(interface, name)
        if selector is None:
            raise ValueError(f"{interface} declares no function or event named {name}")
        selectors.add(selector)
    return frozenset(selectors)


@lru_cache(maxsize=None)
def _build_table(family: StandardFamily) -> Mapping[CapabilityName, CapabilityRequirement]:
    table = {}
    for capability, interfaces, extra, minimal_members, depends_on in _TABLES[family]:
        minimal = member_selectors(minimal_members)
        table[capability] = CapabilityRequirement(
            capability=capability,
            family=family,
            interfaces=tuple(interfaces),
            selectors=function_selectors(interfaces) | member_selectors(extra),
            minimal=minimal,
            min_level=SupportLevel.PARTIAL if minimal else SupportLevel.FULL,
            depends_on=depends_on,
        )
    return MappingProxyType(table)


def requirements_for(family) -> Mapping[CapabilityName, CapabilityRequirement]:
    """
    Get the ordered capability table of a standard family.

    Args:
        family: A StandardFamily or its string value (e.g. "ERC1155")

    Returns:
        Read-only mapping of CapabilityName to CapabilityRequirement

    Raises:
        ValueError: If the family is unknown
    """
    return _build_table(_coerce_family(family))


def requirement(family, capability) -> CapabilityRequirement:
    """
    Look up one capability requirement.

    Raises:
        ValueError: If the family is unknown or does not define the capability
    """
    table = requirements_for(family)
    try:
        return table[CapabilityName(capability)]
    except (KeyError, ValueError):
        raise ValueError(
            f"{family} does not define the '{capability}' extension"
        ) from None


@lru_cache(maxsize=None)
def baseline_selectors(family) -> FrozenSet[str]:
    """Function selectors of a family's mandatory interface."""
    return function_selectors([BASELINE_INTERFACES[_coerce_family(family)]])


def detect_families(descriptor: InterfaceDescriptor) -> List[StandardFamily]:
    """
    List the families whose mandatory interface the descriptor fully covers.

    Args:
        descriptor: Interface descriptor of a deployed contract

    Returns:
        Detected families, in declaration order
    """
    return [
        family for family in StandardFamily
        if baseline_selectors(family) <= descriptor.selectors
    ]
