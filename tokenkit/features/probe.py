"""Capability requirements and the probe that measures them against a descriptor."""

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple

from .descriptor import InterfaceDescriptor
from .names import CapabilityName, StandardFamily, SupportLevel


@dataclass(frozen=True)
class CapabilityRequirement:
    """
    What a contract must expose for one capability of one family.

    Attributes:
        capability: Extension tag
        family: Standard family the requirement belongs to
        interfaces: Interfaces that unlock the capability, for error hints
        selectors: Selectors needed for FULL support
        minimal: Subset sufficient for PARTIAL support; empty if the
            capability has no degraded mode
        min_level: Lowest level at which a handle may be constructed
        depends_on: Capabilities that must also be present
    """

    capability: CapabilityName
    family: StandardFamily
    interfaces: Tuple[str, ...]
    selectors: FrozenSet[str]
    minimal: FrozenSet[str] = field(default_factory=frozenset)
    min_level: SupportLevel = SupportLevel.FULL
    depends_on: Tuple[CapabilityName, ...] = ()

    def __post_init__(self):
        if self.minimal and not self.minimal < self.selectors:
            raise ValueError(
                f"{self.family} {self.capability}: the partial subset must be a "
                f"strict subset of the required selectors"
            )

    @property
    def remediation(self) -> str:
        """Human readable hint naming the interface(s) to implement."""
        names = " and ".join(self.interfaces)
        noun = "interfaces" if len(self.interfaces) > 1 else "interface"
        return f"Implement the {names} {noun} to unlock it."


def supports(
    descriptor: InterfaceDescriptor, requirement: CapabilityRequirement
) -> SupportLevel:
    """
    Measure how much of ``requirement`` the descriptor covers.

    Pure and deterministic: no network access, the descriptor must already
    be materialized.

    Args:
        descriptor: Interface descriptor of a deployed contract
        requirement: Capability requirement to check

    Returns:
        FULL if every required selector is present, PARTIAL if the minimal
        subset of those selectors is, NONE otherwise
    """
    present = descriptor.selectors
    if requirement.selectors <= present:
        return SupportLevel.FULL
    if requirement.minimal and requirement.minimal <= present:
        return SupportLevel.PARTIAL
    return SupportLevel.NONE
