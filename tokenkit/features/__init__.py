"""Runtime feature detection for deployed contracts."""
from .descriptor import InterfaceDescriptor
from .factory import ExtensionFactory, FeatureSet, HandleTypes
from .guard import assert_enabled
from .names import CapabilityName, StandardFamily, SupportLevel
from .probe import CapabilityRequirement, supports
from .registry import detect_families, requirement, requirements_for

__all__ = [
    "CapabilityName",
    "CapabilityRequirement",
    "ExtensionFactory",
    "FeatureSet",
    "HandleTypes",
    "InterfaceDescriptor",
    "StandardFamily",
    "SupportLevel",
    "assert_enabled",
    "detect_families",
    "requirement",
    "requirements_for",
    "supports",
]
