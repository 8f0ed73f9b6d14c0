"""
Extension factory.

Runs the capability probe against every optional extension of a standard
family and constructs a handle for each one that is present. Absence is
recorded as data; nothing here raises because a contract lacks an extension.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from ..exceptions import CompositeCapabilityUnsatisfied
from .descriptor import InterfaceDescriptor
from .names import CapabilityName, StandardFamily, SupportLevel
from .probe import CapabilityRequirement, supports
from .registry import requirements_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandleTypes:
    """
    Handle classes for one capability.

    Attributes:
        full: Built on FULL support
        degraded: Built on PARTIAL support, for read-path capabilities that
            have a client-side fallback
    """

    full: type
    degraded: Optional[type] = None


@dataclass(frozen=True)
class FeatureSet:
    """
    Outcome of feature detection for one contract and one family.

    Every capability the family defines has an entry in ``handles``: either
    a live handle or None. Never mutated after construction.
    """

    family: StandardFamily
    requirements: Mapping[CapabilityName, CapabilityRequirement]
    handles: Mapping[CapabilityName, Optional[Any]]
    levels: Mapping[CapabilityName, SupportLevel]
    unsatisfied: Mapping[CapabilityName, CompositeCapabilityUnsatisfied] = field(
        default_factory=lambda: MappingProxyType({})
    )
    context_version: int = 0

    def get(self, capability) -> Optional[Any]:
        """Handle for ``capability``, or None when absent or not applicable."""
        return self.handles.get(CapabilityName(capability))

    def is_present(self, capability) -> bool:
        return self.get(capability) is not None

    def is_degraded(self, capability) -> bool:
        handle = self.get(capability)
        return bool(handle is not None and getattr(handle, "degraded", False))

    def presence(self) -> Dict[str, bool]:
        """Map of capability name to presence, in registry order."""
        return {str(name): handle is not None for name, handle in self.handles.items()}


class ExtensionFactory:
    """
    Builds FeatureSets for one standard family.

    Args:
        family: Standard family the façade wraps
        handle_types: Handle classes for each capability of the family

    Raises:
        ValueError: If the family is unknown or a capability it defines has
            no handle class
    """

    def __init__(self, family, handle_types: Mapping[CapabilityName, HandleTypes]):
        self.requirements = requirements_for(family)
        self.family = StandardFamily(family)
        missing = [str(c) for c in self.requirements if c not in handle_types]
        if missing:
            raise ValueError(
                f"No handle types registered for {self.family} extensions: "
                f"{', '.join(missing)}"
            )
        self.handle_types = handle_types

    def build(
        self,
        context,
        descriptor: InterfaceDescriptor,
        storage=None,
    ) -> FeatureSet:
        """
        Detect every extension and construct the handles that apply.

        Args:
            context: Contract context the handles bind to
            descriptor: Already materialized interface descriptor
            storage: Storage collaborator for handles that upload metadata

        Returns:
            FeatureSet with a handle or None per capability
        """
        levels = {
            capability: supports(descriptor, req)
            for capability, req in self.requirements.items()
        }

        handles: Dict[CapabilityName, Optional[Any]] = {}
        unsatisfied: Dict[CapabilityName, CompositeCapabilityUnsatisfied] = {}

        for capability, req in self.requirements.items():
            level = levels[capability]
            handles[capability] = None

            if level < req.min_level:
                logger.debug("%s %s: not detected", self.family, capability)
                continue

            missing = [
                dep for dep in req.depends_on
                if levels.get(dep, SupportLevel.NONE) < self.requirements[dep].min_level
            ]
            if missing:
                unsatisfied[capability] = CompositeCapabilityUnsatisfied(
                    capability, missing[0], self.family,
                    self.requirements[missing[0]].remediation,
                )
                logger.debug(
                    "%s %s: selectors present but %s is missing, disabled",
                    self.family, capability, missing[0],
                )
                continue

            types = self.handle_types[capability]
            if level == SupportLevel.FULL:
                handles[capability] = types.full(context, storage)
                logger.debug("%s %s: detected", self.family, capability)
            elif types.degraded is not None:
                handles[capability] = types.degraded(context, storage)
                logger.warning(
                    "%s %s: only partially implemented by %s, falling back to "
                    "client-side event log scanning (slow)",
                    self.family, capability, getattr(context, "address", "contract"),
                )

        return FeatureSet(
            family=self.family,
            requirements=self.requirements,
            handles=MappingProxyType(handles),
            levels=MappingProxyType(levels),
            unsatisfied=MappingProxyType(unsatisfied),
            context_version=getattr(context, "version", 0),
        )
