"""Guarded access to optional capability handles."""

from typing import Optional, TypeVar

from ..exceptions import (
    CompositeCapabilityUnsatisfied,
    ExtensionNotImplemented,
    StaleContextError,
)
from .probe import CapabilityRequirement

H = TypeVar("H")


def assert_enabled(
    handle: Optional[H],
    requirement: CapabilityRequirement,
    unsatisfied: Optional[CompositeCapabilityUnsatisfied] = None,
) -> H:
    """
    Return ``handle`` unchanged, or fail at the point of use.

    Args:
        handle: Live handle, or None when the capability is absent
        requirement: Requirement of the capability, used to describe it
        unsatisfied: Recorded composite failure for the capability, if any

    Returns:
        The same handle object

    Raises:
        CompositeCapabilityUnsatisfied: If the capability was forced absent
            because a dependency is missing
        ExtensionNotImplemented: If the capability is absent
        StaleContextError: If the handle was built against an older
            network/signer context
    """
    if handle is None:
        if unsatisfied is not None:
            raise CompositeCapabilityUnsatisfied(
                unsatisfied.capability,
                unsatisfied.missing_dependency,
                unsatisfied.family,
                unsatisfied.dependency_remediation,
            )
        raise ExtensionNotImplemented(
            requirement.capability, requirement.family, requirement.remediation
        )

    context = getattr(handle, "context", None)
    if context is not None and context.is_stale:
        raise StaleContextError(
            f"The {requirement.family} '{requirement.capability}' handle was "
            f"built for connection version {context.version}; fetch the "
            f"contract again after switching network or signer"
        )
    return handle
