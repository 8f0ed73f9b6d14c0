"""Base class for capability handles."""

from typing import Optional

from .context import ContractContext
from .storage import Storage


class CapabilityHandle:
    """
    Chain access for one capability of one contract.

    Built by the extension factory and never mutated afterwards. The
    context is shared with the façade and every sibling handle.

    Args:
        context: Contract context the handle calls through
        storage: Storage used by operations that accept rich metadata
    """

    # True for fallbacks that emulate a missing on-chain index client-side
    degraded = False

    def __init__(self, context: ContractContext, storage: Optional[Storage] = None):
        self.context = context
        self.storage = storage

    def _require_storage(self) -> Storage:
        if self.storage is None:
            raise ValueError(
                f"{type(self).__name__} needs a storage backend to upload metadata"
            )
        return self.storage

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.context.address})"
