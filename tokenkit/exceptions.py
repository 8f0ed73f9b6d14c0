"""
tokenkit exception hierarchy.

All public exceptions inherit from TokenKitError, giving callers a single
base class to catch when they want to handle any SDK-specific failure
without swallowing unrelated errors.
"""

from typing import Optional


class TokenKitError(Exception):
    """Base exception for all tokenkit errors."""


class ExtensionNotImplemented(TokenKitError):
    """
    Raised when an optional extension is used on a contract that lacks it.

    Always recoverable by the caller: use a different contract, or skip the
    operation.

    Attributes:
        capability: Name of the missing extension (e.g. "Mintable")
        family: Standard family the extension belongs to (e.g. "ERC1155")
        remediation: Which on-chain interface unlocks the extension
    """

    def __init__(self, capability: str, family: str, remediation: str = ""):
        self.capability = str(capability)
        self.family = str(family)
        self.remediation = remediation
        message = (
            f"The {self.family} contract does not implement the "
            f"'{self.capability}' extension."
        )
        if remediation:
            message = f"{message} {remediation}"
        super().__init__(message)


class CompositeCapabilityUnsatisfied(ExtensionNotImplemented):
    """
    Raised when a composite extension was forced absent.

    The contract exposes the extension's own selectors, but another
    extension it builds on is missing (e.g. BatchMintable without Mintable).
    """

    def __init__(
        self,
        capability: str,
        missing_dependency: str,
        family: str,
        remediation: str = "",
    ):
        self.missing_dependency = str(missing_dependency)
        self.dependency_remediation = remediation
        hint = (
            f"It requires the '{self.missing_dependency}' extension, "
            f"which this contract does not implement."
        )
        if remediation:
            hint = f"{hint} {remediation}"
        super().__init__(capability, family, hint)


class DescriptorFetchFailed(TokenKitError):
    """
    Raised when a contract's interface descriptor could not be materialized.

    The underlying network error, if any, is chained as ``__cause__``.
    """

    def __init__(self, address: str, reason: str = ""):
        self.address = address
        self.reason = reason
        message = f"Could not fetch the interface of contract {address}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class AbortedOperation(TokenKitError):
    """Raised when a client-side log scan is cancelled through its abort signal."""

    def __init__(self, operation: str, scanned_to_block: Optional[int] = None):
        self.operation = operation
        self.scanned_to_block = scanned_to_block
        message = f"{operation} was aborted"
        if scanned_to_block is not None:
            message = f"{message} after scanning up to block {scanned_to_block}"
        super().__init__(message)


class StaleContextError(TokenKitError):
    """
    Raised when a capability handle outlived its network/signer context.

    Fetch the contract's façade again after a network or signer change.
    """


class FacadeNotBoundError(TokenKitError):
    """Raised when an extension is used before feature detection has run."""


class NotFoundError(TokenKitError):
    """Raised when on-chain or stored data for a token cannot be found."""


class StorageError(TokenKitError):
    """Raised for upload or download failures against decentralized storage."""


class TransactionError(TokenKitError):
    """Raised when a submitted transaction is mined with a failed status."""

    def __init__(self, function_name: str, tx_hash: str = ""):
        self.function_name = function_name
        self.tx_hash = tx_hash
        message = f"Transaction calling {function_name} reverted"
        if tx_hash:
            message = f"{message} ({tx_hash})"
        super().__init__(message)


class SignerRequiredError(TokenKitError):
    """Raised when a write or signer-scoped read is issued without a signer."""
