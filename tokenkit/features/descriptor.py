"""
Interface descriptors: the set of selectors a deployed contract supports.

A descriptor is derived either from an ABI (explicit or published) or from
the deployed bytecode. It is immutable once built and is the only input the
capability probe looks at.
"""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, Union

from hexbytes import HexBytes

from ..artifacts.loader import selector_for, selector_for_signature

PUSH1 = 0x60
PUSH32 = 0x7F


@dataclass(frozen=True)
class InterfaceDescriptor:
    """
    Content-derived set of function selectors and event topics.

    Attributes:
        selectors: Lower-case ``0x`` hex strings; 4 bytes for functions,
            32 bytes for event topics
        source: Where the selectors came from, ``"abi"`` or ``"bytecode"``
    """

    selectors: FrozenSet[str]
    source: str = "abi"

    @classmethod
    def from_abi(cls, abi: Iterable[Dict[str, Any]]) -> "InterfaceDescriptor":
        """
        Build a descriptor from a contract ABI.

        Args:
            abi: ABI entries; constructors, fallbacks and errors are ignored

        Returns:
            Descriptor holding one selector per function and event
        """
        selectors = set()
        for item in abi:
            selector = selector_for(item)
            if selector is not None:
                selectors.add(selector)
        return cls(frozenset(selectors), source="abi")

    @classmethod
    def from_bytecode(cls, code: Union[bytes, str]) -> "InterfaceDescriptor":
        """
        Build a descriptor by scanning deployed bytecode for PUSH operands.

        Function dispatchers compare the calldata selector against PUSH4
        constants (PUSH3 when the selector starts with a zero byte), and
        event topics are pushed with PUSH32 before LOGn. Push data is
        skipped so operands are never read as opcodes.

        Args:
            code: Runtime bytecode as bytes or hex string

        Returns:
            Descriptor of every candidate selector found
        """
        code = bytes(HexBytes(code))
        selectors = set()
        i = 0
        while i < len(code):
            opcode = code[i]
            if PUSH1 <= opcode <= PUSH32:
                size = opcode - PUSH1 + 1
                operand = code[i + 1:i + 1 + size]
                if size in (3, 4) and len(operand) == size:
                    selectors.add("0x" + operand.rjust(4, b"\x00").hex())
                elif size == 32 and len(operand) == size:
                    selectors.add("0x" + operand.hex())
                i += size + 1
            else:
                i += 1
        return cls(frozenset(selectors), source="bytecode")

    def supports_signature(self, signature: str) -> bool:
        """Whether a function with canonical ``signature`` is present."""
        return selector_for_signature(signature) in self.selectors

    def supports_event(self, signature: str) -> bool:
        """Whether an event with canonical ``signature`` is present."""
        return selector_for_signature(signature, is_event=True) in self.selectors

    def __contains__(self, selector: object) -> bool:
        return isinstance(selector, str) and selector.lower() in self.selectors

    def __len__(self) -> int:
        return len(self.selectors)
