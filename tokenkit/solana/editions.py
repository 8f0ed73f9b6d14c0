"""
Printed edition counting for Metaplex master editions.

Prints of a master edition are tracked in edition marker accounts. Each
marker holds a 31-byte ledger in which every bit flags one printed edition,
most significant bit first. Marker 0 has one bit fewer: edition number 0 is
the master itself, so the top bit of its first byte is never used.

Editions are printed densely in order, so the supply is the original plus
every set bit up to the first unset one.
"""

import logging
from typing import Awaitable, Callable, Optional, Tuple

logger = logging.getLogger(__name__)

LEDGER_SIZE = 31
EDITIONS_PER_MARKER = 248
# Marker 0 loses the top bit of its first byte
FIRST_MARKER_CAPACITY = EDITIONS_PER_MARKER - 1

LedgerFetcher = Callable[[int], Awaitable[Optional[bytes]]]


def page_capacity(marker: int) -> int:
    """Number of editions tracked by one marker page."""
    if marker < 0:
        raise ValueError("Edition marker numbers start at 0")
    return FIRST_MARKER_CAPACITY if marker == 0 else EDITIONS_PER_MARKER


def edition_bit_position(marker: int, index: int) -> Tuple[int, int]:
    """
    Locate one edition's bit in a marker ledger.

    Args:
        marker: Marker page number
        index: Position of the edition within the page

    Returns:
        ``(byte index, bit mask)`` into the page's ledger

    Raises:
        ValueError: If ``index`` is outside the page
    """
    capacity = page_capacity(marker)
    if not 0 <= index < capacity:
        raise ValueError(f"Edition index {index} is outside marker {marker} (0..{capacity - 1})")

    if marker > 0:
        return index // 8, 0x80 >> (index % 8)
    if index < 7:
        # First byte of marker 0 only has 7 usable bits
        return 0, 0x40 >> index
    shifted = index - 7
    return shifted // 8 + 1, 0x80 >> (shifted % 8)


def count_page(marker: int, ledger: Optional[bytes]) -> Tuple[int, bool]:
    """
    Count the leading printed editions of one page.

    A missing ledger, or bytes missing from a short one, read as unset.

    Returns:
        ``(set bits before the first gap, whether the page is full)``
    """
    ledger = ledger or b""
    capacity = page_capacity(marker)
    for index in range(capacity):
        byte_index, mask = edition_bit_position(marker, index)
        if byte_index >= len(ledger) or not ledger[byte_index] & mask:
            return index, False
    return capacity, True


async def count_printed_editions(fetch_ledger: LedgerFetcher) -> int:
    """
    Compute the supply of a master edition.

    Args:
        fetch_ledger: Returns the ledger of a marker page, or None when the
            marker account does not exist

    Returns:
        1 for the master plus every printed edition
    """
    supply = 1
    marker = 0
    while True:
        printed, full = count_page(marker, await fetch_ledger(marker))
        supply += printed
        if not full:
            logger.debug("Edition scan stopped in marker %d, supply %d", marker, supply)
            return supply
        marker += 1
