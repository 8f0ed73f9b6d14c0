"""
Client-side event log scanning.

Used by degraded handles when a contract exposes a supply counter and transfer
events but no on-chain enumeration index. Scans run in fixed block windows and check the
caller's abort signal before every window.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from ...exceptions import AbortedOperation

logger = logging.getLogger(__name__)


def _check_abort(abort: Optional[asyncio.Event], event_name: str, scanned_to: Optional[int]) -> None:
    if abort is not None and abort.is_set():
        raise AbortedOperation(f"{event_name} log scan", scanned_to)


async def scan_logs(
    context,
    event_name: str,
    abort: Optional[asyncio.Event] = None,
    argument_filters: Optional[Dict[str, Any]] = None,
) -> List[Any]:
    """
    Fetch every log of one event from the configured start block to head.

    Args:
        context: Contract context to query
        event_name: Event to scan for
        abort: Set it to stop the scan before the next window
        argument_filters: Indexed argument filters passed to ``eth_getLogs``

    Returns:
        Decoded logs in chain order

    Raises:
        AbortedOperation: If ``abort`` was set before the scan finished
    """
    options = context.options
    window = options.log_scan_block_range
    _check_abort(abort, event_name, None)
    latest = await context.block_number()

    logs: List[Any] = []
    scanned_to = None
    for from_block in range(options.log_scan_from_block, latest + 1, window):
        _check_abort(abort, event_name, scanned_to)
        to_block = min(from_block + window - 1, latest)
        logs.extend(await context.get_logs(event_name, from_block, to_block, argument_filters))
        scanned_to = to_block

    logger.debug(
        "Scanned %s logs of %s up to block %d: %d found",
        event_name, context.address, latest, len(logs),
    )
    return logs
