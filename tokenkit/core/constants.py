"""Chain-level constants shared by the contract handles."""

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Sentinel currency for payments in the chain's native token
NATIVE_TOKEN_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

MAX_UINT256 = 2 ** 256 - 1

ZERO_BYTES32 = b"\x00" * 32

DEFAULT_QUERY_ALL_COUNT = 100
