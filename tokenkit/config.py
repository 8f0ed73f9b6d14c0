"""
SDK options.

Defined with pydantic so values read from the environment are validated and
coerced the same way as values passed in code.
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field

ENV_PREFIX = "TOKENKIT_"


class SDKOptions(BaseModel):
    """Settings shared by every contract handle created from one connection."""

    gateway_url: str = Field(
        "https://ipfs.io/ipfs", description="HTTP gateway used to fetch ipfs:// URIs"
    )
    ipfs_api_url: str = Field(
        "http://127.0.0.1:5001", description="IPFS HTTP API used for uploads"
    )
    log_scan_from_block: int = Field(
        0, ge=0, description="First block scanned by log-scan fallbacks"
    )
    log_scan_block_range: int = Field(
        10_000, gt=0, description="Blocks per eth_getLogs window in log-scan fallbacks"
    )
    request_timeout: float = Field(
        30.0, gt=0, description="Storage request timeout in seconds"
    )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SDKOptions":
        """
        Build options from ``TOKENKIT_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            Options with every variable that is set applied over the defaults
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in environ:
                values[name] = environ[key]
        return cls(**values)
