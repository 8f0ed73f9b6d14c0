"""
Decentralized storage boundary.

Handles that accept rich metadata upload it through a ``Storage`` object and
only ever see content URIs. ``IpfsStorage`` talks to an IPFS HTTP API for
uploads and to an HTTP gateway for downloads.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence, Union

import httpx

from ..config import SDKOptions
from ..exceptions import StorageError

logger = logging.getLogger(__name__)

# User-Agent sent with every request.
USER_AGENT = "tokenkit-storage/0.1"

Metadata = Union[Dict[str, Any], str]


class Storage(Protocol):
    """Content-addressed blob store consumed by the contract handles."""

    async def upload(self, data: Dict[str, Any]) -> str:
        ...

    async def upload_batch(self, items: Sequence[Dict[str, Any]], start_file_number: int = 0) -> List[str]:
        ...

    async def download_json(self, uri: str) -> Dict[str, Any]:
        ...


class IpfsStorage:
    """
    Storage backed by an IPFS HTTP API and gateway.

    Args:
        options: SDK options providing the API and gateway URLs
        client: Shared ``httpx.AsyncClient``; one is created per request
            when omitted
    """

    def __init__(self, options: Optional[SDKOptions] = None, client: Optional[httpx.AsyncClient] = None):
        self.options = options or SDKOptions()
        self._client = client

    def resolve(self, uri: str) -> str:
        """Turn an ``ipfs://`` URI into a gateway URL; other URIs pass through."""
        if uri.startswith("ipfs://"):
            return f"{self.options.gateway_url.rstrip('/')}/{uri[len('ipfs://'):]}"
        return uri

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        headers = {"User-Agent": USER_AGENT}
        try:
            if self._client is not None:
                response = await self._client.request(method, url, headers=headers, **kwargs)
            else:
                async with httpx.AsyncClient(timeout=self.options.request_timeout) as client:
                    response = await client.request(method, url, headers=headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise StorageError(f"{method} {url} failed: {exc}") from exc
        return response

    async def _add(self, files: List[tuple], wrap: bool) -> List[Dict[str, Any]]:
        url = f"{self.options.ipfs_api_url.rstrip('/')}/api/v0/add"
        params = {"cid-version": "1", "pin": "true"}
        if wrap:
            params["wrap-with-directory"] = "true"
        response = await self._request("POST", url, params=params, files=files)
        # The add endpoint streams one JSON object per line
        entries = [json.loads(line) for line in response.text.splitlines() if line.strip()]
        if not entries:
            raise StorageError("IPFS add returned no entries")
        return entries

    async def upload(self, data: Dict[str, Any]) -> str:
        """
        Upload one JSON document.

        Returns:
            ``ipfs://<cid>`` URI
        """
        entries = await self._add([("file", ("0", json.dumps(data)))], wrap=False)
        uri = f"ipfs://{entries[-1]['Hash']}"
        logger.debug("Uploaded metadata to %s", uri)
        return uri

    async def upload_batch(self, items: Sequence[Dict[str, Any]], start_file_number: int = 0) -> List[str]:
        """
        Upload JSON documents into one directory.

        Files are named ``start_file_number``, ``start_file_number + 1``, ...
        so that ``<base uri><token id>`` resolves to a token's metadata.

        Returns:
            One ``ipfs://<dir cid>/<file>`` URI per item, in order
        """
        if not items:
            return []
        files = [
            ("file", (str(start_file_number + i), json.dumps(item)))
            for i, item in enumerate(items)
        ]
        entries = await self._add(files, wrap=True)
        directory = next((e["Hash"] for e in entries if e.get("Name") == ""), None)
        if directory is None:
            raise StorageError("IPFS add did not return a wrapping directory")
        return [f"ipfs://{directory}/{start_file_number + i}" for i in range(len(items))]

    async def download_json(self, uri: str) -> Dict[str, Any]:
        response = await self._request("GET", self.resolve(uri))
        try:
            return response.json()
        except ValueError as exc:
            raise StorageError(f"{uri} does not contain JSON") from exc
