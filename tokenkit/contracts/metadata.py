"""
Token metadata helpers shared by the NFT façades and their handles.
"""

from typing import Any, Dict, List, Optional, Sequence

from ..core.storage import Metadata, Storage
from ..core.types import NFT
from ..exceptions import NotFoundError, StorageError


def token_uri_for(uri: str, token_id: int) -> str:
    """
    Expand the ERC-1155 ``{id}`` placeholder.

    The id is substituted as 64 lower-case hex characters, as the
    standard requires.
    """
    return uri.replace("{id}", format(token_id, "064x"))


async def fetch_token_metadata(
    token_id: int, token_uri: str, storage: Optional[Storage]
) -> Dict[str, Any]:
    """
    Download and normalize the metadata of one token.

    Args:
        token_id: Token id
        token_uri: URI stored on-chain for the token
        storage: Storage used to download the document

    Returns:
        Metadata dictionary with ``id`` and ``uri`` set

    Raises:
        NotFoundError: If the token has no URI
    """
    if not token_uri:
        raise NotFoundError(f"Token {token_id} has no metadata URI")

    if storage is None:
        return {"id": token_id, "uri": token_uri}

    try:
        metadata = await storage.download_json(token_uri_for(token_uri, token_id))
    except StorageError:
        # Some contracts substitute the decimal id instead of the hex one
        if "{id}" not in token_uri:
            raise
        metadata = await storage.download_json(token_uri.replace("{id}", str(token_id)))

    return {**metadata, "id": token_id, "uri": token_uri}


async def get_erc721_nft(context, storage: Optional[Storage], token_id: int) -> NFT:
    owner = await context.read("ownerOf", token_id)
    uri = await context.read("tokenURI", token_id)
    metadata = await fetch_token_metadata(token_id, uri, storage)
    return NFT(metadata=metadata, owner=owner, type="ERC721", supply=1)


async def get_erc1155_nft(context, storage: Optional[Storage], token_id: int) -> NFT:
    if context.has_function("totalSupply(uint256)"):
        supply = await context.read("totalSupply(uint256)", token_id)
    else:
        supply = 0
    uri = await context.read("uri", token_id)
    metadata = await fetch_token_metadata(token_id, uri, storage)
    return NFT(metadata=metadata, owner="", type="ERC1155", supply=supply)


async def upload_or_extract_uri(metadata: Metadata, storage: Optional[Storage]) -> str:
    """
    Return ``metadata`` unchanged if it is already a URI, else upload it.

    Raises:
        ValueError: If an upload is needed and no storage is configured
    """
    if isinstance(metadata, str):
        return metadata
    if storage is None:
        raise ValueError("A storage backend is required to upload token metadata")
    return await storage.upload(metadata)


async def upload_or_extract_uris(
    metadatas: Sequence[Metadata],
    storage: Optional[Storage],
    start_file_number: int = 0,
) -> List[str]:
    """
    Batch version of ``upload_or_extract_uri``.

    Either every item is a URI string or none is; mixing is rejected.
    """
    if all(isinstance(m, str) for m in metadatas):
        return list(metadatas)
    if any(isinstance(m, str) for m in metadatas):
        raise ValueError("Metadata must be either all URIs or all objects")
    if storage is None:
        raise ValueError("A storage backend is required to upload token metadata")
    return await storage.upload_batch(list(metadatas), start_file_number=start_file_number)


def base_uri_of(uris: Sequence[str]) -> str:
    """
    Common directory of uploaded batch URIs, with a trailing slash.

    Raises:
        ValueError: If the URIs do not share one directory
    """
    if not uris:
        raise ValueError("No URIs given")
    bases = {uri.rsplit("/", 1)[0] for uri in uris}
    if len(bases) != 1:
        raise ValueError("Batch URIs must share one base directory")
    return bases.pop() + "/"
