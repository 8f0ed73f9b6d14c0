"""Solana program helpers."""
from .editions import count_page, count_printed_editions, edition_bit_position, page_capacity
from .nft_collection import NFTCollection, edition_marker_address

__all__ = [
    "NFTCollection",
    "count_page",
    "count_printed_editions",
    "edition_bit_position",
    "edition_marker_address",
    "page_capacity",
]
