"""Bundled interface ABIs and selector utilities."""
from .loader import (
    get_abi,
    get_event_topic,
    get_function_selector,
    list_available_interfaces,
    load_artifact,
    selector_for,
)

__all__ = [
    "get_abi",
    "get_event_topic",
    "get_function_selector",
    "list_available_interfaces",
    "load_artifact",
    "selector_for",
]
