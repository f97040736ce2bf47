"""Exceptions raised by the Ironic client and the node helpers."""

from __future__ import annotations

from typing import Optional


class IronicError(Exception):
    """Base class for failures talking to the Ironic API."""


class IronicConnectionError(IronicError):
    """The request never produced an HTTP response."""


class IronicAPIError(IronicError):
    """Ironic answered with a non-success status code."""

    def __init__(self, status_code: int, message: str, method: str = "", url: str = "") -> None:
        self.status_code = status_code
        self.message = message
        self.method = method
        self.url = url
        prefix = f"{method} {url} -> " if method else ""
        super().__init__(f"{prefix}{status_code}: {message}")


class NodeError(Exception):
    """Base class for node resolution and port registry failures."""


class NodeLookupError(NodeError):
    """A node lookup failed for a reason other than the node being absent."""


class NodeNotFoundError(NodeError):
    """Raised by assert_node when no node matches the ID."""

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"failed to find node by ID {node_id}: not found")


class PortCreateError(NodeError):
    def __init__(self, mac_address: str, node_id: str, cause: Optional[Exception] = None) -> None:
        self.mac_address = mac_address
        self.node_id = node_id
        super().__init__(f"failed to create ironic port {mac_address} for node {node_id}: {cause}")


class PortListError(NodeError):
    """Listing or paging over ports failed."""
