"""Find Ironic nodes by ID, name or MAC address."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from bmo.ironic.errors import IronicError, NodeLookupError, NodeNotFoundError
from bmo.ironic.node import Node
from bmo.ironic.service import NodeService

logger = logging.getLogger(__name__)


class NodeResolver:
    """
    Resolves nodes against a NodeService.

    A node that does not exist is reported as ``None``; only real failures
    raise. The resolver keeps no state between calls.
    """

    def __init__(self, service: NodeService, log: Optional[logging.Logger] = None) -> None:
        self.service = service
        self.node_log = log
        self.log = log or logger

    def get_node(self, node_id: str) -> Optional[Node]:
        """
        Return a node by its ID (or name), or None when it does not exist.

        An empty ID returns None without calling Ironic.

        Raises:
            NodeLookupError: If the lookup failed for any other reason
        """
        if not node_id:
            return None

        try:
            lookup = self.service.get_node_by_id(node_id)
        except IronicError as e:
            raise NodeLookupError(f"failed to find node by ID {node_id}: {e}") from e

        if not lookup.is_found:
            return None

        node = Node(lookup.node, self.service, log=self.node_log)
        node.log.debug("found existing node by ID")
        return node

    def assert_node(self, node_id: str) -> Node:
        """Return a node by its ID and fail if it is not found."""
        node = self.get_node(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def find_node_by_names(self, names: Iterable[str]) -> Optional[Node]:
        """
        Find a node by one or more possible names.

        The first match is returned. Names are not checked for duplicates, so
        if several candidates exist only the earliest one in ``names`` is
        ever seen.
        """
        for node_name in names:
            self.log.debug(f"looking for existing node by name {node_name}")
            try:
                node = self.get_node(node_name)
            except NodeLookupError as e:
                raise NodeLookupError(f"failed to find node by name {node_name}: {e}") from e
            if node is not None:
                self.log.debug(f"found existing node by name {node_name}")
                return node

            self.log.info(f"node with name {node_name} doesn't exist")

        return None

    def _find_node_id_by_mac(self, mac_address: str) -> Optional[str]:
        try:
            ports = [
                port
                for page in self.service.list_ports(address=mac_address, fields=["node_uuid"])
                for port in page
            ]
        except IronicError as e:
            raise NodeLookupError(f"failed to list ports with MAC {mac_address}: {e}") from e

        if not ports:
            return None

        # MAC address is unique in Ironic, so only one port can be present here.
        return ports[0].node_uuid

    def find_node_by_mac(self, mac_address: str) -> Optional[Node]:
        """
        Return a node by one of its MAC addresses, or None.

        An empty MAC returns None without calling Ironic.
        """
        if not mac_address:
            return None
        node_id = self._find_node_id_by_mac(mac_address)
        if not node_id:
            return None
        return self.get_node(node_id)
