"""Handle around a single Ironic node: boot ports and readiness checks."""

from __future__ import annotations

import logging
from typing import Any, List, MutableMapping, Optional, Tuple

from bmo.ironic.errors import IronicError, PortCreateError, PortListError
from bmo.ironic.models import NodePayload
from bmo.ironic.service import NodeService

logger = logging.getLogger(__name__)


class NodeLogAdapter(logging.LoggerAdapter):
    """Prefixes every record with the node it concerns."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"[node {self.extra['node_id']}] {msg}", kwargs


class Node:
    """
    Convenience abstraction around the Ironic node API.

    Holds the payload fetched from Ironic together with the service it came
    from. Nothing is cached: port and validation calls always go back to the
    service.
    """

    def __init__(self, payload: NodePayload, service: NodeService, log: Optional[logging.Logger] = None) -> None:
        self.payload = payload
        self.service = service
        self.log = NodeLogAdapter(log or logger, {"node_id": payload.uuid})

    @property
    def uuid(self) -> str:
        return self.payload.uuid

    @property
    def name(self) -> Optional[str]:
        return self.payload.name

    @property
    def provision_state(self) -> Optional[str]:
        return self.payload.provision_state

    def __repr__(self) -> str:
        return f"Node(uuid={self.uuid!r}, name={self.name!r}, provision_state={self.provision_state!r})"

    def create_boot_port(self, mac_address: str) -> None:
        """
        Create a PXE enabled port for this node.

        The call is not idempotent: registering a MAC twice is left to Ironic
        to reject.

        Raises:
            PortCreateError: If Ironic refuses the port or cannot be reached
        """
        self.log.info(f"creating PXE enabled ironic port, MAC {mac_address}")
        try:
            self.service.create_port(node_id=self.uuid, address=mac_address, pxe_enabled=True)
        except IronicError as e:
            raise PortCreateError(mac_address, self.uuid, e) from e

    def has_ports(self) -> bool:
        """Check whether the node has any ports."""
        try:
            pages = list(self.service.list_ports(node_id=self.uuid, fields=["node_uuid"]))
        except IronicError as e:
            raise PortListError(f"failed to page over list of ports: {e}") from e
        return any(pages)

    def validate(self) -> List[str]:
        """
        Validate boot and deploy information for the node.

        Failed checks come back as a list of reasons, which is empty when the
        node is ready. A failure of the validation call itself is raised
        unchanged so callers can tell an unreachable service apart from a
        node that is not ready.
        """
        self.log.info("validating node settings in ironic")
        result = self.service.validate_node(self.uuid)

        failures: List[str] = []
        if not result.boot.result:
            failures.append(result.boot.reason)
        if not result.deploy.result:
            failures.append(result.deploy.reason)
        return failures
