import sys
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from bmo.ironic.models import InterfaceValidation, NodePayload, Port, ValidationResult
from bmo.ironic.service import NodeLookup, NodeService


class FakeNodeService(NodeService):
    """In-memory Ironic that records every call it receives."""

    def __init__(self, page_size: int = 2) -> None:
        self.page_size = page_size
        self.nodes: Dict[str, NodePayload] = {}
        self.ports: List[Port] = []
        self.validations: Dict[str, ValidationResult] = {}
        self.failures: Dict[str, Exception] = {}
        self.calls: List[tuple] = []

    def add_node(self, uuid: str, name: Optional[str] = None, **kwargs) -> NodePayload:
        node = NodePayload(uuid=uuid, name=name, **kwargs)
        self.nodes[uuid] = node
        return node

    def add_port(self, node_uuid: str, address: str, pxe_enabled: bool = True) -> Port:
        port = Port(address=address, node_uuid=node_uuid, uuid=f"port-{len(self.ports)}", pxe_enabled=pxe_enabled)
        self.ports.append(port)
        return port

    def _maybe_fail(self, method: str) -> None:
        if method in self.failures:
            raise self.failures[method]

    def get_node_by_id(self, node_id: str) -> NodeLookup:
        self.calls.append(("get_node_by_id", node_id))
        self._maybe_fail("get_node_by_id")
        for node in self.nodes.values():
            if node_id in (node.uuid, node.name):
                return NodeLookup.found(node)
        return NodeLookup.not_found()

    def list_ports(
        self,
        address: Optional[str] = None,
        node_id: Optional[str] = None,
        fields: Optional[Sequence[str]] = None,
    ) -> Iterator[List[Port]]:
        self.calls.append(("list_ports", address, node_id, tuple(fields or ())))
        self._maybe_fail("list_ports")
        matching = [
            p for p in self.ports
            if (not address or p.address == address) and (not node_id or p.node_uuid == node_id)
        ]
        if fields:
            matching = [Port(**{f: getattr(p, f) for f in fields}) for p in matching]
        if not matching:
            yield []
            return
        for i in range(0, len(matching), self.page_size):
            yield matching[i:i + self.page_size]

    def create_port(self, node_id: str, address: str, pxe_enabled: bool) -> Port:
        self.calls.append(("create_port", node_id, address, pxe_enabled))
        self._maybe_fail("create_port")
        return self.add_port(node_id, address, pxe_enabled)

    def validate_node(self, node_id: str) -> ValidationResult:
        self.calls.append(("validate_node", node_id))
        self._maybe_fail("validate_node")
        return self.validations.get(
            node_id,
            ValidationResult(boot=InterfaceValidation(True), deploy=InterfaceValidation(True)),
        )

    def calls_to(self, method: str) -> List[tuple]:
        return [c for c in self.calls if c[0] == method]


@pytest.fixture
def service():
    return FakeNodeService()
