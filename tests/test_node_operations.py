import logging

import pytest

from bmo.ironic.errors import IronicAPIError, IronicConnectionError, PortCreateError, PortListError
from bmo.ironic.models import InterfaceValidation, ValidationResult
from bmo.ironic.resolver import NodeResolver

NODE_ID = "4e41df61-84b1-5856-bfb6-6b5f2cd3dd11"
MAC = "52:54:00:12:34:56"


@pytest.fixture
def node(service):
    service.add_node(NODE_ID, name="worker-0")
    return NodeResolver(service).assert_node(NODE_ID)


def test_create_boot_port_enables_pxe(node, service):
    node.create_boot_port(MAC)

    assert service.calls_to("create_port") == [("create_port", NODE_ID, MAC, True)]
    assert service.ports[0].pxe_enabled is True


def test_create_boot_port_is_not_idempotent(node, service):
    node.create_boot_port(MAC)
    node.create_boot_port(MAC)
    assert len(service.calls_to("create_port")) == 2


def test_create_boot_port_failure_names_mac_and_node(node, service):
    service.failures["create_port"] = IronicAPIError(409, f"A port with MAC address {MAC} already exists.")

    with pytest.raises(PortCreateError) as excinfo:
        node.create_boot_port(MAC)

    message = str(excinfo.value)
    assert MAC in message
    assert NODE_ID in message
    assert excinfo.value.mac_address == MAC
    assert excinfo.value.node_id == NODE_ID


def test_has_ports_without_ports(node, service):
    assert node.has_ports() is False
    assert service.calls_to("list_ports") == [("list_ports", None, NODE_ID, ("node_uuid",))]


def test_has_ports_with_ports(node, service):
    service.add_port(NODE_ID, MAC)
    assert node.has_ports() is True


def test_has_ports_ignores_other_nodes(node, service):
    service.add_port("some-other-node", MAC)
    assert node.has_ports() is False


def test_has_ports_pages_through_everything(node, service):
    service.page_size = 1
    for i in range(3):
        service.add_port(NODE_ID, f"52:54:00:00:00:0{i}")
    assert node.has_ports() is True


def test_has_ports_paging_failure(node, service):
    service.failures["list_ports"] = IronicConnectionError("connection reset")

    with pytest.raises(PortListError) as excinfo:
        node.has_ports()
    assert "failed to page over list of ports" in str(excinfo.value)


def test_validate_reports_boot_failure(node, service):
    service.validations[NODE_ID] = ValidationResult(
        boot=InterfaceValidation(False, "no image"),
        deploy=InterfaceValidation(True),
    )
    assert node.validate() == ["no image"]


def test_validate_reports_both_failures_in_order(node, service):
    service.validations[NODE_ID] = ValidationResult(
        boot=InterfaceValidation(False, "no image"),
        deploy=InterfaceValidation(False, "missing instance_info"),
    )
    assert node.validate() == ["no image", "missing instance_info"]


def test_validate_ready_node(node):
    assert node.validate() == []


def test_validate_call_failure_is_not_wrapped(node, service):
    cause = IronicConnectionError("connection refused")
    service.failures["validate_node"] = cause

    with pytest.raises(IronicConnectionError) as excinfo:
        node.validate()
    assert excinfo.value is cause


def test_operations_always_hit_the_service(node, service):
    node.has_ports()
    node.has_ports()
    node.validate()
    node.validate()
    assert len(service.calls_to("list_ports")) == 2
    assert len(service.calls_to("validate_node")) == 2


def test_create_boot_port_log_names_node_once(node, caplog):
    caplog.set_level(logging.INFO)

    node.create_boot_port(MAC)

    (record,) = [r for r in caplog.records if "PXE" in r.getMessage()]
    assert record.getMessage().count(NODE_ID) == 1
    assert MAC in record.getMessage()
