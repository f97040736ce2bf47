"""Payloads returned by the Ironic API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class NodePayload:
    """Node record as Ironic reports it."""
    uuid: str
    name: Optional[str] = None
    provision_state: Optional[str] = None
    power_state: Optional[str] = None
    maintenance: bool = False
    driver: Optional[str] = None
    boot_interface: Optional[str] = None
    deploy_interface: Optional[str] = None
    driver_info: Dict[str, Any] = field(default_factory=dict)
    instance_info: Dict[str, Any] = field(default_factory=dict)
    properties: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodePayload":
        return cls(
            uuid=data.get("uuid", ""),
            name=data.get("name"),
            provision_state=data.get("provision_state"),
            power_state=data.get("power_state"),
            maintenance=bool(data.get("maintenance", False)),
            driver=data.get("driver"),
            boot_interface=data.get("boot_interface"),
            deploy_interface=data.get("deploy_interface"),
            driver_info=dict(data.get("driver_info") or {}),
            instance_info=dict(data.get("instance_info") or {}),
            properties=dict(data.get("properties") or {}),
            raw=dict(data),
        )


@dataclass
class Port:
    """
    Network port of a node.

    When the port list is projected with ``fields`` only the requested
    attributes are populated, the rest keep their defaults.
    """
    address: Optional[str] = None
    node_uuid: Optional[str] = None
    uuid: Optional[str] = None
    pxe_enabled: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Port":
        return cls(
            address=data.get("address"),
            node_uuid=data.get("node_uuid"),
            uuid=data.get("uuid"),
            pxe_enabled=data.get("pxe_enabled"),
        )


@dataclass
class InterfaceValidation:
    result: bool
    reason: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "InterfaceValidation":
        data = data or {}
        # Ironic reports result=None for interfaces that are not configured
        return cls(result=bool(data.get("result")), reason=data.get("reason") or "")


@dataclass
class ValidationResult:
    """Boot and deploy outcomes of a node validation call."""
    boot: InterfaceValidation
    deploy: InterfaceValidation

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidationResult":
        return cls(
            boot=InterfaceValidation.from_dict(data.get("boot")),
            deploy=InterfaceValidation.from_dict(data.get("deploy")),
        )
