"""Contract of the remote node service consumed by the resolver."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence

from bmo.ironic.models import NodePayload, Port, ValidationResult


class LookupStatus(str, Enum):
	FOUND = "found"
	NOT_FOUND = "not_found"


@dataclass(frozen=True)
class NodeLookup:
	"""
	Outcome of a node lookup by ID.

	A missing node is a normal answer and is reported here instead of being
	raised. Any other failure is raised as an IronicError by the service.
	"""
	status: LookupStatus
	node: Optional[NodePayload] = None

	@classmethod
	def found(cls, node: NodePayload) -> "NodeLookup":
		return cls(status=LookupStatus.FOUND, node=node)

	@classmethod
	def not_found(cls) -> "NodeLookup":
		return cls(status=LookupStatus.NOT_FOUND)

	@property
	def is_found(self) -> bool:
		return self.status is LookupStatus.FOUND


class NodeService(ABC):
	@abstractmethod
	def get_node_by_id(self, node_id: str) -> NodeLookup:
		raise NotImplementedError

	@abstractmethod
	def list_ports(
		self,
		address: Optional[str] = None,
		node_id: Optional[str] = None,
		fields: Optional[Sequence[str]] = None,
	) -> Iterator[List[Port]]:
		"""Yield pages of ports matching the filters, in service order."""
		raise NotImplementedError

	@abstractmethod
	def create_port(self, node_id: str, address: str, pxe_enabled: bool) -> Port:
		raise NotImplementedError

	@abstractmethod
	def validate_node(self, node_id: str) -> ValidationResult:
		raise NotImplementedError
