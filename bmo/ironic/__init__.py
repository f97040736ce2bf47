"""Ironic node resolution, boot ports and validation."""

from bmo.ironic.client import IronicClient
from bmo.ironic.node import Node
from bmo.ironic.resolver import NodeResolver
from bmo.ironic.service import LookupStatus, NodeLookup, NodeService

__all__ = ['IronicClient', 'LookupStatus', 'Node', 'NodeLookup', 'NodeResolver', 'NodeService']
