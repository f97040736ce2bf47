#!/usr/bin/env python3
"""
Resolve an Ironic node by ID, name or MAC address and inspect it.

Examples:
    node_lookup.py --id 4e41df61-84b1-5856-bfb6-6b5f2cd3dd11 --validate
    node_lookup.py --name worker-0 --name openshift-worker-0 --has-ports
    node_lookup.py --mac 52:54:00:12:34:56
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

sys.path.append(str(Path(__file__).resolve().parents[1]))

from bmo.config import configure_logging, load_settings
from bmo.ironic import IronicClient, Node, NodeResolver
from bmo.ironic.errors import IronicError, NodeError


def resolve(resolver: NodeResolver, args: argparse.Namespace) -> Optional[Node]:
    if args.id:
        return resolver.assert_node(args.id)
    if args.name:
        return resolver.find_node_by_names(args.name)
    return resolver.find_node_by_mac(args.mac)


def describe(node: Node, args: argparse.Namespace) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "uuid": node.uuid,
        "name": node.name,
        "provision_state": node.provision_state,
        "boot_interface": node.payload.boot_interface,
        "deploy_interface": node.payload.deploy_interface,
    }
    if args.create_boot_port:
        node.create_boot_port(args.create_boot_port)
        out["created_boot_port"] = args.create_boot_port
    if args.has_ports:
        out["has_ports"] = node.has_ports()
    if args.validate:
        failures = node.validate()
        out["validation_failures"] = failures
        out["ready"] = not failures
    return out


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--id", help="Ironic node UUID")
    target.add_argument("--name", action="append", help="Candidate node name, may be repeated")
    target.add_argument("--mac", help="MAC address of one of the node's ports")
    parser.add_argument("--config", help="YAML settings file")
    parser.add_argument("--validate", action="store_true", help="Run boot/deploy validation")
    parser.add_argument("--has-ports", action="store_true", help="Report whether the node has ports")
    parser.add_argument("--create-boot-port", metavar="MAC", help="Create a PXE enabled port")
    args = parser.parse_args()

    settings = load_settings(args.config)
    configure_logging(settings.log_level)
    resolver = NodeResolver(IronicClient.from_settings(settings))

    try:
        node = resolve(resolver, args)
        if node is None:
            print(json.dumps({"found": False}))
            return 1
        print(json.dumps(describe(node, args), indent=2))
    except (IronicError, NodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
