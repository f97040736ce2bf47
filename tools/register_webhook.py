#!/usr/bin/env python3
"""Create or update the BMCEventSubscription validating webhook configuration."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from bmo.config import configure_logging
from bmo.webhooks.registration import WebhookRegistrar, build_webhook_configuration


def main() -> None:
	import argparse

	parser = argparse.ArgumentParser()
	parser.add_argument("--service", default="baremetal-operator-webhook-service")
	parser.add_argument("--namespace", default="baremetal-operator-system")
	parser.add_argument("--port", type=int, default=443)
	parser.add_argument("--ca-file", help="PEM CA bundle that signed the serving certificate")
	args = parser.parse_args()

	configure_logging()
	ca_bundle = Path(args.ca_file).read_bytes() if args.ca_file else None
	configuration = build_webhook_configuration(args.service, args.namespace, ca_bundle=ca_bundle, port=args.port)
	registered = WebhookRegistrar().ensure(configuration)
	print(f"registered {registered.metadata.name}")


if __name__ == "__main__":
	main()
