"""
Bare metal operator core.

Modules:
- config: settings from YAML and environment
- ironic: node lookup by ID, name or MAC, boot ports and validation against Ironic
- webhooks: BMCEventSubscription admission rules and the webhook server
"""
