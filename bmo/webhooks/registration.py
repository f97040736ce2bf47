"""Register the admission webhooks with the Kubernetes API server."""

from __future__ import annotations

import base64
import logging
from typing import Optional

from kubernetes import client, config
from kubernetes.client import (
    AdmissionregistrationV1ServiceReference,
    AdmissionregistrationV1WebhookClientConfig,
    V1ObjectMeta,
    V1RuleWithOperations,
    V1ValidatingWebhook,
    V1ValidatingWebhookConfiguration,
)
from kubernetes.client.exceptions import ApiException

from bmo.webhooks.server import SUBSCRIPTION_WEBHOOK_PATH

logger = logging.getLogger(__name__)

CONFIGURATION_NAME = "bmo-validating-webhook-configuration"
SUBSCRIPTION_WEBHOOK_NAME = "bmceventsubscription.metal3.io"


def build_webhook_configuration(
    service_name: str,
    namespace: str,
    ca_bundle: Optional[bytes] = None,
    port: int = 443,
) -> V1ValidatingWebhookConfiguration:
    """
    Generate the validating webhook configuration for BMCEventSubscriptions.

    Args:
        service_name: Service fronting the webhook server
        namespace: Namespace of that service
        ca_bundle: PEM encoded CA that signed the serving certificate
        port: Service port

    Returns:
        V1ValidatingWebhookConfiguration ready for creation
    """
    client_config = AdmissionregistrationV1WebhookClientConfig(
        service=AdmissionregistrationV1ServiceReference(
            name=service_name,
            namespace=namespace,
            path=SUBSCRIPTION_WEBHOOK_PATH,
            port=port,
        ),
        ca_bundle=base64.b64encode(ca_bundle).decode("ascii") if ca_bundle else None,
    )

    webhook = V1ValidatingWebhook(
        name=SUBSCRIPTION_WEBHOOK_NAME,
        admission_review_versions=["v1", "v1beta1"],
        client_config=client_config,
        failure_policy="Fail",
        side_effects="None",
        rules=[
            V1RuleWithOperations(
                api_groups=["metal3.io"],
                api_versions=["v1alpha1"],
                operations=["CREATE", "UPDATE"],
                resources=["bmceventsubscriptions"],
            )
        ],
    )

    return V1ValidatingWebhookConfiguration(
        api_version="admissionregistration.k8s.io/v1",
        kind="ValidatingWebhookConfiguration",
        metadata=V1ObjectMeta(name=CONFIGURATION_NAME),
        webhooks=[webhook],
    )


class WebhookRegistrar:
    """Creates or replaces webhook configurations in the cluster."""

    def __init__(self, api: Optional[client.AdmissionregistrationV1Api] = None) -> None:
        if api is None:
            try:
                config.load_incluster_config()
                logger.info("Loaded in-cluster Kubernetes config")
            except config.ConfigException:
                config.load_kube_config()
                logger.info("Loaded kubeconfig")
            api = client.AdmissionregistrationV1Api()
        self.api = api

    def ensure(self, configuration: V1ValidatingWebhookConfiguration) -> V1ValidatingWebhookConfiguration:
        """
        Create the configuration, replacing an existing one of the same name.

        Raises:
            ApiException: If the Kubernetes API call fails
        """
        name = configuration.metadata.name
        try:
            created = self.api.create_validating_webhook_configuration(body=configuration)
            logger.info(f"Created validating webhook configuration {name}")
            return created
        except ApiException as e:
            if e.status != 409:
                logger.error(f"Failed to create validating webhook configuration {name}: {e}")
                raise

        existing = self.api.read_validating_webhook_configuration(name)
        configuration.metadata.resource_version = existing.metadata.resource_version
        replaced = self.api.replace_validating_webhook_configuration(name, configuration)
        logger.info(f"Replaced validating webhook configuration {name}")
        return replaced
