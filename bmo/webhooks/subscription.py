"""BMCEventSubscription resource and its admission rules."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import SplitResult, urlsplit

from bmo.webhooks.errors import MalformedObjectError, SubscriptionImmutableError, SubscriptionInvalidError

logger = logging.getLogger(__name__)

API_VERSION = "metal3.io/v1alpha1"
KIND = "BMCEventSubscription"


@dataclass
class SecretReference:
    name: str = ""
    namespace: str = ""


@dataclass
class BMCEventSubscriptionSpec:
    host_name: str = ""
    destination: str = ""
    context: str = ""
    http_headers_ref: Optional[SecretReference] = None


@dataclass
class BMCEventSubscriptionStatus:
    subscription_id: str = ""
    error: str = ""


@dataclass
class BMCEventSubscription:
    """
    Subscription of a BareMetalHost's BMC events delivered to a webhook.

    Subscriptions are immutable: once admitted the only allowed change is
    deletion.
    """
    name: str
    namespace: str = ""
    spec: BMCEventSubscriptionSpec = field(default_factory=BMCEventSubscriptionSpec)
    status: BMCEventSubscriptionStatus = field(default_factory=BMCEventSubscriptionStatus)

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> "BMCEventSubscription":
        """Parse a Kubernetes object as submitted in an AdmissionReview."""
        if not isinstance(obj, dict):
            raise MalformedObjectError(f"expected a {KIND} object, got {type(obj).__name__}")
        kind = obj.get("kind")
        if kind and kind != KIND:
            raise MalformedObjectError(f"expected kind {KIND}, got {kind}")

        metadata = obj.get("metadata") or {}
        spec = obj.get("spec") or {}
        status = obj.get("status") or {}
        if not all(isinstance(part, dict) for part in (metadata, spec, status)):
            raise MalformedObjectError("metadata, spec and status must be objects")

        headers_ref = spec.get("httpHeadersRef")
        if headers_ref is not None:
            if not isinstance(headers_ref, dict):
                raise MalformedObjectError("spec.httpHeadersRef must be an object")
            headers_ref = SecretReference(
                name=headers_ref.get("name") or "",
                namespace=headers_ref.get("namespace") or "",
            )

        return cls(
            name=metadata.get("name") or metadata.get("generateName") or "",
            namespace=metadata.get("namespace") or "",
            spec=BMCEventSubscriptionSpec(
                host_name=spec.get("hostName") or "",
                destination=spec.get("destination") or "",
                context=spec.get("context") or "",
                http_headers_ref=headers_ref,
            ),
            status=BMCEventSubscriptionStatus(
                subscription_id=status.get("subscriptionID") or "",
                error=status.get("error") or "",
            ),
        )

    def validate_subscription(self) -> List[str]:
        """Return every violated field rule, empty when the object is valid."""
        errs: List[str] = []

        if not self.spec.host_name:
            errs.append("hostName cannot be empty")

        if not self.spec.destination:
            errs.append("destination cannot be empty")
        else:
            try:
                destination = parse_request_uri(self.spec.destination)
            except ValueError as e:
                errs.append(f"destination is invalid: {e}")
            else:
                if not destination.path:
                    errs.append("hostname-only destination must have a trailing slash")

        return errs

    def validate_create(self) -> None:
        logger.info(f"validate create, name={self.name}")
        errs = self.validate_subscription()
        if errs:
            raise SubscriptionInvalidError(errs)

    def validate_update(self, old: Optional["BMCEventSubscription"] = None) -> None:
        logger.info(f"validate update, name={self.name}")
        raise SubscriptionImmutableError()

    def validate_delete(self) -> None:
        return None


def parse_request_uri(raw: str) -> SplitResult:
    """
    Parse an absolute URI the way an HTTP request line would carry it.

    A request line may also carry a bare absolute path such as "/events";
    that form is rejected here on purpose, the BMC needs a scheme and host
    to deliver to.

    Raises:
        ValueError: If the URI has no scheme or host, or is malformed
    """
    if any(ch.isspace() for ch in raw):
        raise ValueError(f"parse {raw!r}: invalid character in URI")
    parsed = urlsplit(raw)
    # Accessing the port validates it
    parsed.port
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(f"parse {raw!r}: invalid URI for request")
    return parsed
