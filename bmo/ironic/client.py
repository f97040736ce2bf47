"""HTTP client for the Ironic bare metal API."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence
from urllib.parse import quote

import requests

from bmo.config import Settings
from bmo.ironic.errors import IronicAPIError, IronicConnectionError
from bmo.ironic.models import NodePayload, Port, ValidationResult
from bmo.ironic.service import NodeLookup, NodeService

logger = logging.getLogger(__name__)

API_VERSION_HEADER = "X-OpenStack-Ironic-API-Version"


def _extract_fault(response: requests.Response) -> str:
    """Pull the human readable fault out of an Ironic error body."""
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text if text else (response.reason or "")

    if not isinstance(body, dict):
        return str(body)

    error = body.get("error_message", body)
    # Older API versions wrap the fault as a JSON encoded string
    if isinstance(error, str):
        try:
            error = json.loads(error)
        except ValueError:
            return error
    if isinstance(error, dict):
        return str(error.get("faultstring") or error.get("description") or error)
    return str(error)


class IronicClient(NodeService):
    """
    NodeService backed by the Ironic REST API.

    No retries are attempted: every call either returns the service answer
    or raises an IronicError carrying the transport or API failure.
    """

    def __init__(
        self,
        endpoint: str,
        api_version: Optional[str] = "1.81",
        username: Optional[str] = None,
        password: Optional[str] = None,
        cacert: Optional[str] = None,
        insecure: bool = False,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if api_version:
            self.session.headers[API_VERSION_HEADER] = api_version
        if username:
            self.session.auth = (username, password or "")
        if insecure:
            self.session.verify = False
        elif cacert:
            self.session.verify = cacert

    @classmethod
    def from_settings(cls, settings: Settings, session: Optional[requests.Session] = None) -> "IronicClient":
        return cls(
            endpoint=settings.ironic_endpoint,
            api_version=settings.ironic_api_version,
            username=settings.ironic_username,
            password=settings.ironic_password,
            cacert=settings.ironic_cacert,
            insecure=settings.ironic_insecure,
            timeout=settings.request_timeout_s,
            session=session,
        )

    def _url(self, path: str) -> str:
        return f"{self.endpoint}{path}"

    def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        try:
            return self.session.request(method, url, params=params, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise IronicConnectionError(f"{method} {url} failed: {e}") from e

    def _raise_for_status(self, response: requests.Response, method: str, url: str) -> None:
        if response.status_code < 400:
            return
        raise IronicAPIError(response.status_code, _extract_fault(response), method=method, url=url)

    def _decode(self, response: requests.Response, method: str, url: str) -> Dict[str, Any]:
        """Check the status and return the JSON object body."""
        self._raise_for_status(response, method, url)
        try:
            data = response.json()
        except ValueError as e:
            raise IronicAPIError(response.status_code, f"invalid JSON in response: {e}", method=method, url=url) from e
        if not isinstance(data, dict):
            raise IronicAPIError(response.status_code, "expected a JSON object in response", method=method, url=url)
        return data

    def get_node_by_id(self, node_id: str) -> NodeLookup:
        url = self._url(f"/v1/nodes/{quote(node_id, safe='')}")
        response = self._request("GET", url)
        if response.status_code == 404:
            logger.debug(f"Ironic has no node {node_id}")
            return NodeLookup.not_found()
        return NodeLookup.found(NodePayload.from_dict(self._decode(response, "GET", url)))

    def list_ports(
        self,
        address: Optional[str] = None,
        node_id: Optional[str] = None,
        fields: Optional[Sequence[str]] = None,
    ) -> Iterator[List[Port]]:
        params: Optional[Dict[str, Any]] = {}
        if address:
            params["address"] = address
        if node_id:
            params["node_uuid"] = node_id
        if fields:
            params["fields"] = ",".join(fields)

        url: Optional[str] = self._url("/v1/ports")
        while url:
            response = self._request("GET", url, params=params)
            data = self._decode(response, "GET", url)
            yield [Port.from_dict(item) for item in data.get("ports", [])]
            # The next link already carries the filters and the marker
            url = data.get("next")
            params = None

    def create_port(self, node_id: str, address: str, pxe_enabled: bool) -> Port:
        url = self._url("/v1/ports")
        body = {"node_uuid": node_id, "address": address, "pxe_enabled": pxe_enabled}
        response = self._request("POST", url, body=body)
        return Port.from_dict(self._decode(response, "POST", url))

    def validate_node(self, node_id: str) -> ValidationResult:
        url = self._url(f"/v1/nodes/{quote(node_id, safe='')}/validate")
        response = self._request("GET", url)
        return ValidationResult.from_dict(self._decode(response, "GET", url))
