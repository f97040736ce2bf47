import copy

import pytest

from bmo.webhooks.server import SUBSCRIPTION_WEBHOOK_PATH, create_app

SUBSCRIPTION = {
    "apiVersion": "metal3.io/v1alpha1",
    "kind": "BMCEventSubscription",
    "metadata": {"name": "worker-0-events", "namespace": "metal3"},
    "spec": {"hostName": "worker-0", "destination": "https://events.example.com/"},
}


@pytest.fixture
def client():
    return create_app().test_client()


def review(operation, obj=None, old_obj=None, uid="705ab4f5-6393-11e8-b7cc-42010a800002"):
    request = {
        "uid": uid,
        "kind": {"group": "metal3.io", "version": "v1alpha1", "kind": "BMCEventSubscription"},
        "operation": operation,
        "object": obj,
        "oldObject": old_obj,
    }
    return {"apiVersion": "admission.k8s.io/v1", "kind": "AdmissionReview", "request": request}


def test_create_allowed(client):
    resp = client.post(SUBSCRIPTION_WEBHOOK_PATH, json=review("CREATE", SUBSCRIPTION))
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["apiVersion"] == "admission.k8s.io/v1"
    assert data["kind"] == "AdmissionReview"
    assert data["response"] == {"uid": "705ab4f5-6393-11e8-b7cc-42010a800002", "allowed": True}


def test_create_invalid_denied_with_every_violation(client):
    obj = copy.deepcopy(SUBSCRIPTION)
    obj["spec"] = {"hostName": "", "destination": ""}

    resp = client.post(SUBSCRIPTION_WEBHOOK_PATH, json=review("CREATE", obj))

    response = resp.get_json()["response"]
    assert response["allowed"] is False
    assert response["status"]["code"] == 403
    assert response["status"]["message"] == "[hostName cannot be empty, destination cannot be empty]"


def test_update_denied(client):
    resp = client.post(SUBSCRIPTION_WEBHOOK_PATH, json=review("UPDATE", SUBSCRIPTION, SUBSCRIPTION))
    response = resp.get_json()["response"]
    assert response["allowed"] is False
    assert response["status"]["message"] == "subscriptions cannot be updated, please recreate it"


def test_delete_allowed(client):
    resp = client.post(SUBSCRIPTION_WEBHOOK_PATH, json=review("DELETE", None, SUBSCRIPTION))
    assert resp.get_json()["response"]["allowed"] is True


def test_delete_of_unreadable_object_allowed(client):
    stored = {"kind": "BMCEventSubscription", "spec": "garbage"}

    resp = client.post(SUBSCRIPTION_WEBHOOK_PATH, json=review("DELETE", None, stored))

    assert resp.status_code == 200
    assert resp.get_json()["response"]["allowed"] is True


def test_malformed_object_denied_as_bad_request(client):
    obj = copy.deepcopy(SUBSCRIPTION)
    obj["kind"] = "BareMetalHost"

    resp = client.post(SUBSCRIPTION_WEBHOOK_PATH, json=review("CREATE", obj))

    status = resp.get_json()["response"]["status"]
    assert status["code"] == 400
    assert status["reason"] == "BadRequest"


def test_missing_request_rejected(client):
    resp = client.post(SUBSCRIPTION_WEBHOOK_PATH, json={"kind": "AdmissionReview"})
    assert resp.status_code == 400


def test_missing_uid_rejected(client):
    body = review("CREATE", SUBSCRIPTION)
    del body["request"]["uid"]
    resp = client.post(SUBSCRIPTION_WEBHOOK_PATH, json=body)
    assert resp.status_code == 400


def test_health_endpoints(client):
    assert client.get("/healthz").get_json() == {"status": "ok"}
    assert client.get("/readyz").status_code == 200
