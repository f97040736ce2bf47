from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request

from bmo.webhooks.errors import AdmissionError
from bmo.webhooks.subscription import BMCEventSubscription

logger = logging.getLogger(__name__)

SUBSCRIPTION_WEBHOOK_PATH = "/validate-metal3-io-v1alpha1-bmceventsubscription"
ADMISSION_API_VERSION = "admission.k8s.io/v1"


def admit_subscription(operation: str, obj: Optional[Dict[str, Any]], old_obj: Optional[Dict[str, Any]]) -> None:
	"""
	Run the subscription lifecycle hook matching an admission operation.

	Returns None to allow, raises AdmissionError to deny.
	"""
	if operation == "CREATE":
		BMCEventSubscription.from_dict(obj).validate_create()
	elif operation == "UPDATE":
		old = BMCEventSubscription.from_dict(old_obj) if old_obj else None
		BMCEventSubscription.from_dict(obj).validate_update(old)
	# DELETE and CONNECT are always allowed, whatever the stored object holds


def _review_response(uid: str, error: Optional[AdmissionError] = None) -> Dict[str, Any]:
	response: Dict[str, Any] = {"uid": uid, "allowed": error is None}
	if error is not None:
		response["status"] = {
			"code": error.code,
			"reason": "Forbidden" if error.code == 403 else "BadRequest",
			"message": str(error),
		}
	return {
		"apiVersion": ADMISSION_API_VERSION,
		"kind": "AdmissionReview",
		"response": response,
	}


def create_app() -> Flask:
	app = Flask(__name__)

	@app.post(SUBSCRIPTION_WEBHOOK_PATH)
	def validate_subscription() -> Any:
		body = request.get_json(force=True, silent=True)
		if not isinstance(body, dict) or not isinstance(body.get("request"), dict):
			return jsonify({"error": "expected an AdmissionReview with a request"}), 400

		review = body["request"]
		uid = review.get("uid")
		operation = review.get("operation")
		if not uid or not operation:
			return jsonify({"error": "missing 'uid' or 'operation' field"}), 400

		try:
			admit_subscription(operation, review.get("object"), review.get("oldObject"))
		except AdmissionError as e:
			logger.info(f"denied {operation} of BMCEventSubscription ({uid}): {e}")
			return jsonify(_review_response(uid, e))

		return jsonify(_review_response(uid))

	@app.get("/healthz")
	def healthz() -> Any:
		return jsonify({"status": "ok"})

	@app.get("/readyz")
	def readyz() -> Any:
		return jsonify({"status": "ok"})

	return app
