"""Map a hub reply to a deployment outcome."""

from __future__ import annotations

import json

from hubdeploy.modules.hubinstall.domain import (
    DeploymentOutcome,
    Failure,
    HttpResult,
    Success,
    TransportError,
)
from hubdeploy.modules.hubinstall.domain.constants import UNKNOWN_ERROR


def classify(result: HttpResult) -> DeploymentOutcome:
    # {"success":true,"message":null}
    if result.transport_failed:
        return TransportError(result.body or UNKNOWN_ERROR)
    if result.status != 200:
        return Failure(result.status, result.body or UNKNOWN_ERROR)
    try:
        payload = json.loads(result.body or "")
    except ValueError:
        return Failure(200, UNKNOWN_ERROR)
    if not isinstance(payload, dict) or not isinstance(payload.get("success"), bool):
        return Failure(200, UNKNOWN_ERROR)
    message = payload.get("message")
    if not payload["success"]:
        return Failure(200, message if isinstance(message, str) and message else UNKNOWN_ERROR)
    return Success()
