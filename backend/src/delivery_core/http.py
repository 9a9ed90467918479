"""API Gateway event helpers shared by the Lambda handlers."""

from __future__ import annotations

import base64
import json
import logging
import os
import secrets
from typing import Any, Dict, Optional

import boto3

from .errors import UnauthorizedError

LOGGER = logging.getLogger(__name__)

_ADMIN_TOKEN_CACHE: Dict[str, str] = {}


def parse_body(event: Dict[str, Any]) -> Dict[str, Any]:
    body = event.get("body")
    if not body:
        return {}
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode()
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as error:
        raise ValueError("Request body must be valid JSON") from error
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object")
    return payload


def request_params(event: Dict[str, Any]) -> Dict[str, Any]:
    """Query string parameters overlaid with the JSON body."""
    params: Dict[str, Any] = dict(event.get("queryStringParameters") or {})
    params.update(parse_body(event))
    return params


def http_method(event: Dict[str, Any]) -> str:
    method = event.get("httpMethod") or event.get("requestContext", {}).get("http", {}).get("method") or "GET"
    return method.upper()


def _header(event: Dict[str, Any], name: str) -> Optional[str]:
    headers = event.get("headers") or {}
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def _configured_admin_token() -> Optional[str]:
    token = os.environ.get("ADMIN_API_TOKEN")
    if token:
        return token
    ssm_param = os.environ.get("ADMIN_API_TOKEN_SSM_PARAM")
    if not ssm_param:
        return None
    if ssm_param not in _ADMIN_TOKEN_CACHE:
        ssm_client = boto3.client("ssm")
        response = ssm_client.get_parameter(Name=ssm_param, WithDecryption=True)
        _ADMIN_TOKEN_CACHE[ssm_param] = response["Parameter"]["Value"]
    return _ADMIN_TOKEN_CACHE[ssm_param]


def require_admin(event: Dict[str, Any]) -> None:
    """Raise UnauthorizedError unless the request carries the admin token."""
    supplied = _header(event, "x-admin-token")
    if not supplied:
        authorization = _header(event, "authorization") or ""
        if authorization.lower().startswith("bearer "):
            supplied = authorization[7:].strip()

    expected = _configured_admin_token()
    if not expected or not supplied or not secrets.compare_digest(supplied, expected):
        LOGGER.warning("Rejected admin request without a valid token")
        raise UnauthorizedError()


def response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json",
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Headers": "*",
            "Access-Control-Allow-Methods": "*",
        },
        "body": json.dumps(body, ensure_ascii=False),
    }
