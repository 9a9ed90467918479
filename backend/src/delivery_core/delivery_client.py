"""HTTP client a storefront uses to reach the delivery date API."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

import requests

from .models import DeliveryWindow, ValidationResult
from .validation import validate_delivery_date


class DeliveryDateClient:
    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: int = 10,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch_window(self) -> DeliveryWindow:
        response = self.session.get(
            f"{self.base_url}/delivery/window",
            headers=self._json_headers(),
            timeout=self.timeout,
        )
        return DeliveryWindow.from_dict(self._unwrap(response))

    def check(self, raw: Any) -> ValidationResult:
        """Ask the server to evaluate a date."""
        response = self.session.post(
            f"{self.base_url}/delivery/check",
            json={"date": raw.isoformat() if isinstance(raw, date) else raw},
            headers=self._json_headers(),
            timeout=self.timeout,
        )
        return ValidationResult.from_dict(self._unwrap(response))

    def precheck(self, raw: Any, today: Optional[date] = None) -> ValidationResult:
        """Evaluate a date locally against the server's current rules.

        Uses the same validator the checkout does, so a passing precheck
        only fails at checkout if the rules change in between.
        """
        window = self.fetch_window()
        return validate_delivery_date(raw, window.rule_set, today or window.today)

    def _unwrap(self, response: requests.Response) -> Dict[str, Any]:
        payload = self._safe_json(response)
        if response.status_code != 200:
            message = payload.get("message") if payload else response.text
            raise RuntimeError(f"Delivery API error {response.status_code}: {message}")
        return payload

    @staticmethod
    def _json_headers() -> Dict[str, str]:
        return {
            "Content-Type": "application/json; charset=UTF-8",
            "Accept": "application/json",
        }

    @staticmethod
    def _safe_json(response: requests.Response) -> Dict[str, Any]:
        try:
            return response.json()
        except ValueError:
            return {}
