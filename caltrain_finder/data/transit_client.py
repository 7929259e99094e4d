"""511.org real-time transit API client."""

from __future__ import annotations

import json
from typing import Any

import requests

TRANSIT_API_BASE = "https://api.511.org/transit"


class TransitClientError(Exception):
    """Raised when a 511 API request fails or returns a non-200 response."""


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def extract_stop_visits(payload: dict[str, Any]) -> list[dict[str, Any]]:
    """Pull MonitoredStopVisit entries out of a StopMonitoring response.

    The service returns a bare object instead of an array when only one visit
    is monitored; both shapes come back as a list. A missing level means no
    visits.
    """
    if not isinstance(payload, dict):
        raise TransitClientError("StopMonitoring response was not a JSON object")
    service_delivery = payload.get("ServiceDelivery")
    if service_delivery is None:
        return []
    if not isinstance(service_delivery, dict):
        raise TransitClientError("StopMonitoring response has no ServiceDelivery object")
    visits: list[dict[str, Any]] = []
    for delivery in _as_list(service_delivery.get("StopMonitoringDelivery")):
        if not isinstance(delivery, dict):
            continue
        visits.extend(_as_list(delivery.get("MonitoredStopVisit")))
    return visits


class TransitClient:
    """Thin wrapper around the 511.org StopMonitoring API using requests."""

    def __init__(
        self,
        api_key: str,
        agency: str,
        base_url: str = TRANSIT_API_BASE,
        timeout_seconds: int = 10,
    ) -> None:
        self._api_key = api_key
        self._agency = agency
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    def get_stop_visits(self, stop_code: str) -> list[dict[str, Any]]:
        """Fetch monitored stop visits for a single stop code."""
        params = {
            "api_key": self._api_key,
            "agency": self._agency,
            "stopCode": stop_code,
            "format": "json",
        }
        return extract_stop_visits(self._get("/StopMonitoring", params=params))

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            response = requests.get(url, params=params, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise TransitClientError(f"511 API request failed: {exc}") from exc

        if response.status_code != 200:
            body_text = response.text.strip()
            detail = f"Status {response.status_code}"
            if body_text:
                detail = f"{detail}, Body: {body_text}"
            raise TransitClientError(f"511 API request failed: {detail}")

        # 511 prefixes its JSON with a UTF-8 byte-order mark.
        try:
            return json.loads(response.content.decode("utf-8-sig"))
        except ValueError as exc:
            raise TransitClientError("511 API response was not valid JSON") from exc


__all__ = ["TransitClient", "TransitClientError", "extract_stop_visits"]
