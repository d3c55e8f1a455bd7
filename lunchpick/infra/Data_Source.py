"""Data-access boundary for the console.

Everything the core needs from the outside world goes through
`DataSource.request(method, path, body)`, an opaque JSON request/response
call. Two implementations:

  * InMemoryDataSource - the mock responder, seeded from the JSON fixture
    (or an explicit dict in tests). Writes are kept for the life of the
    object so saves can be read back.
  * HttpDataSource - the network client for the real API (httpx).

Errors are raised as TransportError in both cases, with the HTTP-ish status
code when there is one.
"""
from __future__ import annotations

import asyncio
import copy
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from uuid import uuid4

import httpx

from lunchpick.infra.paths import FIXTURE_FILE
from lunchpick.utilities.config import API_BASE_URL, API_TOKEN, HTTP_TIMEOUT_SECONDS, MOCK_LATENCY_MS
from lunchpick.utilities.errors import TransportError

logger = logging.getLogger(__name__)

METHODS = ("GET", "POST", "PUT", "DELETE")


def _now_ms() -> int:
    return int(datetime.now().timestamp() * 1000)


class DataSource(ABC):
    @abstractmethod
    async def request(self, method: str, path: str, body: Optional[dict] = None) -> Any:
        """Send one request and return the decoded JSON response."""

    async def aclose(self) -> None:
        return None


class InMemoryDataSource(DataSource):
    """Mock responder over in-memory collections.

    Single-item GETs for a missing id answer with an {"error": ...} body, as the
    production API does. Writes that cannot succeed raise TransportError:
    404 for unknown ids, 409 for a second recommendation on the same date.
    """

    def __init__(self, seed: Optional[Dict[str, List[dict]]] = None, latency_ms: int = MOCK_LATENCY_MS):
        data = seed if seed is not None else load_fixture()
        self._restaurants: List[dict] = copy.deepcopy(data.get("restaurants", []))
        self._menus: List[dict] = copy.deepcopy(data.get("menus", []))
        self._recommendations: List[dict] = copy.deepcopy(data.get("recommendations", []))
        self.latency_ms = latency_ms

    async def request(self, method: str, path: str, body: Optional[dict] = None) -> Any:
        method = method.upper()
        if method not in METHODS:
            raise TransportError(f"Unsupported method: {method}", status=405)
        if self.latency_ms:
            await asyncio.sleep(self.latency_ms / 1000)
        parts = [p for p in path.split("?")[0].split("/") if p]
        logger.debug("mock %s /%s", method, "/".join(parts))
        if not parts:
            raise TransportError(f"Unsupported endpoint: {path}", status=404)
        # response objects are copies so callers can never mutate the store
        if parts[0] == "restaurants":
            if len(parts) == 3 and parts[2] == "menus" and method == "GET":
                return {"menus": copy.deepcopy([m for m in self._menus if m.get("restaurantId") == parts[1]])}
            return copy.deepcopy(self._crud(self._restaurants, "restaurant", parts, method, body))
        if parts[0] == "menus":
            return copy.deepcopy(self._crud(self._menus, "menu", parts, method, body))
        if parts[0] == "recommendations":
            return copy.deepcopy(self._recommendations_api(parts, method, body))
        raise TransportError(f"Unsupported endpoint: {path}", status=404)

    # -------------------- restaurants / menus --------------------
    def _crud(self, items: List[dict], kind: str, parts: List[str], method: str, body: Optional[dict]):
        collection = kind + "s"
        item_id = parts[1] if len(parts) > 1 else None
        if len(parts) > 2:
            raise TransportError(f"Unsupported endpoint: /{'/'.join(parts)}", status=404)

        if method == "GET":
            if item_id is None:
                return {collection: items}
            found = _find(items, "id", item_id)
            return found if found is not None else {"error": f"{kind.capitalize()} not found: {item_id}"}

        if method == "POST" and item_id is None:
            now = _now_ms()
            created = dict(body or {})
            created["id"] = f"{kind}_{uuid4().hex[:8]}"
            created["createdAt"] = now
            created["updatedAt"] = now
            items.append(created)
            return created

        if item_id is None:
            raise TransportError(f"{method} /{collection} requires an id", status=405)
        current = _find(items, "id", item_id)
        if current is None:
            raise TransportError(f"{kind.capitalize()} not found: {item_id}", status=404)

        if method == "PUT":
            replaced = dict(body or {})
            replaced["id"] = item_id
            replaced["createdAt"] = current.get("createdAt")
            replaced["updatedAt"] = _now_ms()
            items[items.index(current)] = replaced
            return replaced
        if method == "DELETE":
            items.remove(current)
            return {"success": True, "message": f"{kind.capitalize()} {item_id} deleted"}
        raise TransportError(f"Unsupported method: {method}", status=405)

    # -------------------- recommendations --------------------
    def _recommendations_api(self, parts: List[str], method: str, body: Optional[dict]):
        date_key = parts[1] if len(parts) > 1 else None
        if len(parts) > 2:
            raise TransportError(f"Unsupported endpoint: /{'/'.join(parts)}", status=404)

        if method == "GET":
            if date_key is None:
                return {"recommendations": self._recommendations}
            found = _find(self._recommendations, "date", date_key)
            return found if found is not None else {"error": f"No recommendation for {date_key}"}

        if method == "POST" and date_key is None:
            record = dict(body or {})
            key = record.get("date")
            if not key:
                raise TransportError("Recommendation payload needs a date", status=400)
            if _find(self._recommendations, "date", key) is not None:
                raise TransportError(f"Recommendation for {key} already exists", status=409)
            record["createdAt"] = _now_ms()
            self._recommendations.append(record)
            return record

        if method == "PUT" and date_key is not None:
            current = _find(self._recommendations, "date", date_key)
            if current is None:
                raise TransportError(f"No recommendation for {date_key}", status=404)
            record = dict(body or {})
            # the path is the key; a body date cannot move the record
            record["date"] = date_key
            record["createdAt"] = current.get("createdAt")
            record["updatedAt"] = _now_ms()
            self._recommendations[self._recommendations.index(current)] = record
            return record

        raise TransportError(f"Unsupported method: {method}", status=405)


class HttpDataSource(DataSource):
    """Network client for the LunchPick API.

    `transport` lets tests route requests into an ASGI app instead of a socket.
    """

    def __init__(self, base_url: str = API_BASE_URL, token: Optional[str] = API_TOKEN,
                 timeout: float = HTTP_TIMEOUT_SECONDS, transport: Optional[httpx.AsyncBaseTransport] = None):
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(base_url=base_url, headers=headers, timeout=timeout, transport=transport)

    async def request(self, method: str, path: str, body: Optional[dict] = None) -> Any:
        method = method.upper()
        if method not in METHODS:
            raise TransportError(f"Unsupported method: {method}", status=405)
        try:
            response = await self._client.request(method, path, json=body)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {method} {path}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request failed: {method} {path}: {e}") from e

        if response.status_code >= 400:
            raise TransportError(_error_message(response), status=response.status_code)
        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise TransportError(f"Invalid JSON from {method} {path}", status=response.status_code) from e

    async def aclose(self) -> None:
        await self._client.aclose()


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except json.JSONDecodeError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict):
        detail = payload.get("detail") or payload.get("error")
        if detail:
            return str(detail)
    return response.reason_phrase


def _find(items: List[dict], key: str, value: str) -> Optional[dict]:
    for item in items:
        if item.get(key) == value:
            return item
    return None


def load_fixture(path: Path = FIXTURE_FILE) -> Dict[str, List[dict]]:
    """Read the mock fixture file; a missing or broken file yields empty collections."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f) or {}
    except FileNotFoundError:
        logger.warning(f"Fixture file not found: {path}. Starting with empty collections.")
        data = {}
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in fixture file: {e}")
        data = {}
    return {
        "restaurants": data.get("restaurants", []),
        "menus": data.get("menus", []),
        "recommendations": data.get("recommendations", []),
    }
