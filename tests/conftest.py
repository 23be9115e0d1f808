import json
import os
import re
import tempfile

# Settings are read at import time; keep test runs away from the user's
# config, keyring and log directory.
os.environ.setdefault("POKECOLLECT_HOME", tempfile.mkdtemp(prefix="pokecollect-test-"))
os.environ["POKECOLLECT_CONFIG"] = os.path.join(os.environ["POKECOLLECT_HOME"], "missing.ini")
os.environ["LOG_TO_FILE"] = "false"
os.environ["CREDENTIAL_BACKEND"] = "memory"

from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest
import requests

from pokecollect.api.base_client import ApiClient
from pokecollect.core.event_bus import EventBus
from pokecollect.utils.security import MemorySecretStore

BASE_URL = "http://api.test"

USER_JSON = {
    "id": 1,
    "name": "Ash Ketchum",
    "email": "ash@example.com",
    "createdAt": "2024-05-01T10:00:00Z",
    "updatedAt": "2024-05-01T10:00:00Z",
}


def make_response(status_code: int = 200, json_body: Any = None, text: Optional[str] = None) -> requests.Response:
    """Build a real requests.Response with the given status and body."""
    response = requests.Response()
    response.status_code = status_code
    response.encoding = "utf-8"
    if json_body is not None:
        response._content = json.dumps(json_body).encode("utf-8")
    elif text is not None:
        response._content = text.encode("utf-8")
    else:
        response._content = b""
    return response


def error_body(status: int, message: str) -> Dict[str, Any]:
    return {"status": status, "error": "Error", "message": message, "timestamp": 1714557600000}


def sent_json(call) -> Dict[str, Any]:
    """Decode the JSON body of a recorded session.request call."""
    return json.loads(call.kwargs["data"].decode("utf-8"))


class FakeCollectionBackend:
    """
    Stands in for requests.Session against the collection endpoints.

    Upserts on (userId, cardId) like the real server and records every
    request as (method, path, body).
    """

    def __init__(self):
        self.headers: Dict[str, str] = {}
        self.calls: List[tuple] = []
        self.entries: Dict[int, Dict[str, Any]] = {}
        self._next_id = 1

    def mount(self, prefix, adapter):
        pass

    def close(self):
        pass

    def request(self, method, url, data=None, headers=None, timeout=None):
        path = url[len(BASE_URL):]
        body = json.loads(data.decode("utf-8")) if data else None
        self.calls.append((method, path, body))

        if method == "POST" and path == "/api/collection/add":
            return make_response(200, self._upsert(body))

        match = re.fullmatch(r"/api/collection/user/(\d+)", path)
        if method == "GET" and match:
            user_id = int(match.group(1))
            return make_response(200, [
                dict(entry, card={"id": entry["cardId"], "name": f"Card {entry['cardId']}",
                                  "number": "1/264", "rarity": "Common"})
                for entry in self.entries.values() if entry["userId"] == user_id
            ])

        match = re.fullmatch(r"/api/collection/delete/(\d+)", path)
        if method == "DELETE" and match:
            if self.entries.pop(int(match.group(1)), None) is None:
                return make_response(404, error_body(404, "Entry not found"))
            return make_response(200)

        return make_response(404, error_body(404, "No route"))

    def _upsert(self, body):
        for entry in self.entries.values():
            if entry["userId"] == body["userId"] and entry["cardId"] == body["cardId"]:
                entry["quantity"] = body["quantity"]
                return dict(entry)

        entry = {
            "id": self._next_id,
            "userId": body["userId"],
            "cardId": body["cardId"],
            "quantity": body["quantity"],
            "acquiredDate": "2024-05-01",
        }
        self.entries[entry["id"]] = entry
        self._next_id += 1
        return dict(entry)


@pytest.fixture
def secret_store() -> MemorySecretStore:
    return MemorySecretStore()


@pytest.fixture
def http_session() -> MagicMock:
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    session.request.return_value = make_response(200, {})
    return session


@pytest.fixture
def api_client(secret_store, http_session) -> ApiClient:
    return ApiClient(secret_store, base_url=BASE_URL, session=http_session)


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def collection_backend() -> FakeCollectionBackend:
    return FakeCollectionBackend()
