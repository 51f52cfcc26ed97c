"""Shared fixtures: an in-memory backend served through httpx.MockTransport."""
import json
from collections import defaultdict
from datetime import datetime, timedelta
from itertools import count

import httpx
import pytest

from cozy_cloud.services.backend import BackendClient


BASE_URL = "http://backend.test"
TOKEN = "token-1"


def _as_filter(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


class FakeBackend:
    """Just enough of the hosted REST, auth and storage APIs for the tests."""

    def __init__(self):
        self.tables = defaultdict(list)
        self.objects = {}
        self.requests = []
        self.failures = {}
        self.user = {"id": "user-1", "email": "cozy@example.com"}
        self._ids = count(1)

    # Test helpers

    def seed(self, table: str, **row) -> dict:
        n = next(self._ids)
        row.setdefault("id", f"{table}-{n}")
        row.setdefault("created_at", (datetime(2025, 1, 1) + timedelta(seconds=n)).isoformat())
        self.tables[table].append(row)
        return row

    def fail(self, method: str, table: str, message: str, status: int = 400):
        self.failures[(method, table)] = (status, message)

    def calls(self, method: str = None, prefix: str = ""):
        return [
            r for r in self.requests
            if (method is None or r.method == method) and r.url.path.startswith(prefix)
        ]

    # Transport

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith("/rest/v1/"):
            return self._rest(request, path[len("/rest/v1/"):])
        if path.startswith("/auth/v1/"):
            return self._auth(request, path[len("/auth/v1/"):])
        if path.startswith("/storage/v1/object/"):
            return self._storage(request, path[len("/storage/v1/object/"):])
        return httpx.Response(404, json={"message": "no such route"})

    def _rest(self, request: httpx.Request, table: str) -> httpx.Response:
        if (request.method, table) in self.failures:
            status, message = self.failures[(request.method, table)]
            return httpx.Response(status, json={"message": message})

        params = request.url.params
        filters = {
            key: value[3:]
            for key, value in params.multi_items()
            if key not in ("select", "order", "limit") and value.startswith("eq.")
        }
        rows = self.tables[table]
        matched = [
            r for r in rows
            if all(_as_filter(r.get(k)) == v for k, v in filters.items())
        ]

        if request.method == "GET":
            for term in reversed(params.get("order", "").split(",")):
                if not term:
                    continue
                column, direction = term.rsplit(".", 1)
                matched = sorted(
                    matched,
                    key=lambda r: (r.get(column) is None, "" if r.get(column) is None else r.get(column)),
                    reverse=direction == "desc",
                )
            if "limit" in params:
                matched = matched[: int(params["limit"])]
            columns = params.get("select", "*")
            if columns != "*":
                wanted = columns.split(",")
                matched = [{k: r.get(k) for k in wanted} for r in matched]
            return httpx.Response(200, json=matched)

        if request.method == "POST":
            created = [self.seed(table, **row) for row in json.loads(request.content)]
            return httpx.Response(201, json=created)

        if request.method == "PATCH":
            values = json.loads(request.content)
            for row in matched:
                row.update(values)
            return httpx.Response(200, json=matched)

        if request.method == "DELETE":
            self.tables[table] = [r for r in rows if r not in matched]
            return httpx.Response(200, json=matched)

        return httpx.Response(405, json={"message": "method not allowed"})

    def _auth(self, request: httpx.Request, route: str) -> httpx.Response:
        if route == "token":
            body = json.loads(request.content)
            if body.get("password") != "hunter2":
                return httpx.Response(400, json={"error_description": "Invalid login credentials"})
            return httpx.Response(200, json={"access_token": TOKEN, "user": self.user})
        if route == "signup":
            body = json.loads(request.content)
            return httpx.Response(200, json={"id": "user-2", "email": body["email"]})
        if route == "logout":
            return httpx.Response(204)
        if route == "user":
            if request.headers.get("Authorization") != f"Bearer {TOKEN}":
                return httpx.Response(401, json={"msg": "invalid JWT"})
            return httpx.Response(200, json=self.user)
        return httpx.Response(404, json={"message": "no such route"})

    def _storage(self, request: httpx.Request, route: str) -> httpx.Response:
        if route.startswith("sign/"):
            key = route[len("sign/"):]
            if tuple(key.split("/", 1)) not in self.objects:
                return httpx.Response(400, json={"message": "Object not found"})
            return httpx.Response(200, json={"signedURL": f"/object/sign/{key}?token=signed"})
        if request.method == "DELETE":
            bucket = route
            for prefix in json.loads(request.content)["prefixes"]:
                self.objects.pop((bucket, prefix), None)
            return httpx.Response(200, json=[])
        bucket, path = route.split("/", 1)
        if request.method == "POST":
            self.objects[(bucket, path)] = request.content
            return httpx.Response(200, json={"Key": f"{bucket}/{path}"})
        if (bucket, path) not in self.objects:
            return httpx.Response(400, json={"message": "Object not found"})
        return httpx.Response(200, content=self.objects[(bucket, path)])


@pytest.fixture
def fake():
    return FakeBackend()


@pytest.fixture
def backend(fake):
    """Client signed in as the fake user."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(fake.handler))
    return BackendClient(BASE_URL, "anon-key", http=http, access_token=TOKEN)


@pytest.fixture
def anonymous_backend(fake):
    http = httpx.AsyncClient(transport=httpx.MockTransport(fake.handler))
    return BackendClient(BASE_URL, "anon-key", http=http)
