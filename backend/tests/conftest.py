"""
Pytest configuration and fixtures for admin backend tests.

The hosted backend is replaced by FakePostgrest, an in-memory emulation
of the PostgREST filter grammar and the storage upload endpoint, mounted
on the real BackendClient through httpx.MockTransport.
"""

import itertools
import json
import re
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any

import httpx
import pytest

from shared.config.settings import Settings
from shared.infrastructure.backend import BackendClient

TEST_URL = "https://test-project.supabase.co"
TEST_KEY = "anon-test-key-0123456789"

# Tables whose rows default to is_deleted = false, as the real schema does
SOFT_DELETE_TABLES = {"projects", "recipes", "chapters", "contents", "pairings", "footer", "shop"}


# =============================================================================
# Fake backend
# =============================================================================


def _split_top_level(text: str) -> list[str]:
    """Split on commas that are not inside quotes, parentheses or braces."""
    parts, depth, quoted, current = [], 0, False, []
    i = 0
    while i < len(text):
        ch = text[i]
        if quoted:
            current.append(ch)
            if ch == "\\" and i + 1 < len(text):
                current.append(text[i + 1])
                i += 1
            elif ch == '"':
                quoted = False
        elif ch == '"':
            quoted = True
            current.append(ch)
        elif ch in "({":
            depth += 1
            current.append(ch)
        elif ch in ")}":
            depth -= 1
            current.append(ch)
        elif ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    if current:
        parts.append("".join(current))
    return parts


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1].replace('\\"', '"').replace("\\\\", "\\")
    return value


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [str(v) for v in value]
    return [str(value)]


class _UnsupportedFilter(Exception):
    """Filter the real backend rejects, such as ilike on an array column."""


def _matches(row: dict[str, Any], column: str, op: str, raw: str) -> bool:
    value = row.get(column)
    if op == "eq":
        return value is not None and _as_text(value) == _unquote(raw)
    if op == "is":
        if raw == "null":
            return value is None
        return value is (raw == "true")
    if op == "in":
        options = {_unquote(v) for v in _split_top_level(raw.strip("()"))}
        return value is not None and _as_text(value) in options
    if op == "ilike":
        if value is None:
            return False
        if isinstance(value, list):
            raise _UnsupportedFilter(f"operator does not exist: text[] ~~* unknown ({column})")
        pattern = re.escape(_unquote(raw)).replace("%", ".*")
        return re.fullmatch(pattern, _as_text(value), re.IGNORECASE | re.DOTALL) is not None
    if op in ("cs", "ov"):
        wanted = {_unquote(v) for v in _split_top_level(raw.strip("{}")) if v}
        have = set(_as_list(value))
        return wanted <= have if op == "cs" else bool(wanted & have)
    raise AssertionError(f"Unsupported operator {op!r}")


def _or_matches(row: dict[str, Any], clause: str) -> bool:
    # Every branch is checked so an invalid one fails even after a match
    results = [
        _matches(row, *part.split(".", 2))
        for part in _split_top_level(clause.strip()[1:-1])
    ]
    return any(results)


class FakePostgrest:
    """In-memory tables answering PostgREST-style requests."""

    def __init__(self):
        self.tables: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.objects: dict[str, bytes] = {}
        self.requests: list[httpx.Request] = []
        self.failures: dict[str, tuple[int, dict[str, Any]]] = {}
        self._ids = itertools.count(1)

    # -------------------------------------------------------------------------
    # Test helpers
    # -------------------------------------------------------------------------

    def next_id(self, table: str) -> str:
        return f"{table}-{next(self._ids)}"

    def seed(self, table: str, *rows: dict[str, Any]) -> list[dict[str, Any]]:
        """Insert rows directly, filling id, created_at and soft delete defaults."""
        stored = []
        for row in rows:
            record = self._new_record(table, row)
            self.tables[table].append(record)
            stored.append(record)
        return stored

    def fail(self, table: str, status: int = 400, message: str = "permission denied", code: str = "42501"):
        """Make every request to table answer with an error body."""
        self.failures[table] = (status, {"message": message, "code": code, "details": None, "hint": None})

    def row(self, table: str, row_id: str) -> dict[str, Any] | None:
        return next((r for r in self.tables[table] if r["id"] == row_id), None)

    def requests_to(self, table: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(f"/{table}")]

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path.startswith("/storage/v1/object/"):
            key = path[len("/storage/v1/object/"):]
            self.objects[key] = request.content
            return httpx.Response(200, json={"Key": key})

        table = path[len("/rest/v1/"):]
        if table in self.failures:
            status, body = self.failures[table]
            return httpx.Response(status, json=body)

        params = request.url.params.multi_items()
        try:
            return self._dispatch(request, table, params)
        except _UnsupportedFilter as exc:
            return httpx.Response(
                400,
                json={"code": "42883", "message": str(exc), "details": None, "hint": None},
            )

    def _dispatch(self, request: httpx.Request, table: str, params: list[tuple[str, str]]) -> httpx.Response:
        if request.method == "GET":
            return self._select(request, table, params)
        if request.method == "POST":
            return self._insert(table, json.loads(request.content))
        if request.method == "PATCH":
            return self._update(table, params, json.loads(request.content))
        if request.method == "DELETE":
            self.tables[table] = [
                r for r in self.tables[table] if r not in self._filter(table, params)
            ]
            return httpx.Response(204)
        return httpx.Response(405)

    def _filter(self, table: str, params: list[tuple[str, str]]) -> list[dict[str, Any]]:
        rows = list(self.tables[table])
        for key, value in params:
            if key in ("select", "order", "limit"):
                continue
            if key == "or":
                rows = [r for r in rows if _or_matches(r, value)]
            else:
                op, raw = value.split(".", 1)
                rows = [r for r in rows if _matches(r, key, op, raw)]
        return rows

    def _select(self, request: httpx.Request, table: str, params: list[tuple[str, str]]) -> httpx.Response:
        rows = self._filter(table, params)
        options = dict(params)

        if "order" in options:
            column, direction = options["order"].rsplit(".", 1)
            present = [r for r in rows if r.get(column) is not None]
            missing = [r for r in rows if r.get(column) is None]
            present.sort(key=lambda r: r[column], reverse=direction == "desc")
            rows = present + missing
        if "limit" in options:
            rows = rows[: int(options["limit"])]

        columns = options.get("select", "*")
        if columns != "*":
            names = columns.split(",")
            rows = [{name: r.get(name) for name in names} for r in rows]

        if request.headers.get("accept") == "application/vnd.pgrst.object+json":
            if len(rows) != 1:
                return httpx.Response(
                    406,
                    json={
                        "code": "PGRST116",
                        "message": "JSON object requested, multiple (or no) rows returned",
                        "details": f"The result contains {len(rows)} rows",
                        "hint": None,
                    },
                )
            return httpx.Response(200, json=rows[0])
        return httpx.Response(200, json=rows)

    def _insert(self, table: str, body: Any) -> httpx.Response:
        rows = body if isinstance(body, list) else [body]
        stored = []
        for row in rows:
            record = self._new_record(table, row)
            self.tables[table].append(record)
            stored.append(dict(record))
        return httpx.Response(201, json=stored)

    def _update(self, table: str, params: list[tuple[str, str]], body: dict[str, Any]) -> httpx.Response:
        updated = []
        for row in self._filter(table, params):
            row.update(body)
            updated.append(dict(row))
        return httpx.Response(200, json=updated)

    def _new_record(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        record: dict[str, Any] = {"id": self.next_id(table), "created_at": self._now()}
        if table in SOFT_DELETE_TABLES:
            record.update(is_deleted=False, deleted_at=None)
        record.update(row)
        return record

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def test_settings():
    """Settings pointing at the fake backend, with admin credentials."""
    return Settings(
        supabase_url=TEST_URL,
        supabase_anon_key=TEST_KEY,
        admin_email="admin@example.com",
        admin_password="correct horse battery staple",
        storage_bucket="Media",
        environment="test",
    )


@pytest.fixture
def fake_backend():
    """Empty in-memory backend."""
    return FakePostgrest()


@pytest.fixture
def backend(fake_backend, test_settings):
    """BackendClient wired to the fake backend."""
    return BackendClient.from_settings(
        test_settings,
        transport=httpx.MockTransport(fake_backend.handler),
    )
