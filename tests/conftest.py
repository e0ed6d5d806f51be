"""
Pytest configuration.

Adds the project root to the Python path so tests can import domain,
repositories, services and api, and provides an in-memory stand-in for the
Supabase client so repository and API tests never touch a real database.
"""

from __future__ import annotations

import copy
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


class FakeResponse:
    def __init__(self, data: List[dict], error: Any = None) -> None:
        self.data = data
        self.error = error
        self.count = len(data)


class FakeQuery:
    """Subset of the postgrest-py builder used by the repositories."""

    def __init__(self, db: "FakeSupabase", table: str) -> None:
        self._db = db
        self._table = table
        self._op = "select"
        self._payload: Optional[dict] = None
        self._filters: List[Callable[[dict], bool]] = []
        self._order: Optional[tuple[str, bool]] = None
        self._limit: Optional[int] = None

    def select(self, *columns: str, **kwargs: Any) -> "FakeQuery":
        self._op = "select"
        return self

    def insert(self, payload: dict) -> "FakeQuery":
        self._op = "insert"
        self._payload = payload
        return self

    def update(self, payload: dict) -> "FakeQuery":
        self._op = "update"
        self._payload = payload
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def is_(self, column: str, value: str) -> "FakeQuery":
        assert value == "null"
        self._filters.append(lambda row: row.get(column) is None)
        return self

    def in_(self, column: str, values: List[Any]) -> "FakeQuery":
        self._filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._order = (column, desc)
        return self

    def limit(self, n: int) -> "FakeQuery":
        self._limit = n
        return self

    def _matching(self) -> List[dict]:
        rows = self._db.tables.setdefault(self._table, [])
        return [row for row in rows if all(f(row) for f in self._filters)]

    def execute(self) -> FakeResponse:
        self._db.calls.append((self._table, self._op))
        if self._table in self._db.failing_tables:
            raise RuntimeError(f"simulated failure on {self._table}")

        if self._op == "insert":
            assert self._payload is not None
            rows = self._db.tables.setdefault(self._table, [])
            row = dict(self._payload)
            row.setdefault("id", max((r.get("id", 0) for r in rows), default=0) + 1)
            rows.append(row)
            return FakeResponse([copy.deepcopy(row)])

        if self._op == "update":
            for hook in self._db.before_update.pop(self._table, []):
                hook(self._db)

        matching = self._matching()

        if self._op == "update":
            assert self._payload is not None
            for row in matching:
                row.update(self._payload)
            return FakeResponse([copy.deepcopy(row) for row in matching])

        if self._order is not None:
            column, desc = self._order
            matching = sorted(
                matching,
                key=lambda row: (row.get(column) is None, str(row.get(column) or "")),
                reverse=desc,
            )
        if self._limit is not None:
            matching = matching[: self._limit]
        return FakeResponse([copy.deepcopy(row) for row in matching])


class FakeSupabase:
    def __init__(self) -> None:
        self.tables: Dict[str, List[dict]] = {}
        self.calls: List[tuple[str, str]] = []
        self.failing_tables: set[str] = set()
        # One-shot callbacks run just before the next UPDATE on a table.
        self.before_update: Dict[str, List[Callable[["FakeSupabase"], None]]] = {}

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def seed(self, table: str, *rows: dict) -> None:
        self.tables.setdefault(table, []).extend(dict(r) for r in rows)

    def rows(self, table: str) -> List[dict]:
        return self.tables.get(table, [])


_REPOSITORY_MODULES = (
    "repositories.notification_repository",
    "repositories.print_job_repository",
    "repositories.printer_repository",
    "repositories.product_repository",
    "repositories.product_stock_repository",
)


@pytest.fixture
def fake_supabase(monkeypatch: pytest.MonkeyPatch) -> FakeSupabase:
    """Route every repository's Supabase access to an in-memory fake."""

    import importlib

    fake = FakeSupabase()
    for name in _REPOSITORY_MODULES:
        module = importlib.import_module(name)
        monkeypatch.setattr(module, "get_supabase", lambda: fake)
    return fake


@pytest.fixture(autouse=True)
def reset_availability_service(monkeypatch: pytest.MonkeyPatch) -> None:
    """Each test starts with a fresh process-wide availability cache."""

    import services.availability_service as availability_service

    monkeypatch.setattr(availability_service, "_service", None)


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
