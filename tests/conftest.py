import os
import re
from types import SimpleNamespace
from uuid import uuid4

import pytest

# Settings are read once at import time by create_app().
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-key")
os.environ["PAGE_SIZE"] = "10"
os.environ["LOG_LEVEL"] = "WARNING"

from fastapi.testclient import TestClient  # noqa: E402

from storefront.main import app  # noqa: E402
from storefront.supabase_client import get_supabase_anon_client, get_supabase_client  # noqa: E402

KINDS = ["Phone", "Mascara", "Laptop", "Lipstick"]


def make_products() -> list[dict]:
    products = []
    for i in range(1, 25):
        products.append({
            "id": f"p{i:02d}",
            "title": f"{KINDS[i % 4]} {i}",
            "description": f"Description of item {i}",
            "price": 10.0 + i,
            "category": "Category1" if i % 2 else "Category2",
            "tags": ["gadgets", "sale"],
            "images": [f"https://img.test/{i}/a.jpg", f"https://img.test/{i}/b.jpg"] if i % 3 == 0 else [f"https://img.test/{i}/a.jpg"],
            "stock": i % 5,
            "rating": 4.26,
        })
    # A bare document: every optional field missing.
    products.append({"id": "p25", "title": "Mystery Box"})
    return products


def make_reviews() -> list[dict]:
    return [
        {
            "id": "r1",
            "product_id": "p01",
            "rating": 5,
            "comment": "Great value!",
            "reviewer_name": "Lucas Gordon",
            "reviewer_email": "lucas.gordon@example.com",
            "created_at": "2024-05-23T08:56:21.618Z",
        },
        {
            "id": "r2",
            "product_id": "p01",
            "rating": 2,
            "comment": "Broke after a week",
            "reviewer_name": "Eleanor Collins",
            "reviewer_email": "eleanor.collins@example.com",
            "created_at": "2024-06-01T10:00:00Z",
        },
    ]


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Just enough of the PostgREST query builder for the catalog queries."""

    def __init__(self, db: "FakeSupabase", table: str):
        self._db = db
        self._table = table
        self.columns = "*"
        self._filters = []
        self.orders = []
        self.embed_orders = {}
        self.range_ = None
        self.like_patterns = []
        self._single = False
        self._insert = None

    def select(self, columns="*"):
        self.columns = columns
        return self

    def eq(self, column, value):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def ilike(self, column, pattern):
        self.like_patterns.append(pattern)
        # Only the "%text%" shape is used; drop the wildcards, then the escapes.
        needle = re.sub(r"\\(.)", r"\1", pattern[1:-1]).lower()
        self._filters.append(lambda row: needle in (row.get(column) or "").lower())
        return self

    def order(self, column, desc=False, foreign_table=None):
        if foreign_table:
            self.embed_orders[foreign_table] = (column, desc)
        else:
            self.orders.append((column, desc))
        return self

    def range(self, start, end):
        self.range_ = (start, end)
        return self

    def maybe_single(self):
        self._single = True
        return self

    def insert(self, row):
        self._insert = row
        return self

    @staticmethod
    def _sorted(rows, orders):
        # Stable sorts applied last key first; missing values go last.
        for column, desc in reversed(orders):
            present = sorted((r for r in rows if r.get(column) is not None), key=lambda r: r[column], reverse=desc)
            rows = present + [r for r in rows if r.get(column) is None]
        return rows

    def execute(self):
        if self._insert is not None:
            stored = {"id": str(uuid4()), **self._insert}
            self._db.tables[self._table].append(stored)
            return FakeResponse([dict(stored)])

        self._db.reads += 1
        self._db.executed.append(self)
        rows = [dict(row) for row in self._db.tables[self._table] if all(f(row) for f in self._filters)]
        rows = self._sorted(rows, self.orders)

        if "reviews(" in self.columns:
            for row in rows:
                reviews = [dict(r) for r in self._db.tables["reviews"] if r["product_id"] == row["id"]]
                if "reviews" in self.embed_orders:
                    reviews = self._sorted(reviews, [self.embed_orders["reviews"]])
                row["reviews"] = reviews

        if self.range_:
            start, end = self.range_
            rows = rows[start:end + 1]

        if self._single:
            return FakeResponse(rows[0]) if rows else None
        return FakeResponse(rows)


class FakeAuth:
    def __init__(self):
        self.users = {
            "valid-token": SimpleNamespace(
                id="user-1", email="jane@example.com", user_metadata={"name": "Jane Doe"}
            )
        }

    def get_user(self, token):
        if token not in self.users:
            raise RuntimeError("invalid JWT")
        return SimpleNamespace(user=self.users[token])

    def sign_in_with_password(self, credentials):
        if credentials["password"] != "secret":
            raise RuntimeError("Invalid login credentials")
        return SimpleNamespace(
            user=self.users["valid-token"],
            session=SimpleNamespace(access_token="valid-token"),
        )

    def sign_up(self, credentials):
        user = SimpleNamespace(
            id="user-2",
            email=credentials["email"],
            user_metadata=credentials["options"]["data"],
        )
        return SimpleNamespace(user=user, session=None)


class FakeSupabase:
    def __init__(self, products=None, reviews=None):
        self.tables = {
            "products": make_products() if products is None else products,
            "reviews": make_reviews() if reviews is None else reviews,
        }
        self.reads = 0
        self.executed = []
        self.auth = FakeAuth()

    def table(self, name):
        return FakeQuery(self, name)


class FailingQuery:
    def __getattr__(self, name):
        return lambda *args, **kwargs: self

    def execute(self):
        raise ConnectionError("backend unreachable")


class FailingSupabase:
    auth = FakeAuth()

    def table(self, name):
        return FailingQuery()


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def make_supabase():
    return FakeSupabase


@pytest.fixture
def failing_supabase():
    return FailingSupabase()


def _client_for(backend):
    app.dependency_overrides[get_supabase_client] = lambda: backend
    app.dependency_overrides[get_supabase_anon_client] = lambda: backend
    return TestClient(app)


@pytest.fixture
def client(supabase):
    with _client_for(supabase) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def failing_client(failing_supabase):
    with _client_for(failing_supabase) as test_client:
        yield test_client
    app.dependency_overrides.clear()
