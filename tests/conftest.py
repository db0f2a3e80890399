"""Pytest configuration ensuring the `src` directory is on sys.path.

Allows `import ecoflood...` without installing the package, and provides an
in-memory stand-in for the MongoDB reports collection.
"""
import sys
import os

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

import pytest  # noqa: E402
from pymongo.errors import ServerSelectionTimeoutError  # noqa: E402


class FakeCursor:
    def __init__(self, docs):
        self._docs = list(docs)

    def sort(self, key, direction):
        self._docs.sort(key=lambda d: d.get(key), reverse=direction < 0)
        return self

    def limit(self, n):
        self._docs = self._docs[:n]
        return self

    def __iter__(self):
        return iter(self._docs)


class FakeCollection:
    """Just enough of pymongo's Collection for the report repository."""

    def __init__(self):
        self.docs = []
        self.indexes = []

    @staticmethod
    def _match(doc, query):
        return all(doc.get(k) == v for k, v in query.items())

    def insert_one(self, doc):
        self.docs.append(dict(doc))

    def find_one(self, query, projection=None):
        for d in self.docs:
            if self._match(d, query):
                return dict(d)
        return None

    def find(self, query, projection=None):
        return FakeCursor(dict(d) for d in self.docs if self._match(d, query))

    def count_documents(self, query):
        return sum(1 for d in self.docs if self._match(d, query))

    def aggregate(self, pipeline):
        field = pipeline[0]["$group"]["_id"].lstrip("$")
        counts = {}
        for d in self.docs:
            counts[d[field]] = counts.get(d[field], 0) + 1
        return [{"_id": k, "count": v} for k, v in counts.items()]

    def create_index(self, spec, **kwargs):
        self.indexes.append(spec)


class DownCollection(FakeCollection):
    """Collection whose server never answers."""

    def _down(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    insert_one = find_one = find = count_documents = aggregate = create_index = _down


@pytest.fixture
def fake_collection():
    return FakeCollection()


@pytest.fixture
def down_collection():
    return DownCollection()


@pytest.fixture
def static_source():
    from ecoflood.ingestion.static_data import StaticDataSource
    return StaticDataSource(seed=7, timezone="Asia/Jakarta")
