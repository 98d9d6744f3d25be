# tests/conftest.py
import copy
import json
import os
import sys
from types import SimpleNamespace

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from brand_mongo import MongoSession


# --- Minimal in-memory stand-in for the pymongo calls the migrator makes ---

def _matches(doc, query):
    for key, cond in (query or {}).items():
        value = doc.get(key)
        if isinstance(cond, dict) and '$in' in cond:
            if value not in cond['$in']:
                return False
        elif value != cond:
            return False
    return True


class FakeCursor(list):
    def sort(self, key, direction=1):
        return FakeCursor(sorted(self, key=lambda d: d.get(key), reverse=direction < 0))


class FakeCollection:
    def __init__(self, name):
        self.name = name
        self.docs = []

    def _insert(self, doc):
        doc.setdefault('_id', ObjectId())
        if any(d['_id'] == doc['_id'] for d in self.docs):
            raise DuplicateKeyError(f'E11000 duplicate key error collection: {self.name} _id: {doc["_id"]}')
        self.docs.append(copy.deepcopy(doc))
        return doc['_id']

    def insert_one(self, doc):
        return SimpleNamespace(inserted_id=self._insert(doc))

    def insert_many(self, docs, ordered=True):
        return SimpleNamespace(inserted_ids=[self._insert(d) for d in docs])

    def find(self, query=None):
        return FakeCursor(copy.deepcopy(d) for d in self.docs if _matches(d, query))

    def find_one(self, query):
        for d in self.docs:
            if _matches(d, query):
                return copy.deepcopy(d)
        return None

    def update_one(self, query, update):
        for d in self.docs:
            if _matches(d, query):
                before = copy.deepcopy(d)
                d.update(copy.deepcopy(update.get('$set', {})))
                for k in update.get('$unset', {}):
                    d.pop(k, None)
                return SimpleNamespace(matched_count=1, modified_count=int(before != d))
        return SimpleNamespace(matched_count=0, modified_count=0)

    def delete_many(self, query):
        keep = [d for d in self.docs if not _matches(d, query)]
        deleted = len(self.docs) - len(keep)
        self.docs = keep
        return SimpleNamespace(deleted_count=deleted)


class FakeDatabase:
    def __init__(self, name):
        self.name = name
        self.collections = {}

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection(name))


class FakeAdmin:
    def __init__(self, reachable):
        self.reachable = reachable

    def command(self, name):
        if not self.reachable:
            raise ServerSelectionTimeoutError('localhost:27017: [Errno 111] Connection refused')
        return {'ok': 1.0}


class FakeClient:
    def __init__(self, uri, reachable=True, **kwargs):
        self.uri = uri
        self.kwargs = kwargs
        self.admin = FakeAdmin(reachable)
        self.databases = {}
        self.closed = False

    def __getitem__(self, name):
        return self.databases.setdefault(name, FakeDatabase(name))

    def close(self):
        self.closed = True


@pytest.fixture
def fake_client():
    return FakeClient('mongodb://fake')


@pytest.fixture
def session(fake_client):
    s = MongoSession('mongodb://fake', 'brands_test', client_factory=lambda uri, **kw: fake_client)
    s.connect()
    yield s
    s.close()


@pytest.fixture
def settings(tmp_path):
    """Plain stand-in for config.Config with per-test paths."""
    return SimpleNamespace(
        MONGO_URI='mongodb://fake',
        MONGO_DB_NAME='brands_test',
        MONGO_TIMEOUT_MS=100,
        BRANDS_COLLECTION='brands',
        FIXTURE_PATH=tmp_path / 'brands.json',
        EXPORT_PATH=tmp_path / 'out' / 'brands-transformed.json',
        SEED_COUNT=10,
        SEED_MIN_YEAR=1980,
        SEED_MAX_LOCATIONS=5000,
        DEFAULT_TIMEZONE='UTC',
    )


@pytest.fixture
def write_fixture(tmp_path):
    def _write(records, name='brands.json'):
        path = tmp_path / name
        path.write_text(json.dumps(records), encoding='utf-8')
        return path
    return _write
