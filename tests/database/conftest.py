from __future__ import annotations

import pytest


class FakeCollection:
    def __init__(self):
        self.docs: list[dict] = []
        self.calls: list[str] = []

    def insert_one(self, doc):
        self.calls.append("insert_one")
        self.docs.append(dict(doc))

    def delete_one(self, query):
        self.calls.append("delete_one")
        for i, d in enumerate(self.docs):
            if all(d.get(k) == v for k, v in query.items()):
                del self.docs[i]
                return


class FakeDatabase:
    def __init__(self, name, collection_names=()):
        self.name = name
        self.collections = {n: FakeCollection() for n in collection_names}

    def list_collection_names(self):
        return list(self.collections)

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection())


class FakeAdmin:
    def __init__(self, reply=None, error=None):
        self._reply = {"ok": 1.0} if reply is None else reply
        self._error = error

    def command(self, name):
        assert name == "ping"
        if self._error:
            raise self._error
        return self._reply


class FakeClient:
    def __init__(self, *, reply=None, error=None, collection_names=("students", "classes")):
        self.admin = FakeAdmin(reply, error)
        self.closed = 0
        self.databases: dict[str, FakeDatabase] = {}
        self._collection_names = collection_names
        self.uri = None
        self.options = None

    def __getitem__(self, name):
        return self.databases.setdefault(name, FakeDatabase(name, self._collection_names))

    def get_default_database(self, default=None):
        return self[default]

    def close(self):
        self.closed += 1


@pytest.fixture
def make_client():
    def factory(**kwargs):
        client = FakeClient(**kwargs)

        def client_factory(uri, **options):
            client.uri = uri
            client.options = options
            return client

        return client, client_factory

    return factory
