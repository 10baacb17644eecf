import re

import pytest

from upstream.errors import NotFound
from upstream.resources import Resource, ResourceStore


@pytest.fixture
def store():
    return ResourceStore.seed(100)


def test_seed_dense_ids_and_names(store):
    assert len(store) == 100
    ids = [r.id for r in store]
    assert ids == list(range(100))
    for r in store:
        assert re.fullmatch(r"[a-zA-Z]{10}", r.name)


def test_seed_custom_name_length():
    store = ResourceStore.seed(3, name_length=4)
    assert all(len(r.name) == 4 for r in store)


@pytest.mark.parametrize("count", [0, -1])
def test_seed_requires_positive_count(count):
    with pytest.raises(ValueError):
        ResourceStore.seed(count)


def test_list_limits(store):
    assert [r.id for r in store.list(3)] == [0, 1, 2]
    assert len(store.list()) == 10
    assert len(store.list(0)) == 10
    assert len(store.list(-4)) == 10
    assert len(store.list(1000)) == 100


def test_list_respects_default_limit():
    store = ResourceStore.seed(50, default_limit=25)
    assert len(store.list()) == 25


def test_get(store):
    assert store.get(5).id == 5
    assert store.get(5) is store.get(5)


@pytest.mark.parametrize("id", [-1, 100, 150])
def test_get_missing(store, id):
    with pytest.raises(NotFound):
        store.get(id)


def test_store_is_read_only(store):
    with pytest.raises(TypeError):
        store._resources[200] = Resource(id=200, name="x")


def test_resource_is_frozen():
    res = Resource(id=1, name="abc")
    with pytest.raises(Exception):
        res.name = "other"
    assert res.model_dump() == {"id": 1, "name": "abc"}
