import threading

import pytest

from app.client import INVALIDATION_TABLE, Mutation, QueryCache, keys_for
from app.client.cache import QueryClient, split_key


DEAL = "0b5c3a1e-1111-4c2b-9d6f-aaaaaaaaaaaa"
MATCH = "7f1e2d3c-2222-4b5a-8c9d-bbbbbbbbbbbb"


class RecordingApi:
    def __init__(self):
        self.calls = []

    def get(self, path, params=None):
        self.calls.append((path, params))
        return {"path": path, "params": params, "n": len(self.calls)}


def test_split_key():
    assert split_key(("/api/deals", DEAL, "buyers")) == (f"/api/deals/{DEAL}/buyers", None)
    assert split_key(("/api/activities", {"entity_id": DEAL})) == ("/api/activities", {"entity_id": DEAL})


def test_fetch_uses_cache_until_invalidated():
    cache = QueryCache()
    loads = []

    def loader():
        loads.append(1)
        return len(loads)

    key = ("/api/deals", DEAL, "buyers")
    assert cache.fetch(key, loader) == 1
    assert cache.fetch(key, loader) == 1

    assert cache.invalidate(key) == 1
    assert cache.stale_keys() == [key]
    assert cache.fetch(key, loader) == 2


def test_prefix_invalidation():
    cache = QueryCache()
    cache.set(("/api/deals",), [])
    cache.set(("/api/deals", DEAL, "buyers"), [])
    cache.set(("/api/buying-parties",), [])

    assert cache.invalidate(("/api/deals",)) == 2
    assert ("/api/buying-parties",) not in cache.stale_keys()


def test_exact_invalidation():
    cache = QueryCache()
    cache.set(("/api/deals",), [])
    cache.set(("/api/deals", DEAL, "buyers"), [])

    assert cache.invalidate(("/api/deals",), exact=True) == 1
    assert cache.stale_keys() == [("/api/deals",)]


def test_param_order_does_not_matter():
    cache = QueryCache()
    cache.set(("/api/contacts", {"entity_id": DEAL, "entity_type": "deal"}), ["x"])
    assert ("/api/contacts", {"entity_type": "deal", "entity_id": DEAL}) in cache
    assert len(cache) == 1
    cache.clear()
    assert len(cache) == 0


def test_every_mutation_has_an_invalidation_entry():
    assert set(INVALIDATION_TABLE) == set(Mutation)


def test_checklist_update_invalidates_match_and_deal_buyers():
    keys = keys_for(Mutation.UPDATE_CHECKLIST, match_id=MATCH, deal_id=DEAL)
    assert ("/api/matches", MATCH) in keys
    assert ("/api/deals", DEAL, "buyers") in keys


def test_notes_save_invalidates_deal_and_its_activities():
    keys = keys_for(Mutation.SAVE_NOTES, deal_id=DEAL)
    assert (f"/api/deals/{DEAL}",) in keys
    assert ("/api/activities", {"entity_id": DEAL}) in keys


def test_keys_for_requires_ids():
    with pytest.raises(ValueError, match="deal_id"):
        keys_for(Mutation.CREATE_MATCH)


def test_mutate_invalidates_only_after_success():
    api = RecordingApi()
    client = QueryClient(api)
    buyers_key = ("/api/deals", DEAL, "buyers")
    client.read(buyers_key)

    def failing():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        client.mutate(Mutation.CREATE_MATCH, failing, deal_id=DEAL)
    assert client.cache.stale_keys() == []

    client.mutate(Mutation.CREATE_MATCH, lambda: {"id": MATCH}, deal_id=DEAL)
    assert client.cache.stale_keys() == [buyers_key]

    assert client.read(buyers_key)["n"] == 2
    assert api.calls == [(f"/api/deals/{DEAL}/buyers", None)] * 2


def test_refetch_bypasses_cache():
    api = RecordingApi()
    client = QueryClient(api)
    key = ("/api/buying-parties",)

    client.read(key)
    client.read(key)
    assert len(api.calls) == 1

    client.refetch(key)
    assert len(api.calls) == 2


def test_deal_delete_invalidates_its_detail():
    assert (f"/api/deals/{DEAL}",) in keys_for(Mutation.DELETE_DEAL, deal_id=DEAL)


def test_party_delete_covers_every_deal_buyer_list():
    cache = QueryCache()
    cache.set(("/api/deals", DEAL, "buyers"), [])
    cache.set(("/api/deals", DEAL, "buyers-with-nda"), [])
    cache.set(("/api/buying-parties",), [])

    for key in keys_for(Mutation.DELETE_BUYING_PARTIES):
        cache.invalidate(key)

    assert len(cache.stale_keys()) == 3


@pytest.mark.parametrize(
    "mutation",
    [Mutation.CREATE_MATCH, Mutation.UPDATE_MATCH, Mutation.DELETE_MATCH, Mutation.UPDATE_CHECKLIST],
)
def test_match_changes_invalidate_buyers_with_nda(mutation):
    keys = keys_for(mutation, deal_id=DEAL, match_id=MATCH)
    assert ("/api/deals", DEAL, "buyers-with-nda") in keys


def test_invalidate_while_another_thread_inserts():
    cache = QueryCache()
    errors = []

    def writer():
        try:
            for i in range(5000):
                cache.set(("/api/deals", str(i), "buyers"), [])
        except Exception as e:
            errors.append(e)

    thread = threading.Thread(target=writer)
    thread.start()
    try:
        while thread.is_alive():
            cache.invalidate(("/api/deals",))
    except Exception as e:
        errors.append(e)
    thread.join()

    assert errors == []
    assert len(cache) == 5000
