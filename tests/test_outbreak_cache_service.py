from datetime import timedelta

import pytest

from conftest import Clock, StubFetcher, StubLLM, disease, llm_payload, run
from healthbot.main.pydantic_models.models import FetchResult
from healthbot.services.outbreak_cache_service import NATIONWIDE, STATE, OutbreakCacheService
from healthbot.services.outbreak_fetcher import OutbreakFetcher
from healthbot.utils.errors import DatabaseError, FetchFailed, NoDataAvailable, ParseFailed


def make_service(store, fetcher, clock=None):
    return OutbreakCacheService(store, fetcher, clock=clock or Clock(), retention_days=7)


def test_second_call_same_day_is_cache_hit(store):
    fetcher = StubFetcher()
    service = make_service(store, fetcher)

    first = run(service.get_outbreak_data("Maharashtra"))
    second = run(service.get_outbreak_data("Maharashtra"))

    assert first.source == "fresh"
    assert second.source == "cache"
    assert [d.name for d in first.diseases] == [d.name for d in second.diseases]
    assert first.cached_at == second.cached_at
    assert fetcher.calls == ["Maharashtra"]


def test_scopes_are_cached_separately(store):
    fetcher = StubFetcher()
    service = make_service(store, fetcher)

    run(service.get_outbreak_data(None))
    run(service.get_outbreak_data("Kerala"))
    run(service.get_outbreak_data(None))

    assert fetcher.calls == [None, "Kerala"]
    keys = {(key[0], key[1]) for key in store.cache}
    assert keys == {(NATIONWIDE, None), (STATE, "Kerala")}


def test_new_day_fetches_again(store):
    clock = Clock()
    fetcher = StubFetcher()
    service = make_service(store, fetcher, clock)

    run(service.get_outbreak_data("Kerala"))
    clock.today += timedelta(days=1)
    result = run(service.get_outbreak_data("Kerala"))

    assert result.source == "fresh"
    assert len(fetcher.calls) == 2


def test_unparseable_answer_caches_static_list(store):
    service = make_service(store, OutbreakFetcher(StubLLM(["sorry, no data"]), clock=Clock()))

    result = run(service.get_outbreak_data("Goa"))

    assert result.source == "fresh"
    assert [d.name for d in result.diseases] == ["Dengue", "Seasonal Flu"]
    for entry in store.cache.values():
        assert entry["parsed_diseases"]
        assert entry["is_fallback"] is True


def test_stored_rows_are_never_empty(store):
    responses = [llm_payload(disease("Dengue")), '{"diseases": []}', "garbage"]
    service = make_service(store, OutbreakFetcher(StubLLM(responses), clock=Clock()))

    for state in ("Kerala", "Goa", "Bihar"):
        run(service.get_outbreak_data(state))

    assert len(store.cache) == 3
    assert all(entry["parsed_diseases"] for entry in store.cache.values())


@pytest.mark.parametrize("error", [FetchFailed("down"), ParseFailed("bad")])
def test_fetch_failure_without_stale_cache_raises(store, error):
    service = make_service(store, StubFetcher(error))
    with pytest.raises(NoDataAvailable):
        run(service.get_outbreak_data("Kerala"))
    assert store.cache == {}


def test_fetch_failure_uses_yesterdays_row(store):
    clock = Clock()
    fetcher = StubFetcher()
    service = make_service(store, fetcher, clock)
    yesterday = run(service.get_outbreak_data("Kerala"))

    clock.today += timedelta(days=1)
    fetcher.result = FetchFailed("down")
    result = run(service.get_outbreak_data("Kerala"))

    assert result.source == "fallback_cache"
    assert [d.name for d in result.diseases] == [d.name for d in yesterday.diseases]


def test_fallback_does_not_reach_two_days_back(store):
    clock = Clock()
    fetcher = StubFetcher()
    service = make_service(store, fetcher, clock)
    run(service.get_outbreak_data("Kerala"))

    clock.today += timedelta(days=2)
    fetcher.result = FetchFailed("down")
    with pytest.raises(NoDataAvailable):
        run(service.get_outbreak_data("Kerala"))


def test_cache_write_failure_still_returns_fresh_data(store, monkeypatch):
    async def broken_upsert(entry):
        raise DatabaseError("disk full")

    monkeypatch.setattr(store, "upsert_cache_entry", broken_upsert)
    result = run(make_service(store, StubFetcher()).get_outbreak_data("Kerala"))

    assert result.source == "fresh"
    assert result.diseases


def test_later_write_replaces_row_for_same_key(store):
    service = make_service(store, StubFetcher())
    first = FetchResult(diseases=StubFetcher().result.diseases, raw_response="first")
    second = FetchResult(diseases=StubFetcher().result.diseases, raw_response="second")

    run(service.store_result("Kerala", first))
    run(service.store_result("Kerala", second))

    assert len(store.cache) == 1
    assert next(iter(store.cache.values()))["ai_response_text"] == "second"


def test_refresh_overwrites_todays_row(store):
    llm = StubLLM([llm_payload(disease("Dengue", state="Kerala")), llm_payload(disease("Nipah", state="Kerala"))])
    service = make_service(store, OutbreakFetcher(llm, clock=Clock()))
    run(service.get_outbreak_data("Kerala"))

    refreshed = run(service.refresh_outbreak_data("Kerala"))
    cached = run(service.get_outbreak_data("Kerala"))

    assert refreshed.source == "fresh"
    assert cached.source == "cache"
    assert [d.name for d in cached.diseases] == ["Nipah"]


def test_refresh_keeps_todays_row_when_answer_is_unusable(store):
    llm = StubLLM([llm_payload(disease("Dengue", state="Kerala")), "sorry, no data"])
    service = make_service(store, OutbreakFetcher(llm, clock=Clock()))
    run(service.get_outbreak_data("Kerala"))

    result = run(service.refresh_outbreak_data("Kerala"))

    assert result.source == "cache"
    assert [d.name for d in result.diseases] == ["Dengue"]
    assert not next(iter(store.cache.values()))["is_fallback"]


def test_refresh_failure_falls_back_to_cached_row(store):
    fetcher = StubFetcher()
    service = make_service(store, fetcher)
    run(service.get_outbreak_data("Kerala"))
    fetcher.result = FetchFailed("quota exceeded")

    result = run(service.refresh_outbreak_data("Kerala"))

    assert result.source == "cache"
    assert len(fetcher.calls) == 2


def test_state_name_whitespace_is_collapsed(store):
    fetcher = StubFetcher()
    service = make_service(store, fetcher)
    run(service.get_outbreak_data("Tamil Nadu"))
    result = run(service.get_outbreak_data("  Tamil   Nadu "))
    assert result.source == "cache"


def test_cleanup_removes_only_rows_older_than_window(store):
    clock = Clock()
    service = make_service(store, StubFetcher(), clock)
    today = clock.today
    for age in (0, 6, 7, 8, 30):
        clock.today = today - timedelta(days=age)
        run(service.get_outbreak_data("Kerala"))
    clock.today = today

    removed = run(service.cleanup_old_cache())

    assert removed == 2
    remaining = sorted(key[2] for key in store.cache)
    assert remaining == [(today - timedelta(days=d)).isoformat() for d in (7, 6, 0)]


def test_cache_statistics(store):
    service = make_service(store, StubFetcher())
    run(service.get_outbreak_data(None))
    run(service.get_outbreak_data("Kerala"))
    run(service.get_outbreak_data("Goa"))

    stats = run(service.get_cache_statistics())

    assert stats["total_entries"] == 3
    assert stats["nationwide_entries"] == 1
    assert stats["state_entries"] == 2
    assert stats["unique_states"] == ["Goa", "Kerala"]
    assert stats["latest_update"] is not None
