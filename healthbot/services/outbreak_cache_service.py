"""
Cache-aside layer over the outbreak fetcher.

One cache row per (cache_type, state_name, query_date). Writes replace the
row for their key, so the later write wins and the hourly collection refreshes
today's nationwide row.
"""
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from healthbot.main.pydantic_models.models import Disease, FetchResult, OutbreakResult
from healthbot.services.outbreak_fetcher import OutbreakFetcher
from healthbot.utils.errors import DatabaseError, FetchFailed, NoDataAvailable, ParseFailed
from healthbot.utils.gen_utils import local_today, utcnow
from healthbot.utils.logger import get_alerts_logger
from healthbot.utils.settings import settings

logger = get_alerts_logger()

NATIONWIDE = "nationwide"
STATE = "state"


def cache_key(state_name: Optional[str]):
    if state_name:
        return STATE, " ".join(state_name.split())
    return NATIONWIDE, None


class OutbreakCacheService:

    def __init__(self, store, fetcher: OutbreakFetcher, clock=None, retention_days: Optional[int] = None):
        self.store = store
        self.fetcher = fetcher
        self.clock = clock or local_today
        self.retention_days = retention_days if retention_days is not None else settings.CACHE_RETENTION_DAYS

    async def get_outbreak_data(self, state_name: Optional[str] = None) -> OutbreakResult:
        """
        Return today's diseases for a state (or nationwide when state_name is None).

        Sources: "cache" for a same-day hit, "fresh" after a fetch on miss,
        "fallback_cache" for yesterday's row when the fetch fails. Raises
        NoDataAvailable when the fetch fails and yesterday has no row either.
        """
        cache_type, key_state = cache_key(state_name)
        today = self.clock()
        scope = key_state or NATIONWIDE

        cached = await self._read(cache_type, key_state, today)
        if cached is not None:
            logger.info(f"Outbreak cache hit for {scope} on {today.isoformat()}")
            return self._from_entry(cached, "cache")

        logger.info(f"Outbreak cache miss for {scope} on {today.isoformat()}, fetching")
        try:
            fetched = await self.fetcher.fetch_disease_data(key_state)
        except (FetchFailed, ParseFailed) as e:
            logger.error(f"Outbreak fetch failed for {scope}: {str(e)}")
            yesterday = today - timedelta(days=1)
            stale = await self._read(cache_type, key_state, yesterday)
            if stale is not None:
                logger.warning(f"Using yesterday's cache as fallback for {scope}")
                return self._from_entry(stale, "fallback_cache")
            raise NoDataAvailable(f"No outbreak data for {scope}: fetch failed and no cache from {yesterday.isoformat()}") from e

        entry = await self.store_result(key_state, fetched, today)
        return OutbreakResult(diseases=fetched.diseases, source="fresh", cached_at=entry["created_at"])

    async def refresh_outbreak_data(self, state_name: Optional[str] = None) -> OutbreakResult:
        """
        Fetch now, bypassing the cache read, and overwrite today's row.

        The static fallback list never replaces a row already cached today, and a
        failed fetch falls back to the regular cache-aside lookup.
        """
        cache_type, key_state = cache_key(state_name)
        today = self.clock()
        scope = key_state or NATIONWIDE

        try:
            fetched = await self.fetcher.fetch_disease_data(key_state)
        except (FetchFailed, ParseFailed) as e:
            logger.error(f"Outbreak refresh failed for {scope}: {str(e)}")
            return await self.get_outbreak_data(state_name)

        if fetched.is_fallback:
            cached = await self._read(cache_type, key_state, today)
            if cached is not None:
                logger.warning(f"Refresh for {scope} got the static fallback list, keeping today's row")
                return self._from_entry(cached, "cache")

        entry = await self.store_result(key_state, fetched, today)
        return OutbreakResult(diseases=fetched.diseases, source="fresh", cached_at=entry["created_at"])

    async def store_result(self, state_name: Optional[str], fetched: FetchResult, query_date: Optional[date] = None) -> Dict[str, Any]:
        """Write the cache row for the key, replacing an earlier one; write failures are logged only"""
        cache_type, key_state = cache_key(state_name)
        entry = {
            "cache_type": cache_type,
            "state_name": key_state,
            "query_date": (query_date or self.clock()).isoformat(),
            "ai_response_text": fetched.raw_response,
            "parsed_diseases": [disease.model_dump() for disease in fetched.diseases],
            "is_fallback": fetched.is_fallback,
            "created_at": utcnow(),
        }
        try:
            created = await self.store.upsert_cache_entry(entry)
            if not created:
                logger.info(f"Refreshed cache row for {key_state or NATIONWIDE} on {entry['query_date']}")
        except DatabaseError as e:
            logger.error(f"Failed to cache outbreak data for {key_state or NATIONWIDE}: {str(e)}")
        return entry

    async def _read(self, cache_type: str, state_name: Optional[str], query_date: date):
        try:
            return await self.store.get_cache_entry(cache_type, state_name, query_date.isoformat())
        except DatabaseError as e:
            logger.error(f"Cache read failed for {state_name or NATIONWIDE}: {str(e)}")
            return None

    @staticmethod
    def _from_entry(entry: Dict[str, Any], source: str) -> OutbreakResult:
        diseases = [Disease.model_validate(item) for item in entry.get("parsed_diseases") or []]
        return OutbreakResult(diseases=diseases, source=source, cached_at=entry["created_at"])

    async def cleanup_old_cache(self, days_to_keep: Optional[int] = None) -> int:
        """Delete rows whose query_date is strictly older than the retention window"""
        days = days_to_keep if days_to_keep is not None else self.retention_days
        cutoff = self.clock() - timedelta(days=days)
        deleted = await self.store.delete_cache_entries_before(cutoff.isoformat())
        logger.info(f"Removed {deleted} outbreak cache rows older than {cutoff.isoformat()}")
        return deleted

    async def get_cache_statistics(self) -> Dict[str, Any]:
        entries: List[Dict[str, Any]] = await self.store.list_cache_entries()
        states = {entry["state_name"] for entry in entries if entry.get("cache_type") == STATE and entry.get("state_name")}
        created = [entry["created_at"] for entry in entries if entry.get("created_at")]
        return {
            "total_entries": len(entries),
            "nationwide_entries": sum(1 for entry in entries if entry.get("cache_type") == NATIONWIDE),
            "state_entries": sum(1 for entry in entries if entry.get("cache_type") == STATE),
            "unique_states": sorted(states),
            "latest_update": max(created) if created else None,
        }
