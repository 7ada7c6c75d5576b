"""
Scheduled outbreak collection and alert delivery.

Jobs:
    disease_alert_processing  hourly  refresh nationwide data, alert users when new diseases appear
    ai_disease_scan           6-hourly refresh nationwide data only
    morning_summary           08:00   send every subscriber a summary for their state
    cleanup                   02:00   cache, disease ledger and alert history retention
"""
import asyncio
from typing import Any, Dict, List, Optional

from healthbot.main.pydantic_models.models import AlertPreference
from healthbot.services.alert_preferences_service import AlertPreferencesService
from healthbot.services.disease_formatter import format_alert_message
from healthbot.services.outbreak_cache_service import OutbreakCacheService
from healthbot.services.outbreak_fetcher import OutbreakFetcher
from healthbot.utils.errors import HealthBotError
from healthbot.utils.gen_utils import utcnow
from healthbot.utils.indian_states import normalize_name
from healthbot.utils.maintenance import run_maintenance_tasks
from healthbot.utils.scheduler import JobScheduler
from healthbot.utils.settings import settings
from healthbot.utils.logger import get_alerts_logger

logger = get_alerts_logger()

ALERT_PROCESSING_JOB = "disease_alert_processing"
AI_SCAN_JOB = "ai_disease_scan"
MORNING_SUMMARY_JOB = "morning_summary"
CLEANUP_JOB = "cleanup"


class AlertDispatcher:

    def __init__(self, store, fetcher: OutbreakFetcher, cache_service: OutbreakCacheService,
                 preferences: AlertPreferencesService, whatsapp, send_delay: Optional[float] = None):
        self.store = store
        self.fetcher = fetcher
        self.cache_service = cache_service
        self.preferences = preferences
        self.whatsapp = whatsapp
        self.send_delay = settings.ALERT_SEND_DELAY_SECONDS if send_delay is None else send_delay

    async def collect_outbreaks(self) -> Dict[str, Any]:
        """
        Fetch nationwide data straight from the fetcher, overwrite today's nationwide
        cache row and update the disease ledger. Returns the names not seen before.
        The static fallback list touches neither the cache nor the ledger.

        FetchFailed propagates and aborts only the current run.
        """
        fetched = await self.fetcher.fetch_disease_data(None)

        if fetched.is_fallback:
            logger.warning("Nationwide scan returned the static fallback list; ledger left unchanged")
            return {"diseases": len(fetched.diseases), "new_diseases": [], "is_fallback": True}

        await self.cache_service.store_result(None, fetched)
        known = await self.store.get_active_disease_names()
        seen_at = utcnow()
        new_diseases = []
        for disease in fetched.diseases:
            await self.store.upsert_active_disease(disease.model_dump(), seen_at)
            if normalize_name(disease.name) not in known:
                new_diseases.append(disease.name)

        logger.info(f"Nationwide scan: {len(fetched.diseases)} diseases, new: {new_diseases or 'none'}")
        return {"diseases": len(fetched.diseases), "new_diseases": new_diseases, "is_fallback": False}

    async def process_alerts(self) -> Dict[str, Any]:
        """Hourly job: collect, then alert subscribers only when new diseases appeared"""
        collected = await self.collect_outbreaks()
        if collected["is_fallback"] or not collected["new_diseases"]:
            return {**collected, "alerts": None}
        stats = await self.alert_all_users(refresh=True)
        return {**collected, "alerts": stats}

    async def ai_scan(self) -> Dict[str, Any]:
        return await self.collect_outbreaks()

    async def morning_summary(self) -> Dict[str, Any]:
        return await self.alert_all_users(morning=True)

    async def cleanup(self) -> Dict[str, Any]:
        return await run_maintenance_tasks(self.store, self.cache_service)

    async def alert_all_users(self, morning: bool = False, refresh: bool = False) -> Dict[str, int]:
        """
        Send to every enabled preference, pausing between sends. A failure for
        one user is logged and the batch continues.

        With refresh, each subscribed state's cache row is fetched again first
        so that rows cached earlier in the day carry the newly found diseases.
        """
        preferences = await self.preferences.list_enabled()
        stats = {"total": len(preferences), "sent": 0, "failed": 0}
        logger.info(f"Dispatching {'morning summary' if morning else 'outbreak alerts'} to {len(preferences)} users")
        if refresh:
            await self.refresh_states(preferences)

        for index, preference in enumerate(preferences):
            if index:
                await asyncio.sleep(self.send_delay)
            try:
                await self.process_user(preference, morning=morning)
                stats["sent"] += 1
            except HealthBotError as e:
                stats["failed"] += 1
                logger.error(f"Alert to {preference.phone_number} failed: {str(e)}")

        logger.info(f"Dispatch finished: {stats}")
        return stats

    async def refresh_states(self, preferences: List[AlertPreference]) -> List[str]:
        """Refresh each distinct subscribed state once; the nationwide row is already fresh"""
        states: List[str] = []
        for preference in preferences:
            try:
                state_name = await self._state_for(preference)
            except HealthBotError as e:
                logger.error(f"Could not resolve state for {preference.phone_number}: {str(e)}")
                continue
            if state_name and state_name not in states:
                states.append(state_name)

        for state_name in states:
            try:
                await self.cache_service.refresh_outbreak_data(state_name)
            except HealthBotError as e:
                logger.error(f"Refresh before alerting failed for {state_name}: {str(e)}")
        return states

    async def _state_for(self, preference: AlertPreference) -> Optional[str]:
        if preference.selected_state_id is not None:
            state = await self.preferences.get_state(preference.selected_state_id)
            if state:
                return state.name
        if preference.state:
            state = await self.preferences.resolve_state(preference.state)
            if state:
                return state.name
        return None

    async def process_user(self, preference: AlertPreference, morning: bool = False) -> Dict[str, Any]:
        """Build and send one user's alert; raises on lookup or send failure"""
        state_name = await self._state_for(preference)
        result = await self.cache_service.get_outbreak_data(state_name)

        user = await self.store.get_user(preference.phone_number) or {}
        language = user.get("preferred_language", settings.DEFAULT_LANGUAGE)
        message = format_alert_message(
            result.diseases, state=state_name, district=preference.district, language=language, morning=morning
        )
        await self.whatsapp.send_message(preference.phone_number, message)

        sent_at = utcnow()
        record = {
            "phone_number": preference.phone_number,
            "state": state_name,
            "alert_type": "morning_summary" if morning else "outbreak_alert",
            "diseases": [disease.name for disease in result.diseases],
            "source": result.source,
            "sent_at": sent_at,
        }
        await self.store.insert_alert_history(record)
        await self.store.mark_alert_sent(preference.phone_number, sent_at)
        return record

    def register_jobs(self, scheduler: JobScheduler) -> JobScheduler:
        scheduler.add_job(ALERT_PROCESSING_JOB, settings.ALERT_PROCESSING_CRON, self.process_alerts,
                          "Refresh nationwide outbreaks and alert subscribers about new diseases")
        scheduler.add_job(AI_SCAN_JOB, settings.AI_SCAN_CRON, self.ai_scan,
                          "Refresh nationwide outbreak data")
        scheduler.add_job(MORNING_SUMMARY_JOB, settings.MORNING_SUMMARY_CRON, self.morning_summary,
                          "Daily outbreak summary for every subscriber")
        scheduler.add_job(CLEANUP_JOB, settings.CLEANUP_CRON, self.cleanup,
                          "Cache, disease ledger and alert history retention")
        return scheduler

