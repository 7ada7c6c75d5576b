from healthbot.utils.gen_utils import days_ago
from healthbot.utils.settings import settings
from healthbot.utils.logger import get_scheduler_logger

logger = get_scheduler_logger()


async def cleanup_outbreak_cache(cache_service, days_to_keep=None):
    """
    Remove outbreak cache rows older than the retention window

    Returns:
        Number of rows removed
    """
    return await cache_service.cleanup_old_cache(days_to_keep)


async def deactivate_stale_diseases(store, max_age_days=None, now=None):
    """Mark diseases not reported within max_age_days as inactive"""
    cutoff = days_ago(settings.DISEASE_INACTIVE_DAYS if max_age_days is None else max_age_days, now)
    count = await store.deactivate_diseases_before(cutoff)
    logger.info(f"Marked {count} diseases inactive (not seen since {cutoff:%Y-%m-%d})")
    return count


async def cleanup_alert_history(store, max_age_days=None, now=None):
    cutoff = days_ago(settings.ALERT_HISTORY_RETENTION_DAYS if max_age_days is None else max_age_days, now)
    count = await store.delete_alert_history_before(cutoff)
    logger.info(f"Removed {count} alert history rows older than {cutoff:%Y-%m-%d}")
    return count


async def run_maintenance_tasks(store, cache_service, now=None):
    """Run all maintenance tasks"""
    logger.info("Running maintenance tasks")

    result = {
        "cache_entries_removed": await cleanup_outbreak_cache(cache_service),
        "diseases_deactivated": await deactivate_stale_diseases(store, now=now),
        "alert_history_removed": await cleanup_alert_history(store, now=now),
    }

    logger.info(f"Maintenance tasks completed: {result}")
    return result
