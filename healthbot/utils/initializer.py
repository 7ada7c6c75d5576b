from contextlib import asynccontextmanager

from fastapi import FastAPI

from healthbot.main.core.llm_engine import GeminiClient
from healthbot.services.alert_dispatcher import AlertDispatcher
from healthbot.services.alert_preferences_service import AlertPreferencesService
from healthbot.services.conversation_service import ConversationService
from healthbot.services.feedback_service import FeedbackService
from healthbot.services.message_controller import MessageController
from healthbot.services.outbreak_cache_service import OutbreakCacheService
from healthbot.services.outbreak_fetcher import OutbreakFetcher
from healthbot.services.user_service import UserService
from healthbot.services.whatsapp_service import MockWhatsAppService, WhatsAppService
from healthbot.utils.db_manager import DatabaseManager
from healthbot.utils.indian_states import INDIAN_STATES
from healthbot.utils.memory_store import InMemoryStore
from healthbot.utils.registry import registry
from healthbot.utils.scheduler import JobScheduler
from healthbot.utils.settings import settings
from healthbot.utils.logger import get_server_logger

logger = get_server_logger()


def create_store():
    if settings.STORAGE_BACKEND == "memory":
        return InMemoryStore()
    return DatabaseManager()


def create_whatsapp_service():
    if settings.MOCK_WHATSAPP:
        logger.info("MOCK_WHATSAPP enabled, outbound messages are recorded only")
        return MockWhatsAppService()
    if not (settings.WHATSAPP_ACCESS_TOKEN and settings.WHATSAPP_PHONE_NUMBER_ID):
        logger.warning("WhatsApp credentials missing, outbound messages will fail")
    return WhatsAppService()


async def initialize_store(store=None):
    """Connect the store and seed the canonical state list if it is missing"""
    if registry.has("store"):
        return registry.get("store")

    store = store or create_store()
    await store.connect_with_retry()
    inserted = await store.seed_states(INDIAN_STATES)
    if inserted:
        logger.info(f"Seeded {inserted} canonical states")
    registry.set("store", store)
    return store


def build_services(store, whatsapp=None, llm=None, scheduler=None):
    """
    Wire every long-lived service and put it in the registry.
    Collaborators can be passed in to replace the configured ones.
    """
    whatsapp = whatsapp or create_whatsapp_service()
    llm = llm or GeminiClient()

    fetcher = OutbreakFetcher(llm)
    cache_service = OutbreakCacheService(store, fetcher)
    preferences = AlertPreferencesService(store)
    users = UserService(store)
    conversation = ConversationService(store)
    feedback = FeedbackService(store)
    controller = MessageController(whatsapp, users, conversation, preferences, cache_service, llm, feedback)
    dispatcher = AlertDispatcher(store, fetcher, cache_service, preferences, whatsapp)
    scheduler = dispatcher.register_jobs(scheduler or JobScheduler())

    services = {
        "whatsapp": whatsapp,
        "llm": llm,
        "outbreak_fetcher": fetcher,
        "outbreak_cache": cache_service,
        "alert_preferences": preferences,
        "users": users,
        "conversation": conversation,
        "feedback": feedback,
        "message_controller": controller,
        "alert_dispatcher": dispatcher,
        "scheduler": scheduler,
    }
    for key, service in services.items():
        registry.set(key, service)
    logger.info(f"Registered services: {', '.join(services)}")
    return services


async def initialize_system(store=None, whatsapp=None, llm=None, start_scheduler=None):
    """Initialize the system once per process"""
    if registry.has("system_initialized"):
        logger.info("System already initialized, skipping initialization")
        return

    logger.info("Starting system initialization")
    store = await initialize_store(store)
    services = build_services(store, whatsapp=whatsapp, llm=llm)

    if start_scheduler is None:
        start_scheduler = settings.SCHEDULER_ENABLED
    if start_scheduler:
        await services["scheduler"].start()
    else:
        logger.info("Scheduler disabled")

    registry.set("system_initialized", True)
    logger.info("System initialization complete")


async def shutdown_system():
    if registry.has("scheduler"):
        await registry.get("scheduler").stop()

    if registry.has("whatsapp"):
        await registry.get("whatsapp").close()

    if registry.has("store"):
        await registry.get("store").close()

    registry.clear()
    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI):
    await initialize_system()
    try:
        yield
    finally:
        await shutdown_system()
