from typing import Any, Dict

from healthbot.utils.language_utils import SUPPORTED_LANGUAGES
from healthbot.utils.settings import settings
from healthbot.utils.logger import get_db_logger

logger = get_db_logger()


class UserService:
    def __init__(self, store):
        self.store = store

    async def get_or_create_user(self, phone_number: str) -> Dict[str, Any]:
        """Load the user, creating it with the default language on first contact"""
        user = await self.store.get_or_create_user(phone_number, settings.DEFAULT_LANGUAGE)
        if user.get("created_at") == user.get("last_active_at"):
            logger.info(f"New user {phone_number}")
        return user

    async def set_language(self, phone_number: str, language: str) -> bool:
        if language not in SUPPORTED_LANGUAGES:
            logger.warning(f"Unsupported language '{language}' for {phone_number}")
            return False
        await self.store.update_user(phone_number, {"preferred_language": language})
        return True
