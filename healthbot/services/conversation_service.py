"""
Session states, intents and the default transition table of the conversation.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from healthbot.main.pydantic_models.models import InboundMessage
from healthbot.services.feedback_service import FEEDBACK_RATINGS
from healthbot.utils.language_utils import SUPPORTED_LANGUAGES
from healthbot.utils.logger import get_api_logger

logger = get_api_logger()


class SessionState(str, Enum):
    MAIN_MENU = "main_menu"
    LANGUAGE_SELECTION = "language_selection"
    AI_CHAT = "ai_chat"
    SYMPTOM_CHECK = "symptom_check"
    PREVENTIVE_TIPS = "preventive_tips"
    DISEASE_ALERTS = "disease_alerts"
    SELECTING_STATE = "selecting_state"
    CONFIRMING_ALERT_OFF = "confirming_alert_off"


class Intent(str, Enum):
    GREETING = "greeting"
    MENU = "menu"
    MORE_OPTIONS = "more_options"
    CHANGE_LANGUAGE = "change_language"
    SELECT_LANGUAGE = "select_language"
    CHAT_AI = "chat_ai"
    SYMPTOM_CHECK = "symptom_check"
    PREVENTIVE_TIPS = "preventive_tips"
    EMERGENCY = "emergency"
    DISEASE_ALERTS = "disease_alerts"
    VIEW_ACTIVE_DISEASES = "view_active_diseases"
    TURN_ON_ALERTS = "turn_on_alerts"
    SELECT_STATE = "select_state"
    STATE_NAME_INPUT = "state_name_input"
    ALERT_LOCATION_INPUT = "alert_location_input"
    TURN_OFF_ALERTS = "turn_off_alerts"
    CONFIRM_DELETE_ALERTS = "confirm_delete_alert_data"
    CONFIRM_DISABLE_ALERTS = "confirm_disable_alerts"
    STOP_ALERTS = "stop_alerts"
    FEEDBACK = "feedback"
    MEDIA = "media"
    GENERAL_MESSAGE = "general_message"


# Intent -> next session state. None keeps the current state.
TRANSITIONS: Dict[Intent, Optional[SessionState]] = {
    Intent.GREETING: SessionState.MAIN_MENU,
    Intent.MENU: SessionState.MAIN_MENU,
    Intent.MORE_OPTIONS: SessionState.MAIN_MENU,
    Intent.CHANGE_LANGUAGE: SessionState.LANGUAGE_SELECTION,
    Intent.SELECT_LANGUAGE: SessionState.MAIN_MENU,
    Intent.CHAT_AI: SessionState.AI_CHAT,
    Intent.SYMPTOM_CHECK: SessionState.SYMPTOM_CHECK,
    Intent.PREVENTIVE_TIPS: SessionState.PREVENTIVE_TIPS,
    Intent.EMERGENCY: SessionState.MAIN_MENU,
    Intent.DISEASE_ALERTS: SessionState.DISEASE_ALERTS,
    Intent.VIEW_ACTIVE_DISEASES: SessionState.DISEASE_ALERTS,
    Intent.TURN_ON_ALERTS: SessionState.SELECTING_STATE,
    Intent.SELECT_STATE: SessionState.MAIN_MENU,
    Intent.STATE_NAME_INPUT: SessionState.MAIN_MENU,
    Intent.ALERT_LOCATION_INPUT: SessionState.MAIN_MENU,
    Intent.TURN_OFF_ALERTS: SessionState.CONFIRMING_ALERT_OFF,
    Intent.CONFIRM_DELETE_ALERTS: SessionState.MAIN_MENU,
    Intent.CONFIRM_DISABLE_ALERTS: SessionState.MAIN_MENU,
    Intent.STOP_ALERTS: SessionState.MAIN_MENU,
    Intent.FEEDBACK: None,
    Intent.MEDIA: None,
    Intent.GENERAL_MESSAGE: None,
}

BUTTON_INTENTS = {
    "chat_ai": Intent.CHAT_AI,
    "symptom_check": Intent.SYMPTOM_CHECK,
    "preventive_tips": Intent.PREVENTIVE_TIPS,
    "disease_alerts": Intent.DISEASE_ALERTS,
    "emergency": Intent.EMERGENCY,
    "more_options": Intent.MORE_OPTIONS,
    "change_language": Intent.CHANGE_LANGUAGE,
    "back_to_menu": Intent.MENU,
    "main_menu": Intent.MENU,
    "view_active_diseases": Intent.VIEW_ACTIVE_DISEASES,
    "turn_on_alerts": Intent.TURN_ON_ALERTS,
    "turn_off_alerts": Intent.TURN_OFF_ALERTS,
    "confirm_delete_alert_data": Intent.CONFIRM_DELETE_ALERTS,
    "confirm_disable_alerts": Intent.CONFIRM_DISABLE_ALERTS,
}

TEXT_COMMANDS = {
    "hi": Intent.GREETING,
    "hello": Intent.GREETING,
    "hey": Intent.GREETING,
    "start": Intent.GREETING,
    "namaste": Intent.GREETING,
    "menu": Intent.MENU,
    "main menu": Intent.MENU,
    "back": Intent.MENU,
    "language": Intent.CHANGE_LANGUAGE,
    "change language": Intent.CHANGE_LANGUAGE,
    "emergency": Intent.EMERGENCY,
    "sos": Intent.EMERGENCY,
    "alerts": Intent.DISEASE_ALERTS,
    "stop alerts": Intent.STOP_ALERTS,
    "unsubscribe": Intent.STOP_ALERTS,
}

MEDIA_TYPES = ("image", "audio", "document")


@dataclass
class DetectedIntent:
    intent: Intent
    value: Optional[Any] = None


def _language_from_text(text: str) -> Optional[str]:
    lowered = text.strip().lower()
    for code, name in SUPPORTED_LANGUAGES.items():
        if lowered in (code, name.lower()):
            return code
    english_names = {"english": "en", "hindi": "hi", "telugu": "te", "tamil": "ta", "odia": "or", "oriya": "or"}
    return english_names.get(lowered)


def detect_intent(message: InboundMessage, state: SessionState) -> DetectedIntent:
    """
    Map an inbound message to an intent.

    Button and list ids win, then exact text commands, then the session
    state decides how free text is read.
    """
    content = (message.content or "").strip()

    if message.type in MEDIA_TYPES:
        return DetectedIntent(Intent.MEDIA, message.type)

    if message.type in ("button_reply", "list_reply"):
        if content.startswith("lang_"):
            return DetectedIntent(Intent.SELECT_LANGUAGE, content[len("lang_"):])
        if content.startswith("state_"):
            suffix = content[len("state_"):]
            if suffix.isdigit():
                return DetectedIntent(Intent.SELECT_STATE, int(suffix))
        if content in FEEDBACK_RATINGS:
            return DetectedIntent(Intent.FEEDBACK, FEEDBACK_RATINGS[content])
        if content in BUTTON_INTENTS:
            return DetectedIntent(BUTTON_INTENTS[content])
        logger.warning(f"Unknown interactive id '{content}' from {message.phone_number}")
        return DetectedIntent(Intent.MENU)

    command = " ".join(content.lower().split())
    if command in TEXT_COMMANDS:
        return DetectedIntent(TEXT_COMMANDS[command])

    if state == SessionState.LANGUAGE_SELECTION:
        language = _language_from_text(content)
        if language:
            return DetectedIntent(Intent.SELECT_LANGUAGE, language)

    if state == SessionState.SELECTING_STATE and content:
        if "," in content:
            return DetectedIntent(Intent.ALERT_LOCATION_INPUT, content)
        return DetectedIntent(Intent.STATE_NAME_INPUT, content)

    return DetectedIntent(Intent.GENERAL_MESSAGE, content)


def next_state(current: SessionState, intent: Intent, override: Optional[SessionState] = None) -> SessionState:
    if override is not None:
        return override
    target = TRANSITIONS.get(intent)
    return current if target is None else target


class ConversationService:
    """Reads and writes the per-user session state"""

    def __init__(self, store):
        self.store = store

    async def get_session(self, phone_number: str) -> Tuple[Optional[SessionState], Dict[str, Any]]:
        """The stored state and context. The state is None for a user with no session yet"""
        session = await self.store.get_session(phone_number)
        if not session:
            return None, {}
        context = session.get("context") or {}
        try:
            return SessionState(session.get("session_state")), context
        except ValueError:
            logger.warning(f"Unknown session state '{session.get('session_state')}' for {phone_number}")
            return SessionState.MAIN_MENU, context

    async def set_state(self, phone_number: str, state: SessionState, context: Optional[Dict[str, Any]] = None):
        await self.store.set_session(phone_number, state.value, context)
