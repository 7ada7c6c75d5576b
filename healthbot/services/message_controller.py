"""
Conversation router: loads the user's session, detects the intent of an
inbound message, runs the matching handler and stores the next state.
"""
import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from healthbot.main.core.llm_engine import GeminiClient
from healthbot.main.pydantic_models.models import InboundMessage
from healthbot.services.alert_preferences_service import AlertPreferencesService
from healthbot.services.conversation_service import (
    ConversationService,
    DetectedIntent,
    Intent,
    SessionState,
    detect_intent,
    next_state,
)
from healthbot.services.disease_formatter import format_location_aware_message, generate_prevention_summary
from healthbot.services.feedback_service import FeedbackService
from healthbot.services.outbreak_cache_service import OutbreakCacheService
from healthbot.services.outbreak_fetcher import static_fallback_diseases
from healthbot.services.user_service import UserService
from healthbot.utils.errors import DatabaseError, FetchFailed, NoDataAvailable, SendFailed
from healthbot.utils.language_utils import SUPPORTED_LANGUAGES, get_text
from healthbot.utils.settings import settings
from healthbot.utils.logger import get_api_logger

logger = get_api_logger()

STATE_PAGE_SIZE = 10

CHAT_MODES = {
    SessionState.AI_CHAT: "chat",
    SessionState.SYMPTOM_CHECK: "symptom_check",
    SessionState.PREVENTIVE_TIPS: "preventive_tips",
}

# Photos are sent to the model only from these menus
IMAGE_STATES = (SessionState.AI_CHAT, SessionState.SYMPTOM_CHECK)

# Session context kept while the user stays in a chat mode
CHAT_CONTEXT_KEYS = ("history", "last_answer", "last_mode")


@dataclass
class Turn:
    message: InboundMessage
    detected: DetectedIntent
    state: SessionState
    language: str
    is_new_user: bool
    context: Dict[str, Any] = field(default_factory=dict)

    @property
    def phone(self) -> str:
        return self.message.phone_number


class MessageController:

    def __init__(self, whatsapp, users: UserService, conversation: ConversationService,
                 preferences: AlertPreferencesService, outbreaks: OutbreakCacheService,
                 llm: Optional[GeminiClient] = None, feedback: Optional[FeedbackService] = None):
        self.whatsapp = whatsapp
        self.users = users
        self.conversation = conversation
        self.preferences = preferences
        self.outbreaks = outbreaks
        self.llm = llm or GeminiClient()
        self.feedback = feedback or FeedbackService(conversation.store)
        self._locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Dict[str, int] = {}

        self.handlers = {
            Intent.GREETING: self.handle_greeting,
            Intent.MENU: self.show_main_menu,
            Intent.MORE_OPTIONS: self.show_more_options,
            Intent.CHANGE_LANGUAGE: self.show_language_selection,
            Intent.SELECT_LANGUAGE: self.handle_language_selection,
            Intent.CHAT_AI: self.start_ai_chat,
            Intent.SYMPTOM_CHECK: self.start_symptom_check,
            Intent.PREVENTIVE_TIPS: self.start_preventive_tips,
            Intent.EMERGENCY: self.handle_emergency,
            Intent.DISEASE_ALERTS: self.show_disease_alerts_menu,
            Intent.VIEW_ACTIVE_DISEASES: self.view_active_diseases,
            Intent.TURN_ON_ALERTS: self.turn_on_alerts,
            Intent.SELECT_STATE: self.handle_state_selection,
            Intent.STATE_NAME_INPUT: self.handle_location_input,
            Intent.ALERT_LOCATION_INPUT: self.handle_location_input,
            Intent.TURN_OFF_ALERTS: self.turn_off_alerts,
            Intent.CONFIRM_DELETE_ALERTS: self.confirm_delete_alert_data,
            Intent.CONFIRM_DISABLE_ALERTS: self.confirm_disable_alerts,
            Intent.STOP_ALERTS: self.handle_stop_alerts,
            Intent.FEEDBACK: self.handle_feedback,
            Intent.MEDIA: self.handle_media,
            Intent.GENERAL_MESSAGE: self.handle_general_message,
        }

    @asynccontextmanager
    async def _phone_lock(self, phone_number: str):
        """Serialize work per phone number; the lock is dropped once nobody holds or waits on it"""
        lock = self._locks.setdefault(phone_number, asyncio.Lock())
        self._lock_users[phone_number] = self._lock_users.get(phone_number, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[phone_number] -= 1
            if not self._lock_users[phone_number]:
                del self._lock_users[phone_number]
                del self._locks[phone_number]

    async def _load_turn(self, message: InboundMessage) -> Turn:
        """
        Build the turn from the stored user and session. A store failure
        degrades to the main menu in the default language so the user still
        gets a reply.
        """
        language = settings.DEFAULT_LANGUAGE
        try:
            user = await self.users.get_or_create_user(message.phone_number)
            language = user.get("preferred_language", language)
        except DatabaseError as e:
            logger.error(f"Could not load user {message.phone_number}, using {language}: {str(e)}")

        try:
            stored_state, context = await self.conversation.get_session(message.phone_number)
            state = stored_state or SessionState.MAIN_MENU
            is_new_user = stored_state is None
        except DatabaseError as e:
            logger.error(f"Could not load session for {message.phone_number}, using main menu: {str(e)}")
            state, context, is_new_user = SessionState.MAIN_MENU, {}, False

        detected = detect_intent(message, state)
        if is_new_user and detected.intent == Intent.GENERAL_MESSAGE:
            detected = DetectedIntent(Intent.GREETING)
        return Turn(message=message, detected=detected, state=state, language=language,
                    is_new_user=is_new_user, context=context)

    async def handle_message(self, message: InboundMessage) -> SessionState:
        """Process one inbound message; deliveries for the same phone number run one at a time"""
        async with self._phone_lock(message.phone_number):
            await self.whatsapp.mark_as_read(message.message_id)

            turn = await self._load_turn(message)
            logger.info(f"{message.phone_number}: state={turn.state.value} intent={turn.detected.intent.value}")

            try:
                override = await self.handlers[turn.detected.intent](turn)
            except Exception as e:
                logger.error(f"Error handling {turn.detected.intent.value} for {message.phone_number}: {str(e)}")
                await self.send_error(turn)
                override = SessionState.MAIN_MENU

            new_state = next_state(turn.state, turn.detected.intent, override)
            if new_state not in CHAT_MODES:
                for key in CHAT_CONTEXT_KEYS:
                    turn.context.pop(key, None)
            try:
                await self.conversation.set_state(message.phone_number, new_state, turn.context)
            except DatabaseError as e:
                logger.error(f"Could not save session for {message.phone_number}: {str(e)}")
            return new_state

    # Reply helpers

    async def send_buttons(self, turn: Turn, text: str, button_ids: List[str]):
        buttons = [(button_id, get_text(f"btn_{button_id}", turn.language)) for button_id in button_ids]
        await self.whatsapp.send_interactive_buttons(turn.phone, text, buttons)

    async def send_error(self, turn: Turn):
        try:
            await self.whatsapp.send_message(turn.phone, get_text("error_message", turn.language))
        except SendFailed as e:
            logger.error(f"Could not send error message to {turn.phone}: {str(e)}")

    def remember_exchange(self, turn: Turn, user_text: str, reply: str, mode: str):
        history = turn.context.get("history") or []
        history.extend([{"role": "user", "text": user_text}, {"role": "assistant", "text": reply}])
        turn.context["history"] = history[-settings.CHAT_HISTORY_MESSAGES:]
        turn.context["last_answer"] = reply
        turn.context["last_mode"] = mode

    async def send_ai_reply(self, turn: Turn, user_text: str, reply: str, mode: str):
        """Send an AI answer followed by the 👍 / 👎 feedback buttons"""
        await self.whatsapp.send_message(turn.phone, reply)
        self.remember_exchange(turn, user_text, reply, mode)
        await self.send_buttons(turn, get_text("feedback_prompt", turn.language), ["feedback_good", "feedback_bad"])

    # Menus and language

    async def handle_greeting(self, turn: Turn) -> Optional[SessionState]:
        await self.whatsapp.send_message(turn.phone, get_text("welcome", turn.language))
        if turn.is_new_user:
            return await self.show_language_selection(turn)
        await self.show_main_menu(turn)
        return None

    async def show_main_menu(self, turn: Turn) -> Optional[SessionState]:
        rows = [
            {"id": item, "title": get_text(f"btn_{item}", turn.language)}
            for item in ("chat_ai", "symptom_check", "preventive_tips", "disease_alerts", "emergency", "change_language")
        ]
        await self.whatsapp.send_interactive_list(
            turn.phone,
            get_text("main_menu", turn.language),
            get_text("btn_open_menu", turn.language),
            [{"title": settings.BOT_NAME, "rows": rows}],
        )
        return None

    async def show_more_options(self, turn: Turn) -> Optional[SessionState]:
        await self.send_buttons(turn, get_text("more_options", turn.language),
                                ["emergency", "change_language", "back_to_menu"])
        return None

    async def show_language_selection(self, turn: Turn) -> Optional[SessionState]:
        rows = [{"id": f"lang_{code}", "title": name} for code, name in SUPPORTED_LANGUAGES.items()]
        await self.whatsapp.send_interactive_list(
            turn.phone, get_text("language_prompt", turn.language), get_text("btn_change_language", turn.language),
            [{"title": "Languages", "rows": rows}],
        )
        return SessionState.LANGUAGE_SELECTION

    async def handle_language_selection(self, turn: Turn) -> Optional[SessionState]:
        language = turn.detected.value
        if not await self.users.set_language(turn.phone, language):
            return await self.show_language_selection(turn)
        turn.language = language
        await self.whatsapp.send_message(turn.phone, get_text("language_changed", language))
        await self.show_main_menu(turn)
        return None

    # Assistant modes

    async def start_ai_chat(self, turn: Turn) -> Optional[SessionState]:
        await self.whatsapp.send_message(turn.phone, get_text("ai_chat_prompt", turn.language))
        return None

    async def start_symptom_check(self, turn: Turn) -> Optional[SessionState]:
        await self.whatsapp.send_message(turn.phone, get_text("symptom_check_prompt", turn.language))
        return None

    async def start_preventive_tips(self, turn: Turn) -> Optional[SessionState]:
        await self.whatsapp.send_message(turn.phone, get_text("preventive_tips_prompt", turn.language))
        return None

    async def handle_emergency(self, turn: Turn) -> Optional[SessionState]:
        await self.send_buttons(turn, get_text("emergency", turn.language, number=settings.EMERGENCY_NUMBER),
                                ["back_to_menu"])
        return None

    async def handle_general_message(self, turn: Turn) -> Optional[SessionState]:
        """Free text goes to the AI in the mode of the current menu"""
        mode = CHAT_MODES.get(turn.state, "chat")
        content = turn.message.content
        try:
            reply = await self.llm.chat(content, language=turn.language, mode=mode, history=turn.context.get("history"))
        except FetchFailed as e:
            logger.error(f"AI reply failed for {turn.phone}: {str(e)}")
            await self.whatsapp.send_message(turn.phone, get_text("ai_unavailable", turn.language))
            reply = None

        if turn.state not in CHAT_MODES:
            if reply is not None:
                await self.whatsapp.send_message(turn.phone, reply)
                self.remember_exchange(turn, content, reply, mode)
            await self.send_buttons(turn, get_text("main_menu", turn.language), ["chat_ai", "disease_alerts", "back_to_menu"])
            return SessionState.AI_CHAT
        if reply is not None:
            await self.send_ai_reply(turn, content, reply, mode)
        return None

    async def handle_media(self, turn: Turn) -> Optional[SessionState]:
        """Photos sent in AI chat or symptom check are analyzed; anything else is acknowledged"""
        media = turn.message.media_data
        if turn.detected.value != "image" or media is None or turn.state not in IMAGE_STATES:
            await self.whatsapp.send_message(turn.phone, get_text("media_received", turn.language))
            return None

        mode = CHAT_MODES[turn.state]
        caption = turn.message.content
        try:
            image = await self.whatsapp.download_media(media.id)
            reply = await self.llm.analyze_image(image, mime_type=media.mime_type, description=caption,
                                                 language=turn.language, mode=mode)
        except (SendFailed, FetchFailed) as e:
            logger.error(f"Image analysis failed for {turn.phone}: {str(e)}")
            await self.whatsapp.send_message(turn.phone, get_text("ai_unavailable", turn.language))
            return None

        await self.send_ai_reply(turn, f"[photo] {caption}".strip(), reply, mode)
        return None

    async def handle_feedback(self, turn: Turn) -> Optional[SessionState]:
        feature = turn.context.get("last_mode") or CHAT_MODES.get(turn.state)
        await self.feedback.save_feedback(turn.phone, turn.detected.value, feature_used=feature,
                                          answer=turn.context.get("last_answer"))
        await self.whatsapp.send_message(turn.phone, get_text("feedback_thanks", turn.language))
        return None

    # Disease alerts

    async def show_disease_alerts_menu(self, turn: Turn) -> Optional[SessionState]:
        await self.send_buttons(turn, get_text("disease_alerts_menu", turn.language),
                                ["view_active_diseases", "turn_on_alerts", "turn_off_alerts"])
        return None

    async def view_active_diseases(self, turn: Turn) -> Optional[SessionState]:
        """
        Outbreaks for the user's registered state, or nationwide. Falls back to
        the built-in disease list when no data exists, and to an apology plus
        general tips if even that cannot be produced.
        """
        preference = await self.preferences.get_preference(turn.phone)
        state = await self.preferences.get_user_selected_state(turn.phone)
        state_name = state.name if state else None
        district = preference.district if preference else None

        try:
            try:
                result = await self.outbreaks.get_outbreak_data(state_name)
                diseases = result.diseases
                logger.info(f"Outbreak data for {turn.phone} from {result.source}")
            except NoDataAvailable as e:
                logger.warning(f"No outbreak data for {state_name or 'nationwide'}, showing built-in list: {str(e)}")
                diseases = static_fallback_diseases()

            message = format_location_aware_message(diseases, state=state_name, district=district, language=turn.language)
            prevention = generate_prevention_summary(diseases, turn.language)
        except Exception as e:
            logger.error(f"Failed to build outbreak message for {turn.phone}: {str(e)}")
            await self.whatsapp.send_message(turn.phone, get_text("apology", turn.language))
            await self.whatsapp.send_message(turn.phone, get_text("general_prevention_tips", turn.language))
            return None

        await self.whatsapp.send_message(turn.phone, message)
        await self.send_buttons(turn, prevention, ["turn_on_alerts", "back_to_menu"])
        return None

    async def turn_on_alerts(self, turn: Turn) -> Optional[SessionState]:
        if await self.preferences.is_registered(turn.phone):
            state = await self.preferences.get_user_selected_state(turn.phone)
            await self.send_buttons(turn, get_text("already_registered", turn.language, state=state.name),
                                    ["view_active_diseases", "turn_off_alerts", "back_to_menu"])
            return SessionState.DISEASE_ALERTS

        await self.send_state_list(turn)
        return None

    async def send_state_list(self, turn: Turn):
        states = await self.preferences.search_states()
        pages = [states[i:i + STATE_PAGE_SIZE] for i in range(0, len(states), STATE_PAGE_SIZE)]
        for number, page in enumerate(pages, start=1):
            rows = [{"id": f"state_{state.id}", "title": state.name, "description": state.region} for state in page]
            text = get_text("select_state", turn.language) if number == 1 else f"({number}/{len(pages)})"
            await self.whatsapp.send_interactive_list(
                turn.phone, text, get_text("btn_choose_state", turn.language),
                [{"title": f"{page[0].name[:10]} - {page[-1].name[:10]}", "rows": rows}],
            )

    async def handle_state_selection(self, turn: Turn) -> Optional[SessionState]:
        preference = await self.preferences.register_state(turn.phone, turn.detected.value)
        if preference is None:
            await self.whatsapp.send_message(
                turn.phone, get_text("state_not_found", turn.language, state=str(turn.detected.value))
            )
            return SessionState.SELECTING_STATE
        await self._confirm_registration(turn, preference.state)
        return None

    async def handle_location_input(self, turn: Turn) -> Optional[SessionState]:
        """Typed 'State' or 'State, District, Pincode'"""
        text = turn.detected.value
        preference = await self.preferences.register_location(turn.phone, text)
        if preference is None:
            typed_state = text.split(",")[0].strip()
            await self.whatsapp.send_message(turn.phone, get_text("state_not_found", turn.language, state=typed_state))
            return turn.state
        location = ", ".join(part for part in (preference.state, preference.district, preference.pincode) if part)
        await self._confirm_registration(turn, location)
        return None

    async def _confirm_registration(self, turn: Turn, location: str):
        await self.send_buttons(turn, get_text("alerts_registered", turn.language, location=location),
                                ["view_active_diseases", "back_to_menu"])

    async def turn_off_alerts(self, turn: Turn) -> Optional[SessionState]:
        preference = await self.preferences.get_preference(turn.phone)
        if preference is None:
            await self.send_buttons(turn, get_text("not_registered", turn.language), ["turn_on_alerts", "back_to_menu"])
            return SessionState.DISEASE_ALERTS
        await self.send_buttons(turn, get_text("turn_off_confirm", turn.language),
                                ["confirm_disable_alerts", "confirm_delete_alert_data", "back_to_menu"])
        return None

    async def confirm_delete_alert_data(self, turn: Turn) -> Optional[SessionState]:
        deleted = await self.preferences.delete_alert_data(turn.phone)
        key = "alerts_deleted" if deleted else "not_registered"
        await self.send_buttons(turn, get_text(key, turn.language), ["back_to_menu"])
        return None

    async def confirm_disable_alerts(self, turn: Turn) -> Optional[SessionState]:
        disabled = await self.preferences.disable_alerts(turn.phone)
        key = "alerts_disabled" if disabled else "not_registered"
        await self.send_buttons(turn, get_text(key, turn.language), ["turn_on_alerts", "back_to_menu"])
        return None

    async def handle_stop_alerts(self, turn: Turn) -> Optional[SessionState]:
        """STOP ALERTS / unsubscribe text command: pause without asking"""
        disabled = await self.preferences.disable_alerts(turn.phone)
        key = "alerts_disabled" if disabled else "not_registered"
        await self.whatsapp.send_message(turn.phone, get_text(key, turn.language))
        return None
