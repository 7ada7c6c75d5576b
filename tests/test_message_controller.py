import asyncio
from datetime import datetime, timezone
from itertools import count

import pytest

from conftest import Clock, StubFetcher, StubLLM, run
from healthbot.main.pydantic_models.models import InboundMessage, MediaData
from healthbot.services.alert_preferences_service import AlertPreferencesService
from healthbot.services.conversation_service import (
    ConversationService,
    Intent,
    SessionState,
    detect_intent,
)
from healthbot.services.message_controller import MessageController
from healthbot.services.outbreak_cache_service import STATE, OutbreakCacheService
from healthbot.services.user_service import UserService
from healthbot.utils.errors import DatabaseError, FetchFailed, SendFailed
from healthbot.utils.language_utils import get_text
from healthbot.utils.settings import settings

PHONE = "919812345678"
_ids = count(1)


def message(content="", type="text", phone=PHONE, media=None):
    return InboundMessage(
        phone_number=phone,
        message_id=f"wamid.{next(_ids)}",
        content=content,
        type=type,
        timestamp=datetime.now(timezone.utc),
        media_data=media,
    )


def button(button_id, phone=PHONE):
    return message(button_id, type="button_reply", phone=phone)


class Bot:
    def __init__(self, store, whatsapp, fetcher=None, llm=None):
        self.store = store
        self.whatsapp = whatsapp
        self.fetcher = fetcher or StubFetcher()
        self.llm = llm or StubLLM()
        self.cache = OutbreakCacheService(store, self.fetcher, clock=Clock(), retention_days=7)
        self.preferences = AlertPreferencesService(store)
        self.controller = MessageController(
            whatsapp, UserService(store), ConversationService(store), self.preferences, self.cache, self.llm
        )

    def send(self, inbound):
        return run(self.controller.handle_message(inbound))

    def existing_user(self, phone=PHONE, state="main_menu", language="en"):
        run(self.store.get_or_create_user(phone, language))
        run(self.store.set_session(phone, state))

    def texts(self, phone=PHONE):
        return [entry["text"] for entry in self.whatsapp.messages_to(phone)]

    def last(self, phone=PHONE):
        return self.whatsapp.messages_to(phone)[-1]


@pytest.fixture
def bot(store, whatsapp):
    return Bot(store, whatsapp)


# Intent detection

@pytest.mark.parametrize("inbound, state, intent, value", [
    (button("lang_te"), SessionState.LANGUAGE_SELECTION, Intent.SELECT_LANGUAGE, "te"),
    (message("state_14", type="list_reply"), SessionState.SELECTING_STATE, Intent.SELECT_STATE, 14),
    (button("turn_off_alerts"), SessionState.DISEASE_ALERTS, Intent.TURN_OFF_ALERTS, None),
    (button("no_such_button"), SessionState.AI_CHAT, Intent.MENU, None),
    (button("feedback_good"), SessionState.AI_CHAT, Intent.FEEDBACK, 5),
    (button("feedback_bad"), SessionState.SYMPTOM_CHECK, Intent.FEEDBACK, 1),
    (message("  STOP   Alerts "), SessionState.AI_CHAT, Intent.STOP_ALERTS, None),
    (message("Hindi"), SessionState.LANGUAGE_SELECTION, Intent.SELECT_LANGUAGE, "hi"),
    (message("Kerala"), SessionState.SELECTING_STATE, Intent.STATE_NAME_INPUT, "Kerala"),
    (message("Kerala, Kochi"), SessionState.SELECTING_STATE, Intent.ALERT_LOCATION_INPUT, "Kerala, Kochi"),
    (message("Kerala"), SessionState.AI_CHAT, Intent.GENERAL_MESSAGE, "Kerala"),
    (message(type="image", media=MediaData(id="m1")), SessionState.MAIN_MENU, Intent.MEDIA, "image"),
])
def test_detect_intent(inbound, state, intent, value):
    detected = detect_intent(inbound, state)
    assert detected.intent == intent
    assert detected.value == value


# Greeting and language

def test_new_user_gets_welcome_and_language_list(bot):
    state = bot.send(message("hi"))

    assert state == SessionState.LANGUAGE_SELECTION
    sent = bot.whatsapp.messages_to(PHONE)
    assert sent[0]["text"] == get_text("welcome", "en")
    assert sent[1]["type"] == "list"
    assert [row["id"] for row in sent[1]["rows"]] == ["lang_en", "lang_hi", "lang_te", "lang_ta", "lang_or"]
    assert bot.whatsapp.read


def test_first_free_text_is_treated_as_greeting(bot):
    state = bot.send(message("what is dengue?"))
    assert state == SessionState.LANGUAGE_SELECTION
    assert bot.llm.chats == []


def test_language_selection_switches_language(bot):
    bot.send(message("hi"))
    state = bot.send(button("lang_hi"))

    assert state == SessionState.MAIN_MENU
    assert run(bot.store.get_user(PHONE))["preferred_language"] == "hi"
    assert get_text("language_changed", "hi") in bot.texts()
    assert bot.last()["type"] == "list"
    assert bot.last()["text"] == get_text("main_menu", "hi")


def test_returning_user_greeting_shows_menu(bot):
    bot.existing_user()
    state = bot.send(message("hello"))
    assert state == SessionState.MAIN_MENU
    assert bot.last()["type"] == "list"


# AI chat modes

def test_symptom_check_routes_free_text_with_mode(bot):
    bot.existing_user(language="ta")
    assert bot.send(button("symptom_check")) == SessionState.SYMPTOM_CHECK

    state = bot.send(message("fever for three days"))

    assert state == SessionState.SYMPTOM_CHECK
    assert bot.llm.chats == [("fever for three days", "ta", "symptom_check")]
    assert bot.texts()[-2] == bot.llm.chat_reply
    assert bot.last()["text"] == get_text("feedback_prompt", "ta")
    assert [b["id"] for b in bot.last()["buttons"]] == ["feedback_good", "feedback_bad"]


def test_chat_keeps_recent_turns_as_context(bot):
    bot.existing_user(state="ai_chat")

    bot.send(message("I have a sore throat"))
    bot.send(message("should I take antibiotics?"))

    assert bot.llm.histories[0] == []
    assert bot.llm.histories[1] == [
        {"role": "user", "text": "I have a sore throat"},
        {"role": "assistant", "text": bot.llm.chat_reply},
    ]


def test_chat_context_is_trimmed_to_recent_messages(bot, monkeypatch):
    monkeypatch.setattr(settings, "CHAT_HISTORY_MESSAGES", 4)
    bot.existing_user(state="ai_chat")

    for i in range(4):
        bot.send(message(f"question {i}"))

    assert len(bot.llm.histories[-1]) == 4
    assert bot.llm.histories[-1][0] == {"role": "user", "text": "question 1"}


def test_leaving_chat_clears_context(bot):
    bot.existing_user(state="ai_chat")
    bot.send(message("I have a sore throat"))
    bot.send(message("menu"))
    bot.send(button("chat_ai"))

    bot.send(message("what about a cough?"))

    assert bot.llm.histories[-1] == []
    assert run(bot.store.get_session(PHONE))["context"]["history"][0]["text"] == "what about a cough?"


def test_thumbs_up_is_saved_with_answer_and_mode(bot):
    bot.existing_user(state="symptom_check")
    bot.send(message("fever for three days"))

    state = bot.send(button("feedback_good"))

    assert state == SessionState.SYMPTOM_CHECK
    assert bot.last()["text"] == get_text("feedback_thanks", "en")
    [row] = bot.store.feedback
    assert row["phone_number"] == PHONE
    assert row["rating"] == 5
    assert row["accuracy_category"] == "helpful"
    assert row["feature_used"] == "symptom_check"
    assert row["answer"] == bot.llm.chat_reply


def test_thumbs_down_counts_in_stats(bot):
    bot.existing_user(state="ai_chat")
    bot.send(message("is tap water safe?"))
    bot.send(button("feedback_bad"))

    stats = run(bot.controller.feedback.get_feedback_stats(7))

    assert stats["total_feedback"] == 1
    assert stats["average_rating"] == 1
    assert stats["accuracy_breakdown"]["not_helpful"] == 1
    assert stats["feature_breakdown"] == {"chat": 1}


def test_ai_failure_sends_unavailable_message(store, whatsapp):
    bot = Bot(store, whatsapp, llm=StubLLM(chat_reply=FetchFailed("quota")))
    bot.existing_user(state="ai_chat")

    bot.send(message("is it safe to drink tap water?"))

    assert bot.last()["text"] == get_text("ai_unavailable", "en")


def test_free_text_from_menu_moves_into_chat(bot):
    bot.existing_user()
    state = bot.send(message("how do I treat a cold?"))
    assert state == SessionState.AI_CHAT
    assert bot.llm.chats[0][2] == "chat"


def test_emergency_shows_number(bot):
    bot.existing_user(state="ai_chat")
    assert bot.send(message("sos")) == SessionState.MAIN_MENU
    assert "108" in bot.last()["text"]


def test_photo_in_symptom_check_is_analyzed(bot):
    bot.existing_user(state="symptom_check", language="hi")
    photo = message("itchy rash on my arm", type="image", media=MediaData(id="m1", mime_type="image/png"))

    state = bot.send(photo)

    assert state == SessionState.SYMPTOM_CHECK
    assert bot.llm.images == [(b"mock-media:m1", "image/png", "itchy rash on my arm", "hi", "symptom_check")]
    assert bot.texts()[-2] == bot.llm.image_reply
    assert [b["id"] for b in bot.last()["buttons"]] == ["feedback_good", "feedback_bad"]


def test_photo_download_failure_sends_unavailable_message(bot, monkeypatch):
    bot.existing_user(state="ai_chat")

    async def broken_download(media_id):
        raise SendFailed("media expired")

    monkeypatch.setattr(bot.whatsapp, "download_media", broken_download)
    state = bot.send(message(type="image", media=MediaData(id="m1")))

    assert state == SessionState.AI_CHAT
    assert bot.llm.images == []
    assert bot.last()["text"] == get_text("ai_unavailable", "en")


@pytest.mark.parametrize("state, media_type", [("main_menu", "image"), ("symptom_check", "audio")])
def test_other_media_is_acknowledged(bot, state, media_type):
    bot.existing_user(state=state)
    new_state = bot.send(message(type=media_type, media=MediaData(id="m1")))
    assert new_state == SessionState(state)
    assert bot.llm.images == []
    assert bot.last()["text"] == get_text("media_received", "en")


# Disease alerts

def test_registered_user_views_diseases_from_cache_on_second_call(bot):
    bot.existing_user(state="disease_alerts")
    run(bot.preferences.register_state(PHONE, 14))

    bot.send(button("view_active_diseases"))
    first = bot.texts()[-2]
    bot.send(button("view_active_diseases"))
    second = bot.texts()[-2]

    assert bot.fetcher.calls == ["Maharashtra"]
    assert (STATE, "Maharashtra", "2026-10-18") in bot.store.cache
    assert first == second
    assert "Maharashtra" in first


def test_view_diseases_with_failing_fetcher_shows_built_in_list(store, whatsapp):
    bot = Bot(store, whatsapp, fetcher=StubFetcher(FetchFailed("always down")))
    bot.existing_user(state="disease_alerts")

    state = bot.send(button("view_active_diseases"))

    assert state == SessionState.DISEASE_ALERTS
    overview = bot.texts()[-2]
    assert "*Dengue*" in overview
    assert "*Seasonal Flu*" in overview


def test_view_diseases_total_failure_sends_apology_and_tips(store, whatsapp, monkeypatch):
    bot = Bot(store, whatsapp)
    bot.existing_user(state="disease_alerts")

    def broken(*args, **kwargs):
        raise RuntimeError("formatter exploded")

    monkeypatch.setattr("healthbot.services.message_controller.format_location_aware_message", broken)
    bot.send(button("view_active_diseases"))

    assert bot.texts()[-2:] == [get_text("apology", "en"), get_text("general_prevention_tips", "en")]


def test_turn_on_alerts_lists_all_states(bot):
    bot.existing_user(state="disease_alerts")
    state = bot.send(button("turn_on_alerts"))

    assert state == SessionState.SELECTING_STATE
    lists = [entry for entry in bot.whatsapp.messages_to(PHONE) if entry["type"] == "list"]
    assert len(lists) == 4
    assert sum(len(entry["rows"]) for entry in lists) == 36


def test_state_selection_registers(bot):
    bot.existing_user(state="selecting_state")
    state = bot.send(message("state_24", type="list_reply"))

    assert state == SessionState.MAIN_MENU
    preference = run(bot.preferences.get_preference(PHONE))
    assert preference.state == "Telangana"
    assert bot.last()["text"] == get_text("alerts_registered", "en", location="Telangana")


def test_typed_location_registers_district(bot):
    bot.existing_user(state="selecting_state")
    bot.send(message("telangana, Hyderabad, 500001"))

    preference = run(bot.preferences.get_preference(PHONE))
    assert (preference.state, preference.district, preference.pincode) == ("Telangana", "Hyderabad", "500001")


def test_unknown_typed_state_asks_again(bot):
    bot.existing_user(state="selecting_state")
    state = bot.send(message("Atlantis"))

    assert state == SessionState.SELECTING_STATE
    assert bot.last()["text"] == get_text("state_not_found", "en", state="Atlantis")


def test_turn_on_when_already_registered(bot):
    bot.existing_user(state="disease_alerts")
    run(bot.preferences.register_state(PHONE, 12))

    state = bot.send(button("turn_on_alerts"))

    assert state == SessionState.DISEASE_ALERTS
    assert bot.last()["text"] == get_text("already_registered", "en", state="Kerala")


def test_delete_then_turn_on_is_not_already_registered(bot):
    bot.existing_user(state="disease_alerts")
    run(bot.preferences.register_state(PHONE, 12))

    assert bot.send(button("turn_off_alerts")) == SessionState.CONFIRMING_ALERT_OFF
    assert [b["id"] for b in bot.last()["buttons"]] == ["confirm_disable_alerts", "confirm_delete_alert_data", "back_to_menu"]
    bot.send(button("confirm_delete_alert_data"))
    assert PHONE not in bot.store.preferences

    state = bot.send(button("turn_on_alerts"))

    assert state == SessionState.SELECTING_STATE
    assert get_text("already_registered", "en", state="Kerala") not in bot.texts()


def test_confirm_disable_keeps_row(bot):
    bot.existing_user(state="confirming_alert_off")
    run(bot.preferences.register_state(PHONE, 12))

    bot.send(button("confirm_disable_alerts"))

    assert bot.store.preferences[PHONE]["alert_enabled"] is False


def test_stop_alerts_command_disables_without_confirmation(bot):
    bot.existing_user(state="ai_chat")
    run(bot.preferences.register_state(PHONE, 12))

    state = bot.send(message("STOP ALERTS"))

    assert state == SessionState.MAIN_MENU
    assert bot.store.preferences[PHONE]["alert_enabled"] is False
    assert bot.last()["text"] == get_text("alerts_disabled", "en")


def test_turn_off_without_registration(bot):
    bot.existing_user(state="disease_alerts")
    state = bot.send(button("turn_off_alerts"))
    assert state == SessionState.DISEASE_ALERTS
    assert bot.last()["text"] == get_text("not_registered", "en")


# Failures and concurrency

def test_handler_error_sends_generic_message_and_resets(bot):
    bot.existing_user(state="disease_alerts")

    async def broken(turn):
        raise RuntimeError("boom")

    bot.controller.handlers[Intent.TURN_ON_ALERTS] = broken
    state = bot.send(button("turn_on_alerts"))

    assert state == SessionState.MAIN_MENU
    assert bot.last()["text"] == get_text("error_message", "en")
    assert run(bot.store.get_session(PHONE))["session_state"] == "main_menu"


class SlowLLM(StubLLM):
    def __init__(self):
        super().__init__()
        self.active = 0
        self.peak = 0

    async def chat(self, user_message, language="en", mode="chat", history=None):
        self.active += 1
        self.peak = max(self.peak, self.active)
        await asyncio.sleep(0.01)
        self.active -= 1
        return "ok"


def test_messages_from_one_user_are_handled_one_at_a_time(store, whatsapp):
    llm = SlowLLM()
    bot = Bot(store, whatsapp, llm=llm)
    bot.existing_user(state="ai_chat")

    async def burst():
        await asyncio.gather(*(bot.controller.handle_message(message(f"q{i}")) for i in range(3)))

    run(burst())
    assert llm.peak == 1


def test_different_users_are_handled_concurrently(store, whatsapp):
    llm = SlowLLM()
    bot = Bot(store, whatsapp, llm=llm)
    phones = ["911111111111", "912222222222"]
    for phone in phones:
        bot.existing_user(phone=phone, state="ai_chat")

    async def burst():
        await asyncio.gather(*(bot.controller.handle_message(message("q", phone=phone)) for phone in phones))

    run(burst())
    assert llm.peak == 2


def test_locks_are_released_after_handling(store, whatsapp):
    bot = Bot(store, whatsapp, llm=SlowLLM())
    bot.existing_user(state="ai_chat")

    async def burst():
        await asyncio.gather(*(bot.controller.handle_message(message(f"q{i}")) for i in range(3)))

    run(burst())
    bot.send(message("one more"))

    assert bot.controller._locks == {}
    assert bot.controller._lock_users == {}


# Store outages

def test_session_store_outage_still_replies_from_main_menu(bot, monkeypatch):
    bot.existing_user(state="selecting_state", language="hi")

    async def broken(*args, **kwargs):
        raise DatabaseError("connection refused")

    monkeypatch.setattr(bot.store, "get_session", broken)
    monkeypatch.setattr(bot.store, "set_session", broken)

    state = bot.send(message("hi"))

    assert state == SessionState.MAIN_MENU
    sent = bot.whatsapp.messages_to(PHONE)
    assert sent[0]["text"] == get_text("welcome", "hi")
    assert sent[-1]["type"] == "list"


def test_user_store_outage_uses_default_language(bot, monkeypatch):
    bot.existing_user(state="main_menu", language="ta")

    async def broken(*args, **kwargs):
        raise DatabaseError("connection refused")

    monkeypatch.setattr(bot.store, "get_or_create_user", broken)

    state = bot.send(message("menu"))

    assert state == SessionState.MAIN_MENU
    assert bot.last()["text"] == get_text("main_menu", "en")
