import asyncio
import json
import os
import tempfile
from datetime import date

# Configure before any healthbot module builds its settings or log handlers
os.environ.setdefault("HEALTHBOT_LOGS_DIR", tempfile.mkdtemp(prefix="healthbot-logs-"))
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["MOCK_WHATSAPP"] = "true"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["ALERT_SEND_DELAY_SECONDS"] = "0"
os.environ["GEMINI_RETRY_DELAY_SECONDS"] = "0"
os.environ["WHATSAPP_VERIFY_TOKEN"] = "verify-me"
os.environ["WHATSAPP_APP_SECRET"] = ""
os.environ["ADMIN_API_KEY"] = ""
os.environ["GEMINI_API_KEY"] = ""

import pytest

from healthbot.main.pydantic_models.models import FetchResult
from healthbot.services.outbreak_fetcher import static_fallback_diseases
from healthbot.services.whatsapp_service import MockWhatsAppService
from healthbot.utils.errors import FetchFailed
from healthbot.utils.indian_states import INDIAN_STATES
from healthbot.utils.memory_store import InMemoryStore

TODAY = date(2026, 10, 18)


def disease(name, state="Telangana", districts=None, risk_level="medium", disease_type="vector-borne",
            cases=None, trend=None):
    return {
        "name": name,
        "type": disease_type,
        "risk_level": risk_level,
        "symptoms": ["Fever", "Headache"],
        "prevention": ["Use mosquito nets"],
        "affected_locations": [
            {"state": state, "districts": districts or [], "estimated_cases": cases, "trend": trend}
        ],
    }


def llm_payload(*diseases):
    return json.dumps({"diseases": list(diseases)})


class Clock:
    """Callable date source the tests can move forward"""

    def __init__(self, today=TODAY):
        self.today = today

    def __call__(self):
        return self.today


class StubLLM:
    """
    Stands in for GeminiClient. `responses` are returned in order by
    generate(); an exception instance in the list is raised instead.
    """

    def __init__(self, responses=None, chat_reply="Drink plenty of fluids and rest."):
        self.responses = list(responses or [])
        self.chat_reply = chat_reply
        self.prompts = []
        self.chats = []
        self.histories = []
        self.images = []
        self.image_reply = "The skin looks red and slightly swollen."

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if not self.responses:
            raise FetchFailed("no scripted response")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def chat(self, user_message, language="en", mode="chat", history=None):
        self.chats.append((user_message, language, mode))
        self.histories.append(list(history or []))
        if isinstance(self.chat_reply, Exception):
            raise self.chat_reply
        return self.chat_reply

    async def analyze_image(self, image, mime_type=None, description="", language="en", mode="symptom_check"):
        self.images.append((image, mime_type, description, language, mode))
        if isinstance(self.chat_reply, Exception):
            raise self.chat_reply
        return self.image_reply


class StubFetcher:
    """Counts fetches per scope; `result` may be a FetchResult or an exception"""

    def __init__(self, result=None):
        self.result = result if result is not None else FetchResult(
            diseases=static_fallback_diseases()[:1], raw_response="{}"
        )
        self.calls = []

    async def fetch_disease_data(self, state_name=None):
        self.calls.append(state_name)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def store():
    store = InMemoryStore()
    run(store.seed_states(INDIAN_STATES))
    return store


@pytest.fixture
def whatsapp():
    return MockWhatsAppService()


@pytest.fixture
def clock():
    return Clock()
