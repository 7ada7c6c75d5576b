import asyncio
from typing import Any, Dict, List, Optional, Union

import google.generativeai as genai

from healthbot.utils.errors import FetchFailed
from healthbot.utils.settings import settings
from healthbot.utils.logger import get_llm_logger

logger = get_llm_logger()

# System prompt for the health assistant
SYSTEM_PROMPT = """You're a helpful public health assistant for people in India, chatting over WhatsApp.
Be kind, clear, and concise. Keep answers short enough to read on a phone.
Always prioritize patient safety. If a question suggests a serious medical condition, advise consulting a healthcare professional
or calling the emergency number {emergency_number}.
Provide general information only and clarify you're not a substitute for professional medical advice."""

MODE_PROMPTS = {
    "chat": "Answer the user's health question.",
    "symptom_check": (
        "The user is describing symptoms. List the likely common causes, the warning signs that need a doctor, "
        "and simple home care. Do not give a diagnosis."
    ),
    "preventive_tips": "Give practical preventive health tips for the topic the user mentions.",
}

IMAGE_PROMPT = """The user sent a photo. Describe what you can see that matters for their health in two or three sentences,
list two or three possible common causes, ask one or two follow-up questions, and say how urgently they should see a doctor
(low, medium or high). Do not give a diagnosis."""

ROLE_LABELS = {
    "user": "User",
    "assistant": "Assistant",
}

LANGUAGE_NAMES = {
    "en": "English",
    "hi": "Hindi",
    "te": "Telugu",
    "ta": "Tamil",
    "or": "Odia",
}


class GeminiClient:
    """
    Thin async wrapper around a Gemini generative model.

    Every call is retried a bounded number of times; when all attempts fail
    FetchFailed is raised so callers can fall back to cached or canned content.
    """

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None,
                 max_retries: Optional[int] = None, retry_delay: Optional[float] = None):
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model_name = model_name or settings.GEMINI_MODEL
        self.max_retries = max_retries if max_retries is not None else settings.GEMINI_MAX_RETRIES
        self.retry_delay = retry_delay if retry_delay is not None else settings.GEMINI_RETRY_DELAY_SECONDS
        self._model = None

    def _get_model(self):
        if self._model is None:
            if not self.api_key:
                raise FetchFailed("GEMINI_API_KEY is not configured")
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
            logger.info(f"Using Gemini model {self.model_name}")
        return self._model

    async def generate(self, contents: Union[str, List[Any]]) -> str:
        """Send a prompt (or a list of prompt parts, e.g. text plus an image blob) and return the response text"""
        model = self._get_model()
        last_error = None

        for attempt in range(1, self.max_retries + 1):
            try:
                response = await model.generate_content_async(contents)
                text = (response.text or "").strip()
                if not text:
                    raise ValueError("empty response")
                return text
            except Exception as e:
                last_error = e
                logger.warning(f"Gemini attempt {attempt}/{self.max_retries} failed: {str(e)}")
                if attempt < self.max_retries:
                    await asyncio.sleep(self.retry_delay)

        logger.error(f"Gemini request failed after {self.max_retries} attempts: {last_error}")
        raise FetchFailed(f"Gemini request failed after {self.max_retries} attempts: {last_error}")

    def _persona(self, language: str, mode: str) -> List[str]:
        language_name = LANGUAGE_NAMES.get(language, "English")
        return [
            SYSTEM_PROMPT.format(emergency_number=settings.EMERGENCY_NUMBER),
            MODE_PROMPTS.get(mode, MODE_PROMPTS["chat"]),
            f"Reply only in {language_name}.",
        ]

    async def chat(self, user_message: str, language: str = "en", mode: str = "chat",
                   history: Optional[List[Dict[str, str]]] = None) -> str:
        """
        Pass a user message through to the model with the assistant persona, a
        task hint for the current menu, a reply-language instruction and the
        last few exchanges of the conversation.
        """
        parts = self._persona(language, mode)
        recent = (history or [])[-settings.CHAT_HISTORY_MESSAGES:]
        if recent:
            lines = [f"{ROLE_LABELS.get(item.get('role'), 'User')}: {item.get('text', '')}" for item in recent]
            parts.append("Previous conversation:\n" + "\n".join(lines))
        parts.append(f"User: {user_message}")
        return await self.generate("\n\n".join(parts))

    async def analyze_image(self, image: bytes, mime_type: Optional[str] = None, description: str = "",
                            language: str = "en", mode: str = "symptom_check") -> str:
        """Describe a health-related photo sent by the user, with their caption as context"""
        if not image:
            raise FetchFailed("No image data to analyze")
        parts = self._persona(language, mode)
        parts.append(IMAGE_PROMPT)
        if description:
            parts.append(f"The user says: {description}")
        blob = {"mime_type": mime_type or "image/jpeg", "data": image}
        return await self.generate(["\n\n".join(parts), blob])
