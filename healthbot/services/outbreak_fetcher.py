"""
Outbreak data fetcher: asks Gemini for current disease outbreaks in India or
one state and turns the free-text answer into Disease records.
"""
import json
from typing import List, Optional

from pydantic import ValidationError

from healthbot.main.core.llm_engine import GeminiClient
from healthbot.main.pydantic_models.models import Disease, FetchResult
from healthbot.utils.errors import ParseFailed
from healthbot.utils.gen_utils import local_today
from healthbot.utils.logger import get_alerts_logger

logger = get_alerts_logger()

OUTBREAK_PROMPT = """You are a disease outbreak monitoring system for {location}. Today is {today}.
List the disease outbreaks currently active in {location}, based on health ministry, state health department
and WHO reports from the last 30 days. Prefer emerging, unusual or significant outbreaks over routine seasonal illness.

Respond with JSON only, in exactly this shape:
{{
  "diseases": [
    {{
      "name": "Disease name",
      "type": "vector-borne | respiratory | water-borne | food-borne | contact | zoonotic | other",
      "risk_level": "low | medium | high | critical",
      "symptoms": ["symptom", "..."],
      "safety_measures": ["measure", "..."],
      "prevention": ["method", "..."],
      "transmission": "How it spreads",
      "affected_locations": [
        {{"state": "State name", "districts": ["District"], "estimated_cases": 120, "trend": "increasing | stable | decreasing"}}
      ]
    }}
  ]
}}
If there are no significant outbreaks, return {{"diseases": []}}."""

STATIC_FALLBACK_DISEASES = [
    {
        "name": "Dengue",
        "type": "vector-borne",
        "risk_level": "medium",
        "symptoms": ["High fever", "Severe headache", "Pain behind the eyes", "Joint and muscle pain", "Skin rash"],
        "safety_measures": ["Seek medical care for high fever", "Stay hydrated", "Avoid self-medicating with aspirin"],
        "prevention": ["Remove standing water", "Use mosquito repellent", "Sleep under mosquito nets", "Wear full-sleeve clothing"],
        "transmission": "Bite of infected Aedes mosquitoes",
        "affected_locations": [{"state": "Multiple states", "trend": "stable"}],
    },
    {
        "name": "Seasonal Flu",
        "type": "respiratory",
        "risk_level": "low",
        "symptoms": ["Fever", "Cough", "Sore throat", "Body ache", "Fatigue"],
        "safety_measures": ["Rest at home when unwell", "Drink plenty of fluids", "Consult a doctor if breathing is difficult"],
        "prevention": ["Wash hands frequently", "Cover coughs and sneezes", "Wear a mask in crowded places", "Get the annual flu vaccine"],
        "transmission": "Respiratory droplets from infected people",
        "affected_locations": [{"state": "Nationwide", "trend": "stable"}],
    },
]


def static_fallback_diseases() -> List[Disease]:
    return [Disease.model_validate(item) for item in STATIC_FALLBACK_DISEASES]


def extract_json_block(text: str) -> str:
    """
    Return the first balanced {...} block in text.

    Braces inside JSON strings (including escaped quotes) do not count
    towards the nesting depth.
    """
    if not text:
        raise ParseFailed("Empty response")

    start = text.find("{")
    if start == -1:
        raise ParseFailed("No JSON object in response")

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start:index + 1]

    raise ParseFailed("Unbalanced JSON object in response")


def parse_disease_response(text: str) -> List[Disease]:
    """Parse the model output into diseases; raises ParseFailed"""
    block = extract_json_block(text)
    try:
        payload = json.loads(block)
    except json.JSONDecodeError as e:
        raise ParseFailed(f"Invalid JSON: {e}") from e

    if not isinstance(payload, dict) or not isinstance(payload.get("diseases"), list):
        raise ParseFailed("Response has no 'diseases' array")

    diseases = []
    for item in payload["diseases"]:
        try:
            diseases.append(Disease.model_validate(item))
        except ValidationError as e:
            # One malformed record should not discard the rest
            logger.warning(f"Skipping malformed disease record: {e.errors()[:1]}")
    return diseases


class OutbreakFetcher:

    def __init__(self, llm_client: Optional[GeminiClient] = None, clock=None):
        self.llm_client = llm_client or GeminiClient()
        self.clock = clock or local_today

    def build_prompt(self, state_name: Optional[str] = None) -> str:
        location = f"{state_name}, India" if state_name else "India"
        return OUTBREAK_PROMPT.format(location=location, today=self.clock().isoformat())

    async def fetch_disease_data(self, state_name: Optional[str] = None) -> FetchResult:
        """
        Fetch outbreaks for a state or, with no state, all of India.

        FetchFailed from the model propagates. An unparseable or empty answer
        yields the static Dengue/Seasonal Flu list flagged is_fallback.
        """
        scope = state_name or "nationwide"
        raw_response = await self.llm_client.generate(self.build_prompt(state_name))

        try:
            diseases = parse_disease_response(raw_response)
        except ParseFailed as e:
            logger.warning(f"Could not parse outbreak response for {scope}: {str(e)}")
            diseases = []

        if not diseases:
            logger.warning(f"No diseases in outbreak response for {scope}, using static fallback")
            return FetchResult(diseases=static_fallback_diseases(), raw_response=raw_response, is_fallback=True)

        logger.info(f"Fetched {len(diseases)} diseases for {scope}")
        return FetchResult(diseases=diseases, raw_response=raw_response)
