"""
Presentation of outbreak data: ranking diseases by closeness to the user,
per-disease message blocks, category-based prevention advice and the
scheduled alert text.
"""
from dataclasses import dataclass
from typing import List, Optional

from healthbot.main.pydantic_models.models import Disease
from healthbot.utils.indian_states import NEARBY_STATES, normalize_name
from healthbot.utils.language_utils import get_text
from healthbot.utils.settings import settings

LOCAL, STATE, NEARBY, NATIONAL = 1, 2, 3, 4

PRIORITY_INDICATORS = {
    LOCAL: "🚨",
    STATE: "⚠️",
    NEARBY: "📍",
    NATIONAL: "🔍",
}

RISK_SCORES = {"critical": 30, "high": 20, "medium": 10, "low": 0}
TREND_SCORES = {"increasing": 10, "rising": 10, "stable": 2}

DISEASE_EMOJIS = [
    ("nipah", "⚠️"),
    ("dengue", "🦠"),
    ("flu", "🤒"),
    ("influenza", "🤒"),
    ("fever", "🌡️"),
    ("malaria", "🦟"),
    ("covid", "😷"),
]

PREVENTION_CATEGORIES = [
    ("prevention_vector_borne", ("vector", "mosquito"),
     ("dengue", "chikungunya", "malaria", "zika", "japanese encephalitis", "filaria")),
    ("prevention_respiratory", ("respiratory", "airborne", "droplet"),
     ("covid", "h1n1", "h3n2", "influenza", "flu", "tuberculosis", "pneumonia", "hmpv")),
    ("prevention_water_borne", ("water",),
     ("cholera", "typhoid", "hepatitis", "diarrhea", "diarrhoea", "dysentery", "gastroenteritis", "amoeba")),
    ("prevention_food_borne", ("food",),
     ("food poisoning", "salmonella", "hepatitis a")),
    ("prevention_contact", ("contact", "skin"),
     ("conjunctivitis", "skin infection", "scabies", "ringworm", "mpox")),
    ("prevention_zoonotic", ("zoonotic", "animal"),
     ("nipah", "bird flu", "h5n1", "anthrax", "rabies", "melioidosis", "scrub typhus", "leptospirosis")),
]


@dataclass
class RankedDisease:
    disease: Disease
    priority: int
    relevance_score: int


def get_disease_emoji(name: str) -> str:
    lowered = (name or "").lower()
    for keyword, emoji in DISEASE_EMOJIS:
        if keyword in lowered:
            return emoji
    return "🦠"


def calculate_relevance_score(disease: Disease) -> int:
    """Higher for riskier, larger and growing outbreaks"""
    score = RISK_SCORES.get(disease.risk_level, 0)
    cases = max((loc.estimated_cases or 0 for loc in disease.affected_locations), default=0)
    if cases > 100:
        score += 15
    elif cases > 50:
        score += 10
    elif cases > 10:
        score += 5
    trends = {(location.trend or "").lower() for location in disease.affected_locations}
    score += max((TREND_SCORES.get(trend, 0) for trend in trends), default=0)
    return score


def location_priority(disease: Disease, state: Optional[str], district: Optional[str] = None) -> int:
    if not state:
        return NATIONAL
    location = disease.location_text.lower()
    user_state = normalize_name(state)
    if district and normalize_name(district) in location:
        return LOCAL
    if user_state in location:
        return STATE
    if any(neighbour in location for neighbour in NEARBY_STATES.get(user_state, [])):
        return NEARBY
    return NATIONAL


def prioritize_diseases_by_location(diseases: List[Disease], state: Optional[str] = None,
                                    district: Optional[str] = None) -> List[RankedDisease]:
    """Sort by priority (1 = district match) then by relevance score, highest first"""
    ranked = [
        RankedDisease(disease, location_priority(disease, state, district), calculate_relevance_score(disease))
        for disease in diseases
    ]
    return sorted(ranked, key=lambda item: (item.priority, -item.relevance_score))


def format_disease(ranked: RankedDisease, max_items: int = 4) -> str:
    disease = ranked.disease
    indicator = PRIORITY_INDICATORS[ranked.priority]
    lines = [f"{indicator} {get_disease_emoji(disease.name)} *{disease.name}*"]
    if disease.location_text:
        lines.append(f"📍 Location: {disease.location_text}")
    if disease.symptoms:
        lines.append(f"🤒 Symptoms: {', '.join(disease.symptoms[:max_items])}")
    prevention = disease.prevention_methods or disease.safety_measures
    if prevention:
        lines.append(f"🛡️ Prevention: {', '.join(prevention[:max_items])}")
    return "\n".join(lines)


def format_location_aware_message(diseases: List[Disease], state: Optional[str] = None,
                                  district: Optional[str] = None, language: str = "en") -> str:
    """
    Full outbreak overview for one user: local and state outbreaks first,
    then a separate section for the rest of India.
    """
    location = ", ".join(part for part in (district, state) if part) or "India"
    header = get_text("outbreak_header", language, location=location)
    if not diseases:
        return f"{header}\n\n{get_text('no_outbreaks', language)}"

    sections = [header]
    national_started = False
    for ranked in prioritize_diseases_by_location(diseases, state, district):
        if ranked.priority == NATIONAL and state and not national_started and len(sections) > 1:
            sections.append(get_text("national_header", language))
            national_started = True
        sections.append(format_disease(ranked))
    return "\n\n".join(sections)


def prevention_categories(diseases: List[Disease]) -> List[str]:
    found = []
    for key, type_keywords, name_keywords in PREVENTION_CATEGORIES:
        for disease in diseases:
            name = disease.name.lower()
            disease_type = (disease.disease_type or "").lower()
            if any(k in disease_type for k in type_keywords) or any(k in name for k in name_keywords):
                found.append(key)
                break
    return found


def generate_prevention_summary(diseases: List[Disease], language: str = "en") -> str:
    """Prevention advice for the categories present, always ending with medical care"""
    if not diseases:
        return get_text("general_prevention_tips", language)
    lines = [get_text("prevention_header", language)]
    lines.extend(get_text(key, language) for key in prevention_categories(diseases))
    lines.append(get_text("prevention_medical_care", language))
    return "\n".join(lines)


def format_alert_message(diseases: List[Disease], state: Optional[str] = None, district: Optional[str] = None,
                         language: str = "en", morning: bool = False, max_diseases: int = 5) -> str:
    """Text pushed by scheduled alerts and the morning summary"""
    location = ", ".join(part for part in (district, state) if part) or "India"
    header_key = "morning_header" if morning else "alert_header"
    parts = [get_text(header_key, language, location=location)]

    ranked = prioritize_diseases_by_location(diseases, state, district)[:max_diseases]
    if ranked:
        parts.extend(format_disease(item, max_items=3) for item in ranked)
        parts.append(generate_prevention_summary([item.disease for item in ranked], language))
    else:
        parts.append(get_text("no_outbreaks", language))

    parts.append(get_text("alert_footer", language, number=settings.EMERGENCY_NUMBER))
    return "\n\n".join(parts)
