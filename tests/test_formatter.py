from conftest import disease
from healthbot.main.pydantic_models.models import Disease
from healthbot.services.disease_formatter import (
    LOCAL,
    NATIONAL,
    NEARBY,
    STATE,
    calculate_relevance_score,
    format_alert_message,
    format_location_aware_message,
    generate_prevention_summary,
    get_disease_emoji,
    location_priority,
    prevention_categories,
    prioritize_diseases_by_location,
)
from healthbot.utils.language_utils import get_text


def make(name, **kwargs):
    return Disease.model_validate(disease(name, **kwargs))


def test_location_priority():
    local = make("Dengue", state="Telangana", districts=["Hyderabad"])
    state = make("Malaria", state="Telangana")
    nearby = make("Cholera", state="Andhra Pradesh")
    national = make("Scrub Typhus", state="Himachal Pradesh")

    assert location_priority(local, "Telangana", "Hyderabad") == LOCAL
    assert location_priority(state, "Telangana", "Hyderabad") == STATE
    assert location_priority(nearby, "Telangana") == NEARBY
    assert location_priority(national, "Telangana") == NATIONAL
    assert location_priority(local, None) == NATIONAL


def test_relevance_score_orders_equal_priorities():
    quiet = make("Flu", risk_level="low", cases=5)
    loud = make("Dengue", risk_level="high", cases=250, trend="increasing")
    assert calculate_relevance_score(loud) == 20 + 15 + 10
    assert calculate_relevance_score(quiet) == 0

    ranked = prioritize_diseases_by_location([quiet, loud], "Telangana")
    assert [item.disease.name for item in ranked] == ["Dengue", "Flu"]


def test_priority_beats_score():
    far_and_severe = make("Nipah", state="Kerala", risk_level="critical", cases=500)
    local_and_mild = make("Dengue", state="Telangana", districts=["Hyderabad"], risk_level="low")
    ranked = prioritize_diseases_by_location([far_and_severe, local_and_mild], "Telangana", "Hyderabad")
    assert [item.priority for item in ranked] == [LOCAL, NATIONAL]


def test_location_aware_message_sections():
    message = format_location_aware_message(
        [make("Scrub Typhus", state="Himachal Pradesh"), make("Dengue", state="Telangana", districts=["Hyderabad"])],
        state="Telangana",
        district="Hyderabad",
    )
    lines = message.split("\n")
    assert lines[0] == get_text("outbreak_header", "en", location="Hyderabad, Telangana")
    assert "🚨 🦠 *Dengue*" in message
    assert "📍 Location: Hyderabad, Telangana" in message
    assert "🤒 Symptoms: Fever, Headache" in message
    assert "🛡️ Prevention: Use mosquito nets" in message
    assert message.index("*Dengue*") < message.index(get_text("national_header", "en")) < message.index("*Scrub Typhus*")


def test_location_aware_message_without_diseases():
    message = format_location_aware_message([], state="Goa")
    assert get_text("no_outbreaks", "en") in message


def test_prevention_summary_by_category():
    diseases = [make("Dengue"), make("Cholera", disease_type="water-borne")]
    assert prevention_categories(diseases) == ["prevention_vector_borne", "prevention_water_borne"]

    summary = generate_prevention_summary(diseases)
    assert summary.startswith(get_text("prevention_header", "en"))
    assert summary.endswith(get_text("prevention_medical_care", "en"))
    assert generate_prevention_summary([]) == get_text("general_prevention_tips", "en")


def test_prevention_summary_is_localized():
    summary = generate_prevention_summary([make("Dengue")], "ta")
    assert get_text("prevention_vector_borne", "ta") in summary


def test_alert_message_is_capped():
    diseases = [make(f"Disease {index}", state="Kerala") for index in range(8)]
    message = format_alert_message(diseases, state="Kerala", morning=True, max_diseases=5)
    assert message.startswith(get_text("morning_header", "en", location="Kerala"))
    assert message.count("📍 Location:") == 5
    assert "108" in message


def test_disease_emoji():
    assert get_disease_emoji("Dengue Fever") == "🦠"
    assert get_disease_emoji("Malaria") == "🦟"
    assert get_disease_emoji("Nipah virus") == "⚠️"
    assert get_disease_emoji("Unknown") == "🦠"
