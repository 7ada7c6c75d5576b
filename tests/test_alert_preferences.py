import pytest

from conftest import run
from healthbot.services.alert_preferences_service import AlertPreferencesService, parse_location
from healthbot.utils.errors import DatabaseError

PHONE = "919876543210"


@pytest.mark.parametrize("text, expected", [
    ("Telangana", {"state": "Telangana", "district": None, "pincode": None}),
    ("Telangana, Hyderabad", {"state": "Telangana", "district": "Hyderabad", "pincode": None}),
    ("Telangana, Hyderabad, 500001", {"state": "Telangana", "district": "Hyderabad", "pincode": "500001"}),
    ("Kerala , 682001", {"state": "Kerala", "district": None, "pincode": "682001"}),
    ("", {"state": None, "district": None, "pincode": None}),
])
def test_parse_location(text, expected):
    assert parse_location(text) == expected


def test_register_twice_keeps_one_row(store):
    service = AlertPreferencesService(store)
    run(service.register_state(PHONE, 14))
    preference = run(service.register_state(PHONE, 12))

    assert len(store.preferences) == 1
    assert preference.state == "Kerala"
    assert preference.selected_state_id == 12
    assert preference.alert_enabled


def test_register_location_resolves_canonical_state(store):
    service = AlertPreferencesService(store)
    preference = run(service.register_location(PHONE, "  tamil   nadu , Chennai, 600001"))

    assert preference.state == "Tamil Nadu"
    assert preference.selected_state_id == 23
    assert preference.district == "Chennai"
    assert preference.pincode == "600001"


def test_unknown_state_is_rejected(store):
    service = AlertPreferencesService(store)
    assert run(service.register_location(PHONE, "Atlantis, Capital")) is None
    assert run(service.register_state(PHONE, 999)) is None
    assert store.preferences == {}


def test_delete_then_lookup_returns_nothing(store):
    service = AlertPreferencesService(store)
    run(service.register_state(PHONE, 14))
    assert run(service.is_registered(PHONE))

    assert run(service.delete_alert_data(PHONE))

    assert run(service.get_user_selected_state(PHONE)) is None
    assert not run(service.is_registered(PHONE))


def test_disable_keeps_row_but_unregisters(store):
    service = AlertPreferencesService(store)
    run(service.register_state(PHONE, 14))

    assert run(service.disable_alerts(PHONE))

    assert PHONE in store.preferences
    assert not run(service.is_registered(PHONE))
    assert run(service.list_enabled()) == []


def test_read_failure_counts_as_not_registered(store, monkeypatch):
    async def broken(phone_number):
        raise DatabaseError("timeout")

    service = AlertPreferencesService(store)
    run(service.register_state(PHONE, 14))
    monkeypatch.setattr(store, "get_alert_preference", broken)

    assert run(service.get_preference(PHONE)) is None
    assert not run(service.is_registered(PHONE))


def test_search_states(store):
    service = AlertPreferencesService(store)
    names = [state.name for state in run(service.search_states("pradesh"))]
    assert names == ["Andhra Pradesh", "Arunachal Pradesh", "Himachal Pradesh", "Madhya Pradesh", "Uttar Pradesh"]
    assert len(run(service.search_states())) == 36
