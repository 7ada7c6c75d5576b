import re
from typing import Dict, List, Optional

from healthbot.main.pydantic_models.models import AlertPreference, CanonicalState
from healthbot.utils.errors import DatabaseError
from healthbot.utils.logger import get_alerts_logger

logger = get_alerts_logger()

PINCODE_PATTERN = re.compile(r"^\d{6}$")


def parse_location(text: str) -> Dict[str, Optional[str]]:
    """Split 'State, District, Pincode' input; district and pincode are optional"""
    parts = [part.strip() for part in (text or "").split(",") if part.strip()]
    location = {"state": None, "district": None, "pincode": None}
    if not parts:
        return location

    location["state"] = parts[0]
    rest = parts[1:]
    if rest and PINCODE_PATTERN.match(rest[-1]):
        location["pincode"] = rest.pop()
    if rest:
        location["district"] = ", ".join(rest)
    return location


class AlertPreferencesService:
    """
    Registration, lookup and removal of per-user alert preferences.

    Every registration resolves the user's state to a canonical record and
    stores its id, so alert lookups never rely on free-text state names.
    """

    def __init__(self, store):
        self.store = store

    async def get_preference(self, phone_number: str) -> Optional[AlertPreference]:
        try:
            row = await self.store.get_alert_preference(phone_number)
        except DatabaseError as e:
            # Treated as "not registered" so the user is offered registration again
            logger.error(f"Failed to read alert preference for {phone_number}: {str(e)}")
            return None
        return AlertPreference.model_validate(row) if row else None

    async def get_user_selected_state(self, phone_number: str) -> Optional[CanonicalState]:
        preference = await self.get_preference(phone_number)
        if preference is None or preference.selected_state_id is None:
            return None
        return await self.get_state(preference.selected_state_id)

    async def is_registered(self, phone_number: str) -> bool:
        """True only for an enabled preference pointing at a known state"""
        preference = await self.get_preference(phone_number)
        if preference is None or not preference.alert_enabled:
            return False
        if preference.selected_state_id is None:
            return False
        return await self.get_state(preference.selected_state_id) is not None

    async def get_state(self, state_id: int) -> Optional[CanonicalState]:
        row = await self.store.get_state(state_id)
        return CanonicalState.model_validate(row) if row else None

    async def resolve_state(self, name: str) -> Optional[CanonicalState]:
        row = await self.store.find_state_by_name(name)
        return CanonicalState.model_validate(row) if row else None

    async def search_states(self, query: Optional[str] = None) -> List[CanonicalState]:
        rows = await self.store.list_states(query)
        return [CanonicalState.model_validate(row) for row in rows]

    async def register_state(self, phone_number: str, state_id: int) -> Optional[AlertPreference]:
        """Register or re-point alerts to a canonical state; None if the id is unknown"""
        state = await self.get_state(state_id)
        if state is None:
            logger.warning(f"Unknown state id {state_id} from {phone_number}")
            return None
        row = await self.store.upsert_alert_preference(
            phone_number,
            {"state": state.name, "selected_state_id": state.id, "alert_enabled": True},
        )
        logger.info(f"Alerts enabled for {phone_number} in {state.name}")
        return AlertPreference.model_validate(row)

    async def register_location(self, phone_number: str, text: str) -> Optional[AlertPreference]:
        """Register from typed 'State, District, Pincode'; None if the state is not recognised"""
        location = parse_location(text)
        if not location["state"]:
            return None
        state = await self.resolve_state(location["state"])
        if state is None:
            logger.info(f"Unrecognised state '{location['state']}' from {phone_number}")
            return None
        row = await self.store.upsert_alert_preference(
            phone_number,
            {
                "state": state.name,
                "district": location["district"],
                "pincode": location["pincode"],
                "selected_state_id": state.id,
                "alert_enabled": True,
            },
        )
        logger.info(f"Alerts enabled for {phone_number} in {state.name} ({location['district'] or 'all districts'})")
        return AlertPreference.model_validate(row)

    async def disable_alerts(self, phone_number: str) -> bool:
        """Keep the row but stop sending alerts"""
        disabled = await self.store.set_alert_enabled(phone_number, False)
        logger.info(f"Alerts disabled for {phone_number}: {disabled}")
        return disabled

    async def delete_alert_data(self, phone_number: str) -> bool:
        """Remove the preference row entirely"""
        deleted = await self.store.delete_alert_preference(phone_number)
        logger.info(f"Alert data deleted for {phone_number}: {deleted}")
        return deleted

    async def list_enabled(self) -> List[AlertPreference]:
        rows = await self.store.list_enabled_alert_preferences()
        return [AlertPreference.model_validate(row) for row in rows]
