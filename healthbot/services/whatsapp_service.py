from typing import Any, Dict, List, Optional, Sequence, Union

import httpx

from healthbot.utils.errors import SendFailed
from healthbot.utils.gen_utils import truncate
from healthbot.utils.settings import settings
from healthbot.utils.logger import get_api_logger

logger = get_api_logger()

# WhatsApp Cloud API limits
MAX_BUTTONS = 3
BUTTON_TITLE_LIMIT = 20
LIST_ROW_TITLE_LIMIT = 24
LIST_ROW_DESCRIPTION_LIMIT = 72
LIST_MAX_ROWS = 10
BODY_TEXT_LIMIT = 1024

Button = Union[Dict[str, str], Sequence[str]]


def _button(item: Button) -> Dict[str, Any]:
    button_id, title = (item["id"], item["title"]) if isinstance(item, dict) else item
    return {"type": "reply", "reply": {"id": button_id, "title": title[:BUTTON_TITLE_LIMIT]}}


def _row(item: Dict[str, str]) -> Dict[str, str]:
    row = {"id": item["id"], "title": truncate(item["title"], LIST_ROW_TITLE_LIMIT)}
    if item.get("description"):
        row["description"] = truncate(item["description"], LIST_ROW_DESCRIPTION_LIMIT)
    return row


class WhatsAppService:
    """
    Client for the WhatsApp Cloud (Graph) API.

    Every send raises SendFailed on a transport error or non-2xx response.
    """

    def __init__(self, access_token: Optional[str] = None, phone_number_id: Optional[str] = None,
                 client: Optional[httpx.AsyncClient] = None):
        self.access_token = access_token or settings.WHATSAPP_ACCESS_TOKEN
        self.phone_number_id = phone_number_id or settings.WHATSAPP_PHONE_NUMBER_ID
        self.base_url = f"{settings.WHATSAPP_API_BASE_URL}/{settings.WHATSAPP_API_VERSION}"
        self.client = client or httpx.AsyncClient()

    @property
    def headers(self):
        return {"Authorization": f"Bearer {self.access_token}", "Content-Type": "application/json"}

    async def close(self):
        await self.client.aclose()

    async def _post_message(self, to: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        body = {"messaging_product": "whatsapp", "to": to, **payload}
        url = f"{self.base_url}/{self.phone_number_id}/messages"
        try:
            response = await self.client.post(url, json=body, headers=self.headers)
        except httpx.HTTPError as e:
            logger.error(f"Error sending WhatsApp message to {to}: {str(e)}")
            raise SendFailed(f"Transport error: {e}", phone_number=to) from e

        if response.is_error:
            logger.error(f"WhatsApp API rejected message to {to}: {response.status_code} {response.text}")
            raise SendFailed(
                f"WhatsApp API returned {response.status_code}", phone_number=to, status_code=response.status_code
            )
        return response.json()

    async def send_message(self, to: str, message: str) -> Dict[str, Any]:
        result = await self._post_message(to, {"type": "text", "text": {"body": message}})
        logger.info(f"Sent WhatsApp message to {to}")
        return result

    async def send_interactive_buttons(self, to: str, text: str, buttons: List[Button],
                                       header: Optional[str] = None) -> Dict[str, Any]:
        interactive = {
            "type": "button",
            "body": {"text": truncate(text, BODY_TEXT_LIMIT) or "."},
            "action": {"buttons": [_button(item) for item in buttons[:MAX_BUTTONS]]},
        }
        if header:
            interactive["header"] = {"type": "text", "text": header}
        return await self._post_message(to, {"type": "interactive", "interactive": interactive})

    async def send_interactive_list(self, to: str, text: str, button_text: str,
                                    sections: List[Dict[str, Any]], header: Optional[str] = None) -> Dict[str, Any]:
        """
        Send a list message. Sections are {"title": ..., "rows": [{"id", "title", "description"?}]};
        rows past the platform limit of ten are dropped.
        """
        remaining = LIST_MAX_ROWS
        payload_sections = []
        for section in sections:
            rows = [_row(row) for row in section.get("rows", [])[:remaining]]
            if not rows:
                continue
            remaining -= len(rows)
            payload_sections.append({"title": truncate(section.get("title", ""), LIST_ROW_TITLE_LIMIT), "rows": rows})

        interactive = {
            "type": "list",
            "body": {"text": truncate(text, BODY_TEXT_LIMIT)},
            "action": {"button": button_text[:BUTTON_TITLE_LIMIT], "sections": payload_sections},
        }
        if header:
            interactive["header"] = {"type": "text", "text": header}
        return await self._post_message(to, {"type": "interactive", "interactive": interactive})

    async def mark_as_read(self, message_id: str) -> bool:
        """Best effort read receipt; failures are logged, never raised"""
        url = f"{self.base_url}/{self.phone_number_id}/messages"
        body = {"messaging_product": "whatsapp", "status": "read", "message_id": message_id}
        try:
            response = await self.client.post(url, json=body, headers=self.headers)
            response.raise_for_status()
            return True
        except httpx.HTTPError as e:
            logger.warning(f"Could not mark message {message_id} as read: {str(e)}")
            return False

    async def get_media_url(self, media_id: str) -> str:
        try:
            response = await self.client.get(f"{self.base_url}/{media_id}", headers=self.headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Error resolving media {media_id}: {str(e)}")
            raise SendFailed(f"Could not resolve media {media_id}: {e}") from e
        return response.json()["url"]

    async def download_media(self, media_id: str) -> bytes:
        url = await self.get_media_url(media_id)
        try:
            response = await self.client.get(url, headers={"Authorization": f"Bearer {self.access_token}"})
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Error downloading media {media_id}: {str(e)}")
            raise SendFailed(f"Could not download media {media_id}: {e}") from e
        return response.content


class MockWhatsAppService:
    """Records outbound messages instead of calling the Graph API (MOCK_WHATSAPP=true and tests)"""

    def __init__(self, fail_for: Optional[Sequence[str]] = None):
        self.sent: List[Dict[str, Any]] = []
        self.read: List[str] = []
        self.fail_for = set(fail_for or [])

    def _record(self, to: str, kind: str, **fields) -> Dict[str, Any]:
        if to in self.fail_for:
            raise SendFailed("Mock send failure", phone_number=to)
        entry = {"to": to, "type": kind, **fields}
        self.sent.append(entry)
        logger.info(f"[mock] {kind} to {to}")
        return {"messages": [{"id": f"mock-{len(self.sent)}"}]}

    async def close(self):
        return None

    async def send_message(self, to: str, message: str) -> Dict[str, Any]:
        return self._record(to, "text", text=message)

    async def send_interactive_buttons(self, to: str, text: str, buttons: List[Button],
                                       header: Optional[str] = None) -> Dict[str, Any]:
        rendered = [_button(item)["reply"] for item in buttons[:MAX_BUTTONS]]
        return self._record(to, "buttons", text=text, buttons=rendered, header=header)

    async def send_interactive_list(self, to: str, text: str, button_text: str,
                                    sections: List[Dict[str, Any]], header: Optional[str] = None) -> Dict[str, Any]:
        rows = [_row(row) for section in sections for row in section.get("rows", [])][:LIST_MAX_ROWS]
        return self._record(to, "list", text=text, button_text=button_text, rows=rows, header=header)

    async def mark_as_read(self, message_id: str) -> bool:
        self.read.append(message_id)
        return True

    async def get_media_url(self, media_id: str) -> str:
        return f"https://mock.local/media/{media_id}"

    async def download_media(self, media_id: str) -> bytes:
        return f"mock-media:{media_id}".encode()

    def messages_to(self, phone_number: str) -> List[Dict[str, Any]]:
        return [entry for entry in self.sent if entry["to"] == phone_number]
