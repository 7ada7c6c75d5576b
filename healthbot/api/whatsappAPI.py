import hashlib
import hmac
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse

from healthbot.api.dependencies import get_message_controller
from healthbot.main.pydantic_models.models import InboundMessage, MediaData
from healthbot.services.conversation_service import MEDIA_TYPES
from healthbot.utils.settings import settings
from healthbot.utils.logger import get_api_logger

logger = get_api_logger()

router = APIRouter(prefix="/webhook", tags=["WHATSAPP"])


def verify_signature(raw_body: bytes, signature: Optional[str], app_secret: str) -> bool:
    """Check the X-Hub-Signature-256 header ("sha256=<hex>") against the raw body"""
    if not signature or not signature.startswith("sha256="):
        return False
    expected = hmac.new(app_secret.encode(), raw_body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, signature[len("sha256="):])


def _timestamp(value: Any) -> datetime:
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (TypeError, ValueError):
        return datetime.now(timezone.utc)


def parse_message(message: Dict[str, Any]) -> Optional[InboundMessage]:
    """Unwrap one Cloud API message; returns None for unsupported types"""
    message_type = message.get("type")
    fields = {
        "phone_number": message.get("from", ""),
        "message_id": message.get("id", ""),
        "timestamp": _timestamp(message.get("timestamp")),
        "context": message.get("context"),
    }

    if message_type == "text":
        return InboundMessage(type="text", content=message.get("text", {}).get("body", ""), **fields)

    if message_type == "interactive":
        interactive = message.get("interactive", {})
        kind = interactive.get("type")
        if kind in ("button_reply", "list_reply"):
            return InboundMessage(type=kind, content=interactive.get(kind, {}).get("id", ""), **fields)
        return None

    if message_type in MEDIA_TYPES:
        media = message.get(message_type, {})
        media_data = MediaData(
            id=media.get("id", ""),
            mime_type=media.get("mime_type"),
            sha256=media.get("sha256"),
            filename=media.get("filename"),
        )
        return InboundMessage(type=message_type, content=media.get("caption", ""), media_data=media_data, **fields)

    return None


def parse_webhook_payload(body: Dict[str, Any]) -> List[InboundMessage]:
    """
    Extract the inbound messages from a webhook envelope.

    Status updates (sent, delivered, read) are logged and dropped.
    """
    if body.get("object") != "whatsapp_business_account":
        logger.warning(f"Ignoring webhook for object '{body.get('object')}'")
        return []

    messages = []
    for entry in body.get("entry", []):
        for change in entry.get("changes", []):
            if change.get("field") != "messages":
                continue
            value = change.get("value", {})
            for status in value.get("statuses", []):
                logger.info(f"Message {status.get('id')} to {status.get('recipient_id')}: {status.get('status')}")
            for raw in value.get("messages", []):
                message = parse_message(raw)
                if message is None:
                    logger.warning(f"Unsupported message type '{raw.get('type')}' from {raw.get('from')}")
                    continue
                messages.append(message)
    return messages


async def process_messages(controller, messages: List[InboundMessage]):
    for message in messages:
        try:
            await controller.handle_message(message)
        except Exception as e:
            logger.error(f"Failed to process message {message.message_id} from {message.phone_number}: {str(e)}")


@router.get("", response_class=PlainTextResponse)
async def verify_webhook(
    mode: Optional[str] = Query(None, alias="hub.mode"),
    token: Optional[str] = Query(None, alias="hub.verify_token"),
    challenge: Optional[str] = Query(None, alias="hub.challenge"),
):
    """Meta's subscription handshake: echo the challenge when the token matches"""
    if mode == "subscribe" and token and token == settings.WHATSAPP_VERIFY_TOKEN:
        logger.info("Webhook verified")
        return PlainTextResponse(challenge or "")
    logger.warning("Webhook verification failed")
    raise HTTPException(status_code=403, detail="Verification failed")


@router.post("")
async def receive_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    controller=Depends(get_message_controller),
):
    """
    Acknowledge the delivery right away and handle the messages in the
    background so Meta does not retry on slow AI replies.
    """
    raw_body = await request.body()
    if settings.WHATSAPP_APP_SECRET:
        signature = request.headers.get("X-Hub-Signature-256")
        if not verify_signature(raw_body, signature, settings.WHATSAPP_APP_SECRET):
            logger.warning("Rejected webhook with invalid signature")
            raise HTTPException(status_code=403, detail="Invalid signature")

    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON body")
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Invalid webhook envelope")

    messages = parse_webhook_payload(body)
    if messages:
        background_tasks.add_task(process_messages, controller, messages)
    return {"status": "received", "messages": len(messages)}
