import json

import httpx
import pytest

from conftest import run
from healthbot.services.whatsapp_service import WhatsAppService
from healthbot.utils.errors import SendFailed


def make_service(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return WhatsAppService(access_token="token", phone_number_id="12345", client=client)


def test_send_message_posts_text_payload():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"messages": [{"id": "wamid.out"}]})

    result = run(make_service(handler).send_message("919800000001", "Hello"))

    assert result["messages"][0]["id"] == "wamid.out"
    request = requests[0]
    assert request.url.path.endswith("/12345/messages")
    assert request.headers["Authorization"] == "Bearer token"
    assert json.loads(request.content) == {
        "messaging_product": "whatsapp",
        "to": "919800000001",
        "type": "text",
        "text": {"body": "Hello"},
    }


def test_buttons_and_lists_respect_platform_limits():
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={})

    service = make_service(handler)
    buttons = [(f"b{i}", "A very long button title indeed") for i in range(5)]
    run(service.send_interactive_buttons("91", "Pick one", buttons))
    sections = [{"title": "States", "rows": [{"id": f"state_{i}", "title": "x" * 30} for i in range(12)]}]
    run(service.send_interactive_list("91", "Choose", "Choose state", sections))

    action = bodies[0]["interactive"]["action"]
    assert len(action["buttons"]) == 3
    assert all(len(b["reply"]["title"]) <= 20 for b in action["buttons"])

    rows = bodies[1]["interactive"]["action"]["sections"][0]["rows"]
    assert len(rows) == 10
    assert rows[0]["title"] == "x" * 21 + "..."


@pytest.mark.parametrize("status", [400, 401, 500])
def test_error_status_raises_send_failed(status):
    service = make_service(lambda request: httpx.Response(status, json={"error": {"message": "nope"}}))
    with pytest.raises(SendFailed) as excinfo:
        run(service.send_message("919800000001", "Hello"))
    assert excinfo.value.status_code == status
    assert excinfo.value.phone_number == "919800000001"


def test_transport_error_raises_send_failed():
    def handler(request):
        raise httpx.ConnectError("connection refused")

    with pytest.raises(SendFailed):
        run(make_service(handler).send_message("91", "Hello"))


def test_mark_as_read_never_raises():
    service = make_service(lambda request: httpx.Response(500))
    assert run(service.mark_as_read("wamid.1")) is False


def test_download_media():
    def handler(request):
        if request.url.host == "graph.facebook.com":
            return httpx.Response(200, json={"url": "https://lookaside.example/download/blob"})
        return httpx.Response(200, content=b"\x89PNG")

    assert run(make_service(handler).download_media("media-1")) == b"\x89PNG"
