import json

import httpx

from mentorship.config import Settings
from mentorship.services.notifications import (
    Notification,
    NotificationKind,
    Recipient,
    RecipientRole,
    SendGridGateway,
)


def make_settings(**overrides) -> Settings:
    values = {
        "sendgrid_api_key": "SG.test",
        "template_upcoming_session_mentor": "d-mentor",
        "template_upcoming_session_mentee": "d-mentee",
        "notify_from_email": "info@example.com",
    }
    values.update(overrides)
    return Settings(**values)


NOTIFICATION = Notification(
    kind=NotificationKind.UPCOMING_SESSION,
    key="session:1",
    recipients=(
        Recipient("Max", "max@example.com", RecipientRole.MENTEE),
        Recipient("Mia", "mia@example.com", RecipientRole.MENTOR),
    ),
    data={"meetingLink": "https://meet/x"},
)


def test_one_templated_email_per_recipient():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(202)

    gateway = SendGridGateway(make_settings(), transport=httpx.MockTransport(handler))
    assert gateway.send(NOTIFICATION) is True

    assert len(requests) == 2
    assert requests[0].url.path == "/v3/mail/send"
    assert requests[0].headers["authorization"] == "Bearer SG.test"
    bodies = [json.loads(r.content) for r in requests]
    assert [b["template_id"] for b in bodies] == ["d-mentee", "d-mentor"]
    assert bodies[0]["personalizations"][0]["to"] == [{"email": "max@example.com", "name": "Max"}]
    assert bodies[0]["personalizations"][0]["dynamic_template_data"] == {"meetingLink": "https://meet/x"}


def test_provider_rejection_returns_false():
    gateway = SendGridGateway(
        make_settings(),
        transport=httpx.MockTransport(lambda request: httpx.Response(401, text="bad key")),
    )
    assert gateway.send(NOTIFICATION) is False


def test_transport_error_returns_false():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    gateway = SendGridGateway(make_settings(), transport=httpx.MockTransport(handler))
    assert gateway.send(NOTIFICATION) is False


def test_unconfigured_gateway_skips():
    calls = []
    gateway = SendGridGateway(
        make_settings(sendgrid_api_key=""),
        transport=httpx.MockTransport(lambda request: calls.append(request) or httpx.Response(202)),
    )
    assert gateway.send(NOTIFICATION) is False
    assert calls == []
