from twilio.base.exceptions import TwilioRestException

from teapot.infrastructure.notification_service import NotificationService, format_order_message
from tests.conftest import make_order


class StubMessages:
    def __init__(self, fail=False):
        self.fail = fail
        self.created = []

    def create(self, **kwargs):
        if self.fail:
            raise TwilioRestException(status=400, uri="/Messages", msg="bad number")
        self.created.append(kwargs)


class StubClient:
    def __init__(self, fail=False):
        self.messages = StubMessages(fail)


def enabled_service(fail=False) -> NotificationService:
    service = NotificationService("AC123", "token", "+14155238886", "+254712345678")
    service.client = StubClient(fail)
    return service


def test_disabled_without_credentials():
    service = NotificationService()

    assert not service.enabled
    assert service.notify_staff_new_order(make_order()) is False


def test_sends_whatsapp_message_to_staff():
    service = enabled_service()

    assert service.notify_staff_new_order(make_order()) is True

    sent = service.client.messages.created[0]
    assert sent["from_"] == "whatsapp:+14155238886"
    assert sent["to"] == "whatsapp:+254712345678"
    assert "1x Mango Lassi" in sent["body"]


def test_twilio_failure_is_reported_not_raised():
    assert enabled_service(fail=True).notify_staff_new_order(make_order()) is False


def test_message_lists_delivery_and_total():
    body = format_order_message(make_order())

    assert "12 Moi Avenue" in body
    assert "0712345678" in body
    assert "$7.98" in body


def test_transport_failure_is_reported_not_raised():
    service = enabled_service()

    def create(**kwargs):
        raise ConnectionError("Max retries exceeded with url: /2010-04-01/Accounts")

    service.client.messages.create = create

    assert service.notify_staff_new_order(make_order()) is False
