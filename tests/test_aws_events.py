import json
import logging
from decimal import Decimal

import boto3
import pytest
from botocore.stub import Stubber, ANY

from gameverse_lib import checkout_items, report_checkout, log_checkout, send_checkout_event_to_sqs

QUEUE_URL = "https://sqs.eu-west-1.amazonaws.com/123456789012/gameverse-checkout"


@pytest.fixture()
def sqs():
    return boto3.client(
        "sqs",
        region_name="eu-west-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


def test_checkout_items(ledger):
    items = checkout_items(ledger)
    assert items[1] == {"game_id": 2, "title": "Hollow Knight", "quantity": 2, "price": "14.99"}
    assert len(items) == 3


def test_send_checkout_event(sqs, ledger):
    stubber = Stubber(sqs)
    stubber.add_response(
        "send_message",
        {"MessageId": "msg-1", "MD5OfMessageBody": "d41d8cd98f00b204e9800998ecf8427e"},
        {"QueueUrl": QUEUE_URL, "MessageBody": ANY},
    )

    with stubber:
        send_checkout_event_to_sqs(Decimal("154.97"), checkout_items(ledger), queue_url=QUEUE_URL, sqs=sqs)

    stubber.assert_no_pending_responses()


def test_send_checkout_event_payload(ledger):
    sent = {}

    class FakeSqs:
        def send_message(self, QueueUrl, MessageBody):
            sent["url"] = QueueUrl
            sent["body"] = json.loads(MessageBody)

    send_checkout_event_to_sqs(Decimal("84.98"), checkout_items(ledger), queue_url=QUEUE_URL, sqs=FakeSqs())

    assert sent["url"] == QUEUE_URL
    assert sent["body"]["total"] == "84.98"
    assert sent["body"]["source"] == "gameverse"
    assert len(sent["body"]["items"]) == 3


def test_send_checkout_event_wraps_client_errors(sqs):
    stubber = Stubber(sqs)
    stubber.add_client_error("send_message", service_error_code="QueueDoesNotExist")

    with stubber, pytest.raises(RuntimeError, match="Failed to send checkout event"):
        send_checkout_event_to_sqs(Decimal("1.00"), [], queue_url=QUEUE_URL, sqs=sqs)


def test_send_checkout_event_requires_queue(monkeypatch):
    import gameverse_lib.aws_events as aws_events
    monkeypatch.setattr(aws_events, "SQS_QUEUE_URL", None)

    with pytest.raises(RuntimeError, match="SQS_QUEUE_URL"):
        send_checkout_event_to_sqs(Decimal("1.00"), [])


def test_report_checkout_defaults_to_logging(caplog):
    with caplog.at_level(logging.INFO, logger="gameverse.events"):
        total = report_checkout(Decimal("84.98"), [{"game_id": 1}])

    assert total == Decimal("84.98")
    assert "total=84.98" in caplog.text


def test_report_checkout_survives_handler_failure(caplog):
    def broken(total, items):
        raise RuntimeError("queue down")

    with caplog.at_level(logging.ERROR, logger="gameverse.events"):
        total = report_checkout(Decimal("5.00"), [], handler=broken)

    assert total == Decimal("5.00")
    assert "queue down" in caplog.text


def test_log_checkout_returns_none():
    assert log_checkout(Decimal("0.00"), []) is None
