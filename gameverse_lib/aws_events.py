import os
import json
import logging
from datetime import datetime, timezone
from decimal import Decimal

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger("gameverse.events")

AWS_REGION = os.environ.get("AWS_REGION", "eu-west-1")
SQS_QUEUE_URL = os.environ.get("SQS_QUEUE_URL")


def get_sqs_client():
    """
    Return a boto3 SQS client.
    """
    return boto3.client("sqs", region_name=AWS_REGION)


def checkout_items(ledger) -> list:
    """
    Summarise cart lines for a checkout event.

    Prices are sent as strings so the receiver sees exact amounts.
    """
    return [
        {
            "game_id": item.entry_id,
            "title": item.entry.name,
            "quantity": item.quantity,
            "price": str(item.entry.price),
        }
        for item in ledger
    ]


def build_checkout_payload(total: Decimal, items: list) -> dict:
    return {
        "total": str(total),
        "items": items,
        "created_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "source": "gameverse",
    }


def log_checkout(total: Decimal, items: list) -> None:
    """
    Default checkout handler: record the total and do nothing else.
    """
    logger.info("Checkout requested: total=%s lines=%d", total, len(items))


def send_checkout_event_to_sqs(total: Decimal, items: list, queue_url: str = None, sqs=None) -> None:
    """
    Send a checkout event message to SQS.

    items is expected to be a list of dicts as built by checkout_items().
    """
    queue_url = queue_url or SQS_QUEUE_URL
    if not queue_url:
        raise RuntimeError("SQS_QUEUE_URL environment variable is not set.")

    if sqs is None:
        sqs = get_sqs_client()

    payload = build_checkout_payload(total, items)

    try:
        sqs.send_message(
            QueueUrl=queue_url,
            MessageBody=json.dumps(payload),
        )
    except (BotoCoreError, ClientError) as e:
        raise RuntimeError(f"Failed to send checkout event to SQS: {e}") from e

    logger.info("Checkout event queued: total=%s", total)


def default_checkout_handler():
    """Pick the SQS handler when a queue is configured, otherwise just log."""
    if SQS_QUEUE_URL:
        return send_checkout_event_to_sqs
    return log_checkout


def report_checkout(total: Decimal, items: list, handler=None) -> Decimal:
    """
    Hand the cart total to a checkout handler and return it.

    A failing handler is not fatal: the error is logged and the checkout
    still goes through.
    """
    if handler is None:
        handler = log_checkout
    try:
        handler(total, items)
    except RuntimeError as e:
        logger.error("Checkout handler error: %s", e)
    return total
