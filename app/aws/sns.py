"""
SNS publish helper: postcard events for mobile push fan-out.
"""
import json
import logging
import uuid
from typing import Any, Dict

from app.aws.client import get_aws_client
from app.core.config import settings

logger = logging.getLogger(__name__)


def get_sns_client():
    """SNS client for the configured region."""
    return get_aws_client("sns", region_name=settings.AWS_REGION)


def publish_notification(
    topic_arn: str,
    user_id: uuid.UUID,
    event_type: str,
    payload: Dict[str, Any],
) -> str:
    """
    Publish one event to SNS.

    Subscribers filter on the user_id / event_type message attributes.

    Returns:
        SNS MessageId.
    """
    client = get_sns_client()
    response = client.publish(
        TopicArn=topic_arn,
        Message=json.dumps({"event": event_type, "user_id": str(user_id), "payload": payload}, default=str),
        MessageAttributes={
            "user_id": {"DataType": "String", "StringValue": str(user_id)},
            "event_type": {"DataType": "String", "StringValue": event_type},
        },
    )
    message_id = response.get("MessageId", "")
    logger.info(f"Published {event_type} for user {user_id} -> {message_id}")
    return message_id
