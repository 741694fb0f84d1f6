"""
AWS integrations layer.
"""
from app.aws.client import get_aws_client
from app.aws.secrets import get_secret
from app.aws.sns import publish_notification

__all__ = [
    "get_aws_client",
    "get_secret",
    "publish_notification",
]
