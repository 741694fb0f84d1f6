"""
AWS Secrets Manager lookup for database credentials.
"""
import json
import logging
from botocore.exceptions import ClientError

from app.aws.client import get_aws_client

logger = logging.getLogger(__name__)


def get_secret(secret_name: str, region_name: str = "us-east-1") -> dict:
    """
    Get secret from AWS Secrets Manager and parse as JSON.

    Args:
        secret_name: Name/path of the secret
        region_name: AWS region

    Returns:
        Dict containing the secret key-value pairs

    Raises:
        ClientError: If the secret cannot be retrieved
    """
    client = get_aws_client("secretsmanager", region_name=region_name)
    try:
        response = client.get_secret_value(SecretId=secret_name)
    except ClientError as e:
        code = e.response["Error"]["Code"]
        if code == "ResourceNotFoundException":
            logger.error(f"The requested secret {secret_name} was not found.")
        else:
            logger.error(f"Failed to read secret {secret_name}: {code}")
        raise
    logger.info("Secret retrieved successfully.")
    return json.loads(response["SecretString"])
