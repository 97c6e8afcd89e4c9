import logging
import uuid

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from flask import current_app

from facility_api.exceptions import StorageCleanupFault

logger = logging.getLogger(__name__)


def get_s3_client():
    """Get S3 client with proper configuration."""
    return boto3.client(
        "s3",
        aws_access_key_id=current_app.config.get("AWS_ACCESS_KEY_ID"),
        aws_secret_access_key=current_app.config.get("AWS_SECRET_ACCESS_KEY"),
        region_name=current_app.config.get("AWS_REGION", "us-east-1"),
    )


class StorageService:
    """Image blobs in S3, referenced from rows by their object key."""

    @staticmethod
    def generate_key(prefix, owner_id):
        return f"{prefix}/{owner_id}_{uuid.uuid4()}"

    @staticmethod
    def public_url(uri):
        bucket_name = current_app.config.get("S3_BUCKET_NAME")
        return f"https://{bucket_name}.s3.amazonaws.com/{uri}"

    @staticmethod
    def upload(fileobj, owner_id, content_type, prefix="reviews"):
        """Upload a file object and return the key it was stored under."""
        key = StorageService.generate_key(prefix, owner_id)
        get_s3_client().upload_fileobj(
            fileobj,
            current_app.config.get("S3_BUCKET_NAME"),
            key,
            ExtraArgs={"ACL": "public-read", "ContentType": content_type},
        )
        logger.info("Uploaded %s", key)
        return key

    @staticmethod
    def remove(uri):
        """Remove an object. Raises StorageCleanupFault, never retries."""
        try:
            get_s3_client().delete_object(Bucket=current_app.config.get("S3_BUCKET_NAME"), Key=uri)
        except (BotoCoreError, ClientError) as e:
            raise StorageCleanupFault(uri, e) from e
        logger.info("Removed %s", uri)
