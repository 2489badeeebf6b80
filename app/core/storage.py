import os
import uuid
import logging
from dataclasses import dataclass
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import UploadFile

from .config import settings
from .errors import InvalidInputError, UpstreamFailureError

logger = logging.getLogger(__name__)

IMAGE_ALLOWED_EXTENSIONS = (".jpeg", ".jpg", ".png", ".gif")


@dataclass
class ImageFile:
    """An uploaded file already read into memory"""
    filename: str
    content: bytes
    content_type: Optional[str] = None


async def read_upload(upload: Optional[UploadFile]) -> Optional[ImageFile]:
    """Read a multipart upload into memory; None when no file was sent"""
    if upload is None or not upload.filename:
        return None
    content = await upload.read()
    logger.debug(f"Read {len(content)} bytes from '{upload.filename}'")
    return ImageFile(filename=upload.filename, content=content, content_type=upload.content_type)


def image_extension(filename: Optional[str]) -> Optional[str]:
    """Return the lower-cased extension if it is an allowed image extension"""
    if not filename:
        return None
    extension = os.path.splitext(filename)[1].lower()
    return extension if extension in IMAGE_ALLOWED_EXTENSIONS else None


def validate_image(file: Optional[ImageFile]) -> str:
    extension = image_extension(file.filename) if file else None
    if not extension:
        raise InvalidInputError(
            f"Image is required and must have one of the following extensions: {'/'.join(IMAGE_ALLOWED_EXTENSIONS)}"
        )
    return extension


class S3ObjectStore:
    """Stores images in S3-compatible buckets and hands out time-bounded URLs"""

    def __init__(self, client=None):
        self.client = client or boto3.client(
            "s3",
            region_name=settings.AWS_REGION,
            endpoint_url=settings.S3_ENDPOINT_URL or None,
        )
        self.expires_in = settings.IMAGE_URL_EXPIRES_IN

    def store(self, bucket: str, type_: str, file: ImageFile) -> str:
        """Upload a file and return its key, `{type}-{uuid}{ext}`"""
        extension = validate_image(file)
        key = f"{type_}-{uuid.uuid4()}{extension}"
        logger.info(f"Uploading '{file.filename}' to bucket '{bucket}' with key '{key}'")
        try:
            self.client.put_object(
                Bucket=bucket,
                Key=key,
                Body=file.content,
                ContentType=file.content_type or "application/octet-stream",
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to upload '{key}' to bucket '{bucket}': {e}")
            raise UpstreamFailureError(f"Failed to upload image: {e}") from e
        return key

    def resolve(self, bucket: str, key: str) -> str:
        try:
            return self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": bucket, "Key": key},
                ExpiresIn=self.expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to resolve '{key}' in bucket '{bucket}': {e}")
            raise UpstreamFailureError(f"Failed to resolve image URL: {e}") from e


# Global instance for app-wide usage
object_store = S3ObjectStore()
